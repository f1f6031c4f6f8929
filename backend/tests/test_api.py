import unittest

from fastapi.testclient import TestClient

from backend.simi.config import Settings
from backend.simi.main import create_app
from backend.simi.services import MemoryExtensionProvider, MemoryRecordStore, MemoryRegistry


class TestContentApi(unittest.TestCase):
    def setUp(self):
        self.store = MemoryRecordStore(
            {
                "posts": [
                    {"id": 1, "slug": "b-post", "title": "B", "status": "published"},
                    {"id": 2, "slug": "a-post", "title": "A", "status": "draft"},
                    {"id": 3, "slug": "c-post", "title": "C", "status": "published"},
                ],
                "pages": [{"id": 7, "slug": "blog", "title": "Blog"}],
            }
        )
        extensions = MemoryExtensionProvider(
            {("post", 1): [{"key": "summary", "field": "text", "value": {"text": "Short"}}]}
        )
        app = create_app(
            store=self.store,
            extensions=extensions,
            registry=MemoryRegistry({"posts_page": {"slug": "blog"}}),
            settings=Settings(),
        )
        self.client = TestClient(app)

    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})

    def test_list_content(self):
        response = self.client.get("/content/articles", params={"sort": "title", "limit": 2})
        self.assertEqual(response.status_code, 200)
        items = response.json()["items"]
        self.assertEqual([i["title"] for i in items], ["A", "B"])
        self.assertEqual(items[1]["url"], "/blog/b-post")
        self.assertEqual(items[1]["summary"], "Short")

    def test_negative_limit_rejected(self):
        response = self.client.get("/content/articles", params={"limit": -1})
        self.assertEqual(response.status_code, 422)

    def test_each_request_gets_a_fresh_cache(self):
        self.client.get("/content/pages")
        self.client.get("/content/pages")
        self.assertEqual(self.store.fetch_all_calls, 2)

    def test_get_content(self):
        response = self.client.get("/content/pages/7")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["title"], "Blog")

    def test_get_content_missing_returns_404(self):
        response = self.client.get("/content/pages/99")
        self.assertEqual(response.status_code, 404)
        self.assertIn("No pages record", response.json()["detail"])

    def test_unknown_kind_returns_404(self):
        self.assertEqual(self.client.get("/content/widgets").status_code, 404)

    def test_render(self):
        response = self.client.post(
            "/render/articles",
            json={
                "template": "<li>{{ title }}</li>",
                "separator": "",
                "sort": "title",
                "descending": True,
                "where": [{"name": "status", "op": "==", "value": "published"}],
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"output": "<li>C</li><li>B</li>", "count": 2})


if __name__ == "__main__":
    unittest.main()
