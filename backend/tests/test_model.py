import unittest

from backend.simi.models.base import Model


class TestModelAttributes(unittest.TestCase):
    def setUp(self) -> None:
        self.model = Model({"id": 3, "slug": "hello", "title": "Hello", "draft": None})

    def test_get_unset_returns_default(self) -> None:
        self.assertEqual(self.model.get("missing"), "")
        self.assertEqual(self.model.get("missing", "d"), "d")
        self.assertIsNone(self.model["missing"])

    def test_none_value_counts_as_set(self) -> None:
        self.assertTrue(self.model.has("draft"))
        self.assertIsNone(self.model.get("draft", "d"))

    def test_set_and_attributes_copy(self) -> None:
        self.model.set("title", "Changed")
        attrs = self.model.attributes
        attrs["title"] = "not written back"
        self.assertEqual(self.model.get("title"), "Changed")
        self.assertEqual(list(attrs)[:3], ["id", "slug", "title"])

    def test_id_and_key(self) -> None:
        self.assertEqual(self.model.id, 3)
        self.assertEqual(Model({"id": "7"}).key, 7)
        self.assertIsNone(Model().id)


class TestModelTest(unittest.TestCase):
    def setUp(self) -> None:
        self.model = Model({"id": 1, "views": "12", "status": "published"})

    def test_unset_attribute_is_false(self) -> None:
        for op in ["==", "!=", "<", "!=="]:
            self.assertFalse(self.model.test("missing", op, 1))

    def test_two_argument_form_means_equal(self) -> None:
        self.assertTrue(self.model.test("status", "published"))
        self.assertFalse(self.model.test("status", "draft"))

    def test_explicit_operator(self) -> None:
        self.assertTrue(self.model.test("views", ">", 10))
        self.assertFalse(self.model.test("views", "===", 12))
        self.assertTrue(self.model.test("views", "===", "12"))

    def test_string_flags_against_booleans(self) -> None:
        self.assertTrue(Model({"id": 1, "published": "0"}).test("published", "==", False))
        self.assertFalse(Model({"id": 1, "published": "0"}).test("published", True))

    def test_unknown_operator_is_false(self) -> None:
        self.assertFalse(self.model.test("views", "~", 12))
        self.assertFalse(self.model.test("views", "); import os; (", 12))


class TestModelApplyAndFormat(unittest.TestCase):
    def test_apply_calls_function(self) -> None:
        model = Model({"id": 1, "title": "x"})
        self.assertEqual(model.apply(lambda m: m.get("title").upper()), "X")

    def test_apply_non_callable_is_noop(self) -> None:
        self.assertIsNone(Model({"id": 1}).apply("not a function"))

    def test_format_replaces_placeholders(self) -> None:
        model = Model({"slug": "hello", "id": 3})
        self.assertEqual(model.format("{{ slug }}-{{ id }}"), "hello-3")

    def test_format_without_placeholders_is_identity(self) -> None:
        template = "<p>{{slug}} stays, {{ unknown }} too</p>"
        self.assertEqual(Model({"slug": "a"}).format(template), template)

    def test_format_does_not_rescan_substituted_text(self) -> None:
        for attrs in ({"a": "{{ b }}", "b": "B"}, {"b": "B", "a": "{{ b }}"}):
            self.assertEqual(Model(attrs).format("{{ a }} {{ b }}"), "{{ b }} B")

    def test_format_value_rendering(self) -> None:
        model = Model({"on": True, "off": False, "none": None, "tags": ["a", "b"]})
        self.assertEqual(model.format("[{{ on }}|{{ off }}|{{ none }}|{{ tags }}]"), '[1|||["a","b"]]')


if __name__ == "__main__":
    unittest.main()
