from __future__ import annotations

from abc import ABCMeta, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

from ..context import ModelContext
from ..services import ExtensionField, registry_prop
from .base import M, Model


class ContentModel(Model, metaclass=ABCMeta):
    """
    Abstract base for models built with a context. Computes `url` and merges extension fields once, at construction.
    """

    extension_kind: ClassVar[str | None] = None

    def __init__(self, attributes: Mapping[str, Any] | None = None, *, context: ModelContext) -> None:
        super().__init__(attributes)
        self.set("url", self.build_url(context))
        if self.extension_kind:
            self._merge_extension_fields(context)

    @abstractmethod
    def build_url(self, context: ModelContext) -> str: ...

    def _merge_extension_fields(self, context: ModelContext) -> None:
        for item in context.extensions.fields_for(self.extension_kind, self.id):
            field = item if isinstance(item, ExtensionField) else ExtensionField.model_validate(item)
            self.set(field.key, field.selected())

    @classmethod
    def _create(cls: type[M], context: ModelContext, record: Mapping[str, Any]) -> M:
        return cls(record, context=context)


class ModelArticle(ContentModel):
    table = "posts"
    extension_kind = "post"

    def build_url(self, context: ModelContext) -> str:
        posts_slug = registry_prop(context.registry, context.settings.posts_page_key, "slug")
        return context.urls.base_url(f"{posts_slug}/{self.get('slug')}")


class ModelCategory(ContentModel):
    table = "categories"

    def build_url(self, context: ModelContext) -> str:
        return context.urls.base_url(f"{context.settings.category_prefix}{self.get('slug')}")


class ModelPage(ContentModel):
    table = "pages"
    extension_kind = "page"

    def build_url(self, context: ModelContext) -> str:
        return context.urls.base_url(str(self.get("slug")))
