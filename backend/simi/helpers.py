from __future__ import annotations

from typing import Any

from .context import ModelContext, normalize_key
from .models.base import Model
from .models.collection import ModelCollection
from .models.content import ModelArticle, ModelCategory, ModelPage
from .services import registry_prop


def _lookup(cls: type[Model], context: ModelContext, record_id: Any) -> Model | ModelCollection | None:
    key = normalize_key(record_id)
    if key is None or (isinstance(key, int) and key < 0):
        return cls.listing(context)
    return cls.by_id(context, key)


def articles(context: ModelContext, record_id: Any = -1) -> ModelArticle | ModelCollection | None:
    """
    articles(ctx) -> every article; articles(ctx, 3) -> article 3 or None.
    """
    return _lookup(ModelArticle, context, record_id)  # type: ignore[return-value]


def categories(context: ModelContext, record_id: Any = -1) -> ModelCategory | ModelCollection | None:
    return _lookup(ModelCategory, context, record_id)  # type: ignore[return-value]


def pages(context: ModelContext, record_id: Any = -1) -> ModelPage | ModelCollection | None:
    return _lookup(ModelPage, context, record_id)  # type: ignore[return-value]


def is_category(context: ModelContext) -> bool:
    return context.urls.current_url().startswith(context.settings.category_prefix)


def current_category_slug(context: ModelContext) -> str:
    if not is_category(context):
        return ""
    return context.urls.current_url()[len(context.settings.category_prefix) :]


def posts_page_url(context: ModelContext) -> str:
    return context.urls.base_url(registry_prop(context.registry, context.settings.posts_page_key, "slug"))
