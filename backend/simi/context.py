from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .config import Settings
from .services import ExtensionProvider, MemoryExtensionProvider, MemoryRegistry, RecordStore, Registry, UrlHelper

if TYPE_CHECKING:
    from .models.base import Model
    from .models.collection import ModelCollection

logger = logging.getLogger(__name__)


def normalize_key(value: Any) -> Any:
    """
    Collection/cache key for an id: digit strings become ints so "3" and 3 address the same record.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit() or (text.startswith("-") and text[1:].isdigit()):
            return int(text)
    return value


@dataclass
class ModelCache:
    # table -> {id -> Model}
    records: dict[str, dict[Any, Model]] = field(default_factory=dict)
    # table -> full listing, populated on first listing request
    listings: dict[str, ModelCollection] = field(default_factory=dict)

    def lookup(self, table: str, record_id: Any) -> Model | None:
        key = normalize_key(record_id)
        listing = self.listings.get(table)
        if listing is not None and listing.has(key):
            return listing.get(key)
        return self.records.get(table, {}).get(key)

    def remember(self, table: str, model: Model) -> None:
        self.records.setdefault(table, {})[model.key] = model

    def listing(self, table: str) -> ModelCollection | None:
        return self.listings.get(table)

    def store_listing(self, table: str, collection: ModelCollection) -> None:
        self.listings[table] = collection

    def clear(self) -> None:
        self.records.clear()
        self.listings.clear()


@dataclass
class ModelContext:
    """
    Everything a model lookup needs for one request: collaborators, settings and an identity map.

    Build one per request and drop it afterwards; nothing in the cache is ever invalidated.
    """

    store: RecordStore
    extensions: ExtensionProvider = field(default_factory=MemoryExtensionProvider)
    registry: Registry = field(default_factory=MemoryRegistry)
    urls: UrlHelper = field(default_factory=UrlHelper)
    settings: Settings = field(default_factory=Settings)
    cache: ModelCache = field(default_factory=ModelCache)

    def table(self, name: str) -> str:
        return f"{self.settings.table_prefix}{name}"


def new_context(
    *,
    store: RecordStore,
    extensions: ExtensionProvider | None = None,
    registry: Registry | None = None,
    settings: Settings | None = None,
    current_uri: str = "",
) -> ModelContext:
    settings = settings or Settings()
    ctx = ModelContext(
        store=store,
        extensions=extensions if extensions is not None else MemoryExtensionProvider(),
        registry=registry if registry is not None else MemoryRegistry(),
        urls=UrlHelper(settings.base_url, current_uri),
        settings=settings,
    )
    logger.debug("New model context (current_uri=%r)", current_uri)
    return ctx
