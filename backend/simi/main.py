from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from pydantic import BaseModel, Field

from .config import Settings, load_settings
from .context import ModelContext, new_context
from .models.base import Model
from .models.collection import ModelCollection
from .models.content import ModelArticle, ModelCategory, ModelPage
from .services import ExtensionProvider, MemoryExtensionProvider, MemoryRegistry, RecordStore, Registry

logger = logging.getLogger(__name__)

KINDS: dict[str, type[Model]] = {
    "articles": ModelArticle,
    "categories": ModelCategory,
    "pages": ModelPage,
}


class ModelNotFound(LookupError):
    def __init__(self, kind: str, record_id: Any) -> None:
        super().__init__(f"No {kind} record with id {record_id!r}")
        self.kind = kind
        self.record_id = record_id


class WhereClause(BaseModel):
    name: str
    op: str = "=="
    value: Any = None


class RenderRequest(BaseModel):
    template: str = Field(..., description="Template with {{ key }} placeholders")
    separator: str | None = None
    sort: str | None = None
    descending: bool = False
    limit: int | None = Field(default=None, ge=0)
    where: list[WhereClause] = Field(default_factory=list)


class RenderResponse(BaseModel):
    output: str
    count: int


def _model_class(kind: str) -> type[Model]:
    cls = KINDS.get(kind)
    if cls is None:
        raise HTTPException(status_code=404, detail=f"Unknown kind: {kind}")
    return cls


def _shape(
    collection: ModelCollection,
    *,
    sort: str | None,
    descending: bool,
    limit: int | None,
) -> ModelCollection:
    # Listings are cached on the context; work on a copy so the cached order survives.
    shaped = ModelCollection(collection.values())
    if sort:
        shaped.sort(sort, descending)
    elif descending:
        shaped.reverse()
    if limit is not None:
        shaped.limit(limit)
    return shaped


def find_model(context: ModelContext, kind: str, record_id: Any) -> Model:
    model = _model_class(kind).by_id(context, record_id)
    if model is None:
        raise ModelNotFound(kind, record_id)
    return model


def create_app(
    *,
    store: RecordStore,
    extensions: ExtensionProvider | None = None,
    registry: Registry | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    app = FastAPI(title="Simi Content API")
    app.state.settings = settings or load_settings()
    app.state.store = store
    app.state.extensions = extensions if extensions is not None else MemoryExtensionProvider()
    app.state.registry = registry if registry is not None else MemoryRegistry()

    def get_settings() -> Settings:
        return app.state.settings

    def get_context(request: Request, settings: Settings = Depends(get_settings)) -> Iterator[ModelContext]:
        context = new_context(
            store=app.state.store,
            extensions=app.state.extensions,
            registry=app.state.registry,
            settings=settings,
            current_uri=request.url.path,
        )
        try:
            yield context
        finally:
            context.cache.clear()

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/content/{kind}")
    def list_content(
        kind: str,
        sort: str | None = None,
        descending: bool = False,
        limit: int | None = Query(default=None, ge=0),
        context: ModelContext = Depends(get_context),
    ) -> dict[str, list[dict[str, Any]]]:
        listing = _model_class(kind).listing(context)
        shaped = _shape(listing, sort=sort, descending=descending, limit=limit)
        return {"items": shaped.map(lambda m: m.attributes)}

    @app.get("/content/{kind}/{record_id}")
    def get_content(
        kind: str,
        record_id: str,
        context: ModelContext = Depends(get_context),
    ) -> dict[str, Any]:
        try:
            return find_model(context, kind, record_id).attributes
        except ModelNotFound as e:
            raise HTTPException(status_code=404, detail=str(e)) from e

    @app.post("/render/{kind}", response_model=RenderResponse)
    def render(
        kind: str,
        req: RenderRequest,
        context: ModelContext = Depends(get_context),
    ) -> RenderResponse:
        listing = _model_class(kind).listing(context)
        shaped = ModelCollection(listing.values())
        for clause in req.where:
            shaped.filter_by(clause.name, clause.op, clause.value)
        shaped = _shape(shaped, sort=req.sort, descending=req.descending, limit=req.limit)

        separator = req.separator if req.separator is not None else context.settings.format_separator
        logger.debug("Rendering %d %s", shaped.count(), kind)
        return RenderResponse(output=shaped.format(req.template, separator), count=shaped.count())

    return app
