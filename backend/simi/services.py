"""
Collaborators consumed by the model layer.

Only the call contracts live here, plus small in-memory implementations that
tests and the HTTP app can wire in. Real deployments pass their own store,
extension provider and registry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]


class RecordStore(Protocol):
    def fetch_by_id(self, table: str, record_id: Any) -> Record | None: ...

    def fetch_all(self, table: str) -> Sequence[Record]: ...


class ExtensionField(BaseModel):
    key: str
    field: str  # selects which representation in `value` to use
    value: dict[str, Any] = Field(default_factory=dict)

    def selected(self) -> Any:
        picked = self.value.get(self.field)
        return "" if picked is None else picked


class ExtensionProvider(Protocol):
    def fields_for(self, kind: str, record_id: Any) -> Sequence[ExtensionField | Mapping[str, Any]]: ...


class Registry(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...


class MemoryRecordStore:
    """
    Dict-backed RecordStore. Keeps fetch counters so callers can observe cache behaviour.
    """

    def __init__(self, tables: Mapping[str, Iterable[Record]] | None = None) -> None:
        self._tables: dict[str, list[dict[str, Any]]] = {}
        for table, rows in (tables or {}).items():
            self._tables[table] = [dict(r) for r in rows]
        self.fetch_by_id_calls = 0
        self.fetch_all_calls = 0

    def insert(self, table: str, record: Record) -> None:
        self._tables.setdefault(table, []).append(dict(record))

    def fetch_by_id(self, table: str, record_id: Any) -> Record | None:
        self.fetch_by_id_calls += 1
        for row in self._tables.get(table, []):
            if str(row.get("id")) == str(record_id):
                return dict(row)
        return None

    def fetch_all(self, table: str) -> list[Record]:
        self.fetch_all_calls += 1
        rows = self._tables.get(table)
        if rows is None:
            logger.debug("fetch_all on unknown table %r", table)
            return []
        return [dict(r) for r in rows]


class MemoryExtensionProvider:
    def __init__(self, fields: Mapping[tuple[str, Any], Iterable[ExtensionField | Mapping[str, Any]]] | None = None) -> None:
        self._fields: dict[tuple[str, str], list[ExtensionField]] = {}
        for (kind, record_id), items in (fields or {}).items():
            for item in items:
                self.add(kind, record_id, item)

    def add(self, kind: str, record_id: Any, item: ExtensionField | Mapping[str, Any]) -> None:
        field = item if isinstance(item, ExtensionField) else ExtensionField(**item)
        self._fields.setdefault((kind, str(record_id)), []).append(field)

    def fields_for(self, kind: str, record_id: Any) -> list[ExtensionField]:
        return list(self._fields.get((kind, str(record_id)), []))


class MemoryRegistry:
    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def prop(self, key: str, name: str, default: Any = "") -> Any:
        return registry_prop(self, key, name, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value


def registry_prop(registry: Registry, key: str, name: str, default: Any = "") -> Any:
    """
    Read `name` off the registry value stored under `key` (attribute or mapping entry).
    """
    holder = registry.get(key)
    if holder is None:
        return default
    if isinstance(holder, Mapping):
        value = holder.get(name)
    elif hasattr(holder, "get") and callable(holder.get):
        # Models expose get(name, default)
        value = holder.get(name, None)
    else:
        value = getattr(holder, name, None)
    return default if value is None else value


class UrlHelper:
    def __init__(self, base_url: str = "/", current_uri: str = "") -> None:
        self._base = base_url or "/"
        self._current = current_uri or ""

    def base_url(self, path: str = "") -> str:
        tail = str(path or "").lstrip("/")
        return self._base.rstrip("/") + "/" + tail

    def current_url(self) -> str:
        path = self._current.split("?", 1)[0]
        return path.strip("/")
