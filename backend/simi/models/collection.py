from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from functools import cmp_to_key
from typing import Any

from ..context import normalize_key
from .base import _MISSING, Model, to_text

logger = logging.getLogger(__name__)


def _strcmp(a: str, b: str) -> int:
    return (a > b) - (a < b)


class ModelCollection:
    """
    Ordered, id-keyed group of models with chainable operations for templates:

        articles.filter("status", "published").sort("date", True).limit(5).format(tpl)

    Mutating operations change the collection in place and return it; `map`,
    `format`, `count`, `first`, `last` and `value` return plain values.
    """

    def __init__(self, records: Mapping[Any, Model] | Iterable[Model] = ()) -> None:
        self._records: dict[Any, Model] = {}
        items = records.values() if isinstance(records, Mapping) else records
        for model in items:
            if not isinstance(model, Model):
                raise TypeError(f"ModelCollection holds Model instances, got {type(model).__name__}")
            self._records[model.key] = model

    def _replace(self, models: Iterable[Model]) -> None:
        self._records = {m.key: m for m in models}

    # chainable operations

    def each(self, function: Callable[[Model], Any] | Any) -> ModelCollection:
        if callable(function):
            for model in list(self._records.values()):
                function(model)
        return self

    def filter(self, name: Callable[[Model], Any] | str, op: Any = _MISSING, value: Any = _MISSING) -> ModelCollection:
        """
        Keep models for which `name(model)` is truthy, or when `name` is an
        attribute name, for which `model.test(name, op, value)` holds.
        """
        if callable(name):
            self._replace(m for m in self._records.values() if name(m))
            return self
        if op is _MISSING:
            raise TypeError("filter() takes a predicate, or an attribute name with an operator and/or value")
        return self.filter_by(name, op, value)

    def filter_by(self, name: str, op: Any, value: Any = _MISSING) -> ModelCollection:
        """
        filter_by("status", "published") keeps models whose status == "published";
        filter_by("views", ">", 10) uses an explicit operator.
        """
        self._replace(m for m in self._records.values() if m.test(name, op, value))
        return self

    def limit(self, num: int) -> ModelCollection:
        self._replace(list(self._records.values())[: int(num)])
        return self

    def reverse(self) -> ModelCollection:
        self._replace(reversed(list(self._records.values())))
        return self

    def sort(self, cmp: Callable[[Model, Model], int] | str, descending: bool = False) -> ModelCollection:
        if callable(cmp):
            ordered = sorted(self._records.values(), key=cmp_to_key(cmp))
        else:
            name = cmp
            ordered = sorted(
                self._records.values(),
                key=cmp_to_key(lambda a, b: _strcmp(to_text(a.get(name, None)), to_text(b.get(name, None)))),
            )
        self._replace(ordered)

        if descending:
            self.reverse()
        return self

    def assign(self, name: str, value: Any) -> ModelCollection:
        return self.each(lambda model: model.set(name, value))

    # values

    def first(self) -> Model | None:
        for model in self._records.values():
            return model
        return None

    def last(self) -> Model | None:
        if not self._records:
            return None
        return next(reversed(self._records.values()))

    def value(self, name: str) -> Any:
        first = self.first()
        return first.get(name, None) if first is not None else ""

    def map(self, function: Callable[[Model], Any] | str) -> list[Any]:
        if callable(function):
            return [function(m) for m in self._records.values()]
        return [m.get(function, None) for m in self._records.values()]

    def format(self, template: str, separator: str = "\n") -> str:
        return separator.join(m.format(template) for m in self._records.values())

    def count(self) -> int:
        return len(self._records)

    # keyed access

    def get(self, record_id: Any, default: Model | None = None) -> Model | None:
        return self._records.get(normalize_key(record_id), default)

    def has(self, record_id: Any) -> bool:
        return normalize_key(record_id) in self._records

    def remove(self, record_id: Any) -> ModelCollection:
        self._records.pop(normalize_key(record_id), None)
        return self

    def keys(self) -> list[Any]:
        return list(self._records.keys())

    def values(self) -> list[Model]:
        return list(self._records.values())

    def items(self) -> list[tuple[Any, Model]]:
        return list(self._records.items())

    def __getitem__(self, record_id: Any) -> Model | None:
        return self.get(record_id)

    def __setitem__(self, record_id: Any, model: Any) -> None:
        logger.warning("Ignoring direct insertion of %r into ModelCollection", record_id)

    def __delitem__(self, record_id: Any) -> None:
        self.remove(record_id)

    def __contains__(self, record_id: object) -> bool:
        return self.has(record_id)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Model]:
        return iter(list(self._records.values()))

    def __repr__(self) -> str:
        return f"ModelCollection({self.keys()!r})"
