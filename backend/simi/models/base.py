from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from ..context import ModelContext, normalize_key
from .compare import Operator, compare

if TYPE_CHECKING:
    from .collection import ModelCollection

logger = logging.getLogger(__name__)

M = TypeVar("M", bound="Model")

_MISSING: Any = object()


def to_text(value: Any) -> str:
    """
    String form used for template substitution and string sorting.
    """
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, str):
        return value
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
    return str(value)


class Model:
    """
    Wrapper around one stored record: an ordered attribute bag plus an `id`.

    Reading an unset attribute never fails; `get` returns the given default.
    Concrete subclasses set `table` and compute derived attributes in `__init__`.
    """

    table: ClassVar[str] = ""

    def __init__(self, attributes: Mapping[str, Any] | None = None) -> None:
        self._attributes: dict[str, Any] = {}
        for k, v in (attributes or {}).items():
            self._attributes[str(k)] = v

    # attribute bag

    def get(self, name: str, default: Any = "") -> Any:
        if name in self._attributes:
            return self._attributes[name]
        return default

    def set(self, name: str, value: Any) -> None:
        self._attributes[name] = value

    def has(self, name: str) -> bool:
        return name in self._attributes

    @property
    def attributes(self) -> dict[str, Any]:
        return dict(self._attributes)

    @property
    def id(self) -> Any:
        return self._attributes.get("id")

    @property
    def key(self) -> Any:
        return normalize_key(self.id)

    def __getitem__(self, name: str) -> Any:
        return self.get(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._attributes))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"

    # behaviour

    def apply(self, function: Callable[[Model], Any] | Any) -> Any:
        if callable(function):
            return function(self)
        return None

    def format(self, template: str) -> str:
        """
        Replace every "{{ key }}" with the attribute's text in a single pass;
        substituted values are never scanned for further placeholders.
        """
        if not self._attributes or "{{ " not in template:
            return template
        tokens = {"{{ " + k + " }}": v for k, v in self._attributes.items()}
        pattern = re.compile("|".join(re.escape(t) for t in sorted(tokens, key=len, reverse=True)))
        return pattern.sub(lambda m: to_text(tokens[m.group(0)]), template)

    def test(self, name: str, op: Any, value: Any = _MISSING) -> bool:
        """
        Compare an attribute against a value, e.g. test("status", "==", "published").

        With two arguments the operator is "==": test("status", "published").
        Unset attributes and unknown operators yield False.
        """
        if not self.has(name):
            return False
        if value is _MISSING:
            op, value = Operator.EQUAL, op

        operator = Operator.parse(op)
        if operator is None:
            logger.debug("test(%r): unsupported operator %r", name, op)
            return False
        return compare(operator, self._attributes[name], value)

    # lookups

    @classmethod
    def _create(cls: type[M], context: ModelContext, record: Mapping[str, Any]) -> M:
        return cls(record)

    @classmethod
    def by_id(cls: type[M], context: ModelContext, record_id: Any) -> M | None:
        if not isinstance(context, ModelContext):
            raise TypeError(f"{cls.__name__}.by_id expects a ModelContext, got {type(context).__name__}")

        table = context.table(cls.table)
        cached = context.cache.lookup(table, record_id)
        if cached is not None:
            logger.debug("Cache hit %s[%r]", table, record_id)
            return cached  # type: ignore[return-value]

        logger.debug("Cache miss %s[%r]; fetching", table, record_id)
        record = context.store.fetch_by_id(table, record_id)
        if not record:
            return None

        model = cls._create(context, record)
        if context.settings.cache_single_lookups:
            context.cache.remember(table, model)
        return model

    @classmethod
    def listing(cls, context: ModelContext) -> ModelCollection:
        from .collection import ModelCollection

        if not isinstance(context, ModelContext):
            raise TypeError(f"{cls.__name__}.listing expects a ModelContext, got {type(context).__name__}")

        table = context.table(cls.table)
        cached = context.cache.listing(table)
        if cached is not None:
            return cached

        rows = context.store.fetch_all(table)
        logger.debug("Fetched %d rows from %s", len(rows), table)
        collection = ModelCollection(cls._create(context, row) for row in rows)
        context.cache.store_listing(table, collection)
        return collection
