from __future__ import annotations

import re
from enum import Enum
from typing import Any


class Operator(str, Enum):
    IDENTICAL = "==="
    NOT_IDENTICAL = "!=="
    EQUAL = "=="
    NOT_EQUAL = "!="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="

    @classmethod
    def parse(cls, raw: Any) -> Operator | None:
        if isinstance(raw, Operator):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip())
        except ValueError:
            return None


_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_number(value: Any) -> float | int | None:
    """
    Numeric view of a value: numbers as-is, numeric strings parsed, anything else None.
    """
    if _is_number(value):
        return value
    if isinstance(value, str) and _NUMERIC_RE.match(value):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            return float(text)
    return None


def _truthy(value: Any) -> bool:
    """
    PHP truthiness: "0" and "" are false along with 0, 0.0, None and empty containers.
    """
    if isinstance(value, str):
        return value not in {"", "0"}
    return bool(value)


def _identical(left: Any, right: Any) -> bool:
    return type(left) is type(right) and left == right


def _loose_equal(left: Any, right: Any) -> bool:
    if left is None or right is None:
        other = right if left is None else left
        return other is None or not other
    if isinstance(left, bool) or isinstance(right, bool):
        return _truthy(left) == _truthy(right)

    left_num = _as_number(left)
    right_num = _as_number(right)
    # "3" == 3 and "1e3" == "1000", like PHP numeric strings.
    if left_num is not None and right_num is not None:
        return left_num == right_num
    return left == right


def _ordering_pair(left: Any, right: Any) -> tuple[Any, Any] | None:
    left_num = _as_number(left)
    right_num = _as_number(right)
    if left_num is not None and right_num is not None:
        return left_num, right_num

    if left is None:
        left = 0 if _is_number(right) else ""
    if right is None:
        right = 0 if _is_number(left) else ""
    if isinstance(left, bool) or isinstance(right, bool):
        return _truthy(left), _truthy(right)
    if isinstance(left, str) and isinstance(right, str):
        return left, right
    if _is_number(left) and _is_number(right):
        return left, right
    return None


def compare(operator: Operator | str, left: Any, right: Any) -> bool:
    """
    Evaluate `left <operator> right` without evaluating any text as code.

    Raises ValueError for an operator outside the supported set.
    """
    op = Operator.parse(operator)
    if op is None:
        raise ValueError(f"Unsupported comparison operator: {operator!r}")

    if op is Operator.IDENTICAL:
        return _identical(left, right)
    if op is Operator.NOT_IDENTICAL:
        return not _identical(left, right)
    if op is Operator.EQUAL:
        return _loose_equal(left, right)
    if op is Operator.NOT_EQUAL:
        return not _loose_equal(left, right)

    pair = _ordering_pair(left, right)
    if pair is None:
        return False
    a, b = pair
    try:
        if op is Operator.GREATER:
            return a > b
        if op is Operator.GREATER_EQUAL:
            return a >= b
        if op is Operator.LESS:
            return a < b
        return a <= b
    except TypeError:
        return False
