"""
Typed lookups into untyped webhook JSON.

Payloads arrive as plain decoded JSON (dict / list / str / int / float /
bool / None). Every lookup here is an explicit traversal: a path step only
descends into a dict (str key) or a list (int index), and anything missing,
null or of the wrong container type yields MISSING. Absence is never
inferred from falsy values, so 0, "" and False are real values.

Attributes are resolved from an ordered tuple of paths, first present wins.
Leaf values are then converted with as_text / as_height / as_list /
as_object, which raise PayloadShapeError for a present value of an
unusable type.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Union

from chainhook_monitor.core.exceptions import PayloadShapeError

PathStep = Union[str, int]
Path = tuple[PathStep, ...]


class _Missing:
    """Sentinel type for an absent value (missing key, null, out-of-range index)."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def lookup(node: Any, path: Path) -> Any:
    """Follow path through node; return the value or MISSING."""
    current = node
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not 0 <= step < len(current):
                return MISSING
            current = current[step]
        else:
            if not isinstance(current, Mapping) or step not in current:
                return MISSING
            current = current[step]
        if current is None:
            return MISSING
    return current


def first_present(node: Any, paths: Sequence[Path]) -> Any:
    """Try each path in declared priority; return the first present value or MISSING."""
    for path in paths:
        value = lookup(node, path)
        if value is not MISSING:
            return value
    return MISSING


def as_text(value: Any, field: str, default: str) -> str:
    """String attribute: str kept, numbers stringified, MISSING -> default."""
    if value is MISSING:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise PayloadShapeError(field, "string", value)


def as_height(value: Any, field: str = "block_height") -> int:
    """Non-negative integer block height; MISSING -> 0. Accepts digit strings."""
    if value is MISSING:
        return 0
    if isinstance(value, bool):
        raise PayloadShapeError(field, "non-negative integer", value)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, int) and value >= 0:
        return value
    raise PayloadShapeError(field, "non-negative integer", value)


def as_list(value: Any, field: str) -> list[Any]:
    """Collection that must be a JSON array when present; MISSING -> []."""
    if value is MISSING:
        return []
    if isinstance(value, list):
        return value
    raise PayloadShapeError(field, "array", value)


def as_object(value: Any, field: str) -> Mapping[str, Any]:
    """Element that must be a JSON object."""
    if isinstance(value, Mapping):
        return value
    raise PayloadShapeError(field, "object", value)


def is_explicit_false(value: Any) -> bool:
    """Only a literal JSON false counts as a failure flag."""
    return value is False
