"""
Typed field access for query result rows.

Rows come back from the driver as records or dicts. These helpers pull a
named field with the expected type and raise ValidationError instead of
passing an unchecked value onward.
"""
from typing import Any, Mapping, Optional, Tuple, Type, Union

from gamegraph.errors import ValidationError

_MISSING = object()


def _lookup(row: Mapping, field: str) -> Any:
    try:
        return row[field]
    except (KeyError, IndexError):
        return _MISSING


def require(row: Mapping, field: str, expected: Union[Type, Tuple[Type, ...]]) -> Any:
    """Return row[field], which must be present, non-null and of `expected` type"""
    value = _lookup(row, field)
    if value is _MISSING:
        raise ValidationError(f"Result row is missing field '{field}'", field)
    if value is None:
        raise ValidationError(f"Result row field '{field}' is null", field)
    if isinstance(value, bool) and bool not in _as_tuple(expected):
        raise ValidationError(f"Result row field '{field}' has type bool", field)
    if not isinstance(value, expected):
        raise ValidationError(
            f"Result row field '{field}' has type {type(value).__name__}", field
        )
    return value


def optional(row: Mapping, field: str, expected: Union[Type, Tuple[Type, ...]]) -> Optional[Any]:
    """Like require(), but a missing or null field yields None"""
    value = _lookup(row, field)
    if value is _MISSING or value is None:
        return None
    return require(row, field, expected)


def _as_tuple(expected) -> tuple:
    return expected if isinstance(expected, tuple) else (expected,)
