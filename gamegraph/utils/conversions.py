"""
Boundary conversions for values bound into Cypher parameters.

Identifiers and ranks can arrive as ints, floats or strings (chat payloads,
catalog JSON). Neo4j compares 1 and "1" as different keys, so every value that
is bound as an identifier goes through one of these functions first.
"""
import math
import re
from datetime import datetime, timezone
from typing import Union

from neo4j.time import DateTime

from gamegraph.errors import ValidationError

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INT_PATTERN = re.compile(r'^[+-]?\d+$')


def to_int(value, field: str = 'value') -> int:
    """
    Convert a numeric identifier or rank to a Neo4j integer.

    Accepts ints, integral floats and decimal strings. Everything else
    (bools, fractions, NaN, empty strings, values outside int64) raises
    ValidationError.
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer, got bool", field)

    if isinstance(value, int):
        result = value
    elif isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise ValidationError(f"{field} must be an integer, got {value!r}", field)
        result = int(value)
    elif isinstance(value, str):
        stripped = value.strip()
        if not _INT_PATTERN.match(stripped):
            raise ValidationError(f"{field} must be an integer, got {value!r}", field)
        result = int(stripped)
    else:
        raise ValidationError(
            f"{field} must be an integer, got {type(value).__name__}", field
        )

    if not INT64_MIN <= result <= INT64_MAX:
        raise ValidationError(f"{field} is outside the 64-bit range: {result}", field)
    return result


def to_tag_key(value, field: str = 'tag_id') -> Union[int, str]:
    """
    Normalize a tag identifier.

    Tags come from catalogs that use either numeric ids or slugs. Integral
    values are stored as integers, anything else as a stripped string.
    """
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValidationError(f"{field} must not be empty", field)
        if _INT_PATTERN.match(stripped):
            return to_int(stripped, field)
        return stripped
    return to_int(value, field)


def to_item_key(value, field: str = 'item_id') -> str:
    """Items are keyed by string ids (catalog document ids)."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} is required", field)
    key = str(value).strip()
    if not key:
        raise ValidationError(f"{field} must not be empty", field)
    return key


def to_date(value, field: str = 'at') -> DateTime:
    """
    Convert a wall-clock instant to a Neo4j DateTime in UTC.

    Naive datetimes are taken as UTC. Epoch numbers are seconds.
    Microsecond precision is preserved.
    """
    if isinstance(value, DateTime):
        value = value.to_native()

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            raise ValidationError(f"{field} is not a finite timestamp", field)
        try:
            dt = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise ValidationError(f"{field} is out of range: {value!r}", field)
    elif isinstance(value, str):
        try:
            dt = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        except ValueError:
            raise ValidationError(f"{field} is not an ISO-8601 timestamp: {value!r}", field)
    else:
        raise ValidationError(
            f"{field} must be a datetime, got {type(value).__name__}", field
        )

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return DateTime.from_native(dt.astimezone(timezone.utc))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
