"""
Timestamp normalization.

Records arrive from the store with timestamps in several shapes: native
``datetime`` values from typed columns, store timestamp objects exposing a
``to_datetime()`` method, and ``{"seconds": ..., "nanoseconds": ...}`` maps
left behind by exports (sometimes with underscore-prefixed keys). Every read
path folds them into one canonical ISO-8601 UTC string.

Unrecognized shapes are returned untouched so partially migrated data keeps
loading.
"""

from collections.abc import Mapping
from datetime import UTC, date, datetime
from typing import Any

_SECONDS_KEYS = (
    frozenset({"seconds", "nanoseconds"}),
    frozenset({"_seconds", "_nanoseconds"}),
)
_CONVERTER_NAMES = ("to_datetime", "ToDatetime")


def to_iso(value: datetime) -> str:
    """Format a datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` (naive means UTC)"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _from_seconds_map(value: Mapping) -> Any:
    if "seconds" in value:
        seconds, nanos = value["seconds"], value["nanoseconds"]
    else:
        seconds, nanos = value["_seconds"], value["_nanoseconds"]
    if not (_is_number(seconds) and _is_number(nanos)):
        return None
    try:
        return to_iso(datetime.fromtimestamp(seconds + nanos / 1e9, tz=UTC))
    except (OverflowError, OSError, ValueError):
        return None


def _convert_single(value: Any) -> Any:
    """Return the ISO string for a timestamp-like value, or None"""
    if isinstance(value, datetime):
        return to_iso(value)
    if isinstance(value, date):
        return to_iso(datetime(value.year, value.month, value.day, tzinfo=UTC))
    for name in _CONVERTER_NAMES:
        converter = getattr(value, name, None)
        if callable(converter):
            try:
                converted = converter()
            except (TypeError, ValueError, OverflowError):
                return None
            return to_iso(converted) if isinstance(converted, datetime) else None
    if isinstance(value, Mapping) and frozenset(value.keys()) in _SECONDS_KEYS:
        return _from_seconds_map(value)
    return None


def normalize_timestamps(value: Any) -> Any:
    """
    Replace every recognized timestamp inside ``value`` with an ISO string.

    Recurses into mappings, lists and tuples and always builds new containers,
    so the input is never mutated. Normalizing an already normalized value
    returns an equal value.
    """
    converted = _convert_single(value)
    if converted is not None:
        return converted
    if isinstance(value, Mapping):
        return {key: normalize_timestamps(item) for key, item in value.items()}
    if isinstance(value, list):
        return [normalize_timestamps(item) for item in value]
    if isinstance(value, tuple):
        return tuple(normalize_timestamps(item) for item in value)
    return value
