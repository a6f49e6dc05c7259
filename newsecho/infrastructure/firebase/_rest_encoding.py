"""Firestore REST ``Value`` encoding for NewsEcho documents.

Profiles, newsletters, subscriptions and replies only hold scalars, UTC
timestamps and one nested map (settings); lists appear only as values of
`in` query filters. That is all that is supported here.
"""

import re
from datetime import UTC, datetime
from typing import Any

from newsecho.shared.utils.datetime import ensure_utc

# Firestore emits up to nine fractional digits; datetime keeps six.
_TIMESTAMP = re.compile(
    r"^(?P<head>\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d)"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<tz>Z|[+-]\d\d:\d\d)?$"
)


def encode_value(value: Any) -> dict:
    if value is None:
        return {"nullValue": None}
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": ensure_utc(value).strftime("%Y-%m-%dT%H:%M:%S.%fZ")}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": {k: encode_value(v) for k, v in value.items()}}}
    raise TypeError(f"Cannot store {type(value).__name__} in a Firestore document")


def encode_document(data: dict[str, Any]) -> dict:
    """Request body for createDocument / patch: ``{"fields": {...}}``."""
    return {"fields": {k: encode_value(v) for k, v in data.items()}}


def parse_timestamp(raw: str) -> datetime:
    match = _TIMESTAMP.match(raw)
    if match is None:
        raise ValueError(f"Invalid Firestore timestamp: {raw!r}")
    frac = (match["frac"] or "")[:6].ljust(6, "0")
    tz = match["tz"] or "Z"
    parsed = datetime.fromisoformat(f"{match['head']}.{frac}{'+00:00' if tz == 'Z' else tz}")
    return parsed.astimezone(UTC)


def decode_value(value: dict) -> Any:
    if "stringValue" in value:
        return value["stringValue"]
    if "timestampValue" in value:
        return parse_timestamp(value["timestampValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "booleanValue" in value:
        return value["booleanValue"]
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values") or []]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields"))
    return None


def decode_fields(fields: dict | None) -> dict:
    """Document ``fields`` mapping to a plain dict (empty for missing fields)."""
    return {k: decode_value(v) for k, v in (fields or {}).items()}
