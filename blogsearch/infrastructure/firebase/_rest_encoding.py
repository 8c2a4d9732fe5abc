"""Firestore REST Value codec.

The REST API wraps every field in a one-key object naming its type
({"stringValue": "..."}, {"integerValue": "12"}, ...). Search documents only
hold strings, timestamps, nulls and the occasional number or list, but the
codec covers every type the API can return so unrelated fields on a blog or
profile document never break decoding.
"""

import base64
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any


class DocumentPath(str):
    """Full document resource name; encodes as referenceValue (the __name__ cursor value)."""


def _timestamp(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def encode_value(value: Any) -> dict[str, Any]:
    """Wrap one Python value as a Firestore Value."""
    # bool before int: bool is an int subclass.
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": _timestamp(value)}
    # DocumentPath before str: it is a str subclass.
    if isinstance(value, DocumentPath):
        return {"referenceValue": str(value)}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, bytes):
        return {"bytesValue": base64.b64encode(value).decode("ascii")}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    if isinstance(value, dict):
        return {"mapValue": encode_document(value)}
    raise TypeError(f"Cannot store {type(value).__name__} in Firestore")


def _decode_array(raw: dict[str, Any]) -> list[Any]:
    return [decode_value(v) for v in raw.get("values") or []]


_DECODERS: dict[str, Callable[[Any], Any]] = {
    "nullValue": lambda _: None,
    "booleanValue": bool,
    "integerValue": int,
    "doubleValue": float,
    "timestampValue": lambda raw: datetime.fromisoformat(raw.replace("Z", "+00:00")),
    "stringValue": str,
    "referenceValue": DocumentPath,
    "bytesValue": base64.b64decode,
    "arrayValue": _decode_array,
    "mapValue": lambda raw: decode_document(raw),
}


def decode_value(value: dict[str, Any]) -> Any:
    """Unwrap one Firestore Value; types without a decoder (geoPoint) yield None."""
    for type_key, raw in value.items():
        decoder = _DECODERS.get(type_key)
        if decoder is not None:
            return decoder(raw)
    return None


def encode_document(data: dict[str, Any]) -> dict[str, Any]:
    """Python dict -> {"fields": {...}} as used in Document bodies and mapValue."""
    return {"fields": {name: encode_value(v) for name, v in data.items()}}


def decode_document(doc: dict[str, Any] | None) -> dict[str, Any]:
    """Document (or mapValue) body -> Python dict of its fields."""
    if not doc:
        return {}
    return {name: decode_value(v) for name, v in (doc.get("fields") or {}).items()}
