import datetime
import decimal
import uuid
from typing import Any

import msgspec

__all__ = ("encode_json",)


def _default(value: Any) -> Any:
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, decimal.Decimal):
        return str(value)
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (set, frozenset)):
        return list(value)
    return repr(value)


_encoder = msgspec.json.Encoder(enc_hook=_default)


def encode_json(data: Any, *, as_bytes: bool = False) -> "str | bytes":
    """Encode data to JSON.

    Args:
        data: Data to encode.
        as_bytes: Return bytes instead of a string.

    Returns:
        JSON string or bytes.
    """
    encoded = _encoder.encode(data)
    if as_bytes:
        return encoded
    return encoded.decode("utf-8")
