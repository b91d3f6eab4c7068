from typing import Any, Dict, Optional

from fastapi import Request

from stores_api.core.config import settings
from stores_api.core.errors import PayloadTooLarge
from stores_api.database import get_db
from stores_api.formats.negotiation import WireFormat, negotiate, normalize_body, unwrap_envelope

__all__ = ["get_db", "read_payload", "response_format", "parse_store_id"]

# Largest value a 64-bit INTEGER column can hold
MAX_STORE_ID = 2 ** 63 - 1


async def read_payload(request: Request) -> Dict[str, Any]:
    """Normalized, envelope-unwrapped request body."""
    body = await request.body()
    if len(body) > settings.MAX_BODY_BYTES:
        raise PayloadTooLarge()
    inbound = normalize_body(body, request.headers.get("content-type"))
    return unwrap_envelope(inbound.record)


def response_format(request: Request) -> WireFormat:
    return negotiate(request.headers.get("accept"))


def parse_store_id(raw: str) -> Optional[int]:
    """
    Numeric value of an id path segment, or None when it is not a whole number.

    None never matches a row, so bad ids surface as "Store not found".
    """
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    if not value.is_integer() or abs(value) > MAX_STORE_ID:
        return None
    return int(value)
