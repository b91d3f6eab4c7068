"""
Format bridge between the wire (JSON or XML) and canonical records.

Inbound bodies are tagged with the ``WireFormat`` they arrived in and
normalized to a plain dict. Outbound payloads are rendered in the format
the client asked for through its Accept header.
"""
import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from stores_api.core.config import settings
from stores_api.core.errors import InvalidPayload
from stores_api.formats import xml as xml_codec

logger = logging.getLogger(__name__)

XML_MEDIA_TYPES = ("application/xml", "text/xml")
JSON_MEDIA_TYPE = "application/json"
ENVELOPE_KEY = "store"


class WireFormat(str, Enum):
    JSON = "json"
    XML = "xml"

    @property
    def media_type(self) -> str:
        return "application/xml" if self is WireFormat.XML else JSON_MEDIA_TYPE


@dataclass
class InboundPayload:
    format: Optional[WireFormat]
    record: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RootNamePolicy:
    """Chooses the XML root element name for an outbound payload."""

    collection: str = "stores"
    entity: str = "store"
    fallback: str = "response"
    identity_field: str = "id"

    @classmethod
    def from_settings(cls) -> "RootNamePolicy":
        return cls(
            collection=settings.XML_COLLECTION_ROOT,
            entity=settings.XML_ENTITY_ROOT,
            fallback=settings.XML_FALLBACK_ROOT,
        )

    def root_for(self, payload: Any) -> str:
        if isinstance(payload, (list, tuple)):
            return self.collection
        if isinstance(payload, dict) and payload.get(self.identity_field) is not None:
            return self.entity
        return self.fallback


def detect_format(content_type: Optional[str]) -> Optional[WireFormat]:
    """Map a Content-Type header to a wire format, ignoring parameters."""
    if not content_type:
        return None
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type in XML_MEDIA_TYPES:
        return WireFormat.XML
    if media_type == JSON_MEDIA_TYPE:
        return WireFormat.JSON
    return None


def negotiate(accept: Optional[str]) -> WireFormat:
    """XML when the Accept header mentions an XML media type, JSON otherwise."""
    accept = (accept or "").lower()
    if any(media_type in accept for media_type in XML_MEDIA_TYPES):
        return WireFormat.XML
    return WireFormat.JSON


def normalize_body(body: bytes, content_type: Optional[str]) -> InboundPayload:
    fmt = detect_format(content_type)

    if fmt is WireFormat.XML:
        try:
            return InboundPayload(fmt, xml_codec.parse_document(body))
        except xml_codec.ParseError as e:
            logger.warning(f"Rejected malformed XML payload: {e}")
            raise InvalidPayload("Invalid XML payload", str(e)) from e
        except RecursionError as e:
            logger.warning("Rejected XML payload nested too deeply")
            raise InvalidPayload("Invalid XML payload", "XML payload is nested too deeply") from e

    if fmt is WireFormat.JSON:
        if not body.strip():
            return InboundPayload(fmt, {})
        try:
            record = json.loads(body)
        except ValueError as e:
            logger.warning(f"Rejected malformed JSON payload: {e}")
            raise InvalidPayload("Invalid JSON payload", str(e)) from e
        except RecursionError as e:
            logger.warning("Rejected JSON payload nested too deeply")
            raise InvalidPayload("Invalid JSON payload", "JSON payload is nested too deeply") from e
        if not isinstance(record, dict):
            raise InvalidPayload("Invalid JSON payload", "JSON payload must be an object")
        return InboundPayload(fmt, record)

    # Unknown content types are not interpreted
    return InboundPayload(None, {})


def unwrap_envelope(record: Dict[str, Any]) -> Dict[str, Any]:
    """Use a nested ``store`` mapping as the payload root when one is present."""
    inner = record.get(ENVELOPE_KEY)
    if isinstance(inner, dict):
        return inner
    return record


def render(
    payload: Any,
    fmt: WireFormat,
    status_code: int = 200,
    policy: Optional[RootNamePolicy] = None,
) -> Response:
    if fmt is WireFormat.XML:
        policy = policy or RootNamePolicy.from_settings()
        payload = payload if payload is not None else {}
        content = xml_codec.render_document(policy.root_for(payload), payload, policy.entity)
        return Response(content=content, status_code=status_code, media_type=fmt.media_type)
    return JSONResponse(content=jsonable_encoder(payload), status_code=status_code)
