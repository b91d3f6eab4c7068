from datetime import datetime
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from stores_api.core.errors import ValidationError
from stores_api.formats.xml import ILLEGAL_XML_CHARS

# Error types raised by the validators below; their messages are already user-facing
RULE_ERRORS = {"required", "not_empty", "invalid_characters"}

SCALAR_TYPES = (str, int, float, bool)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class StorePayload(BaseModel):
    """Shared parsing rules for inbound store payloads."""

    # XML delivers strings, JSON may deliver numbers for e.g. phone
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    @field_validator("name", "address", "phone", "email", check_fields=False)
    @classmethod
    def xml_safe(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if value is not None and ILLEGAL_XML_CHARS.search(value):
            raise PydanticCustomError(
                "invalid_characters", "{field} contains invalid characters", {"field": info.field_name}
            )
        return value


class StoreCreate(StorePayload):
    name: Optional[str] = Field(None, validate_default=True)
    address: Optional[str] = Field(None, validate_default=True)
    phone: Optional[str] = None
    email: Optional[str] = None

    @field_validator("name", "address")
    @classmethod
    def required(cls, value: Optional[str], info: ValidationInfo) -> str:
        if value is None or not value.strip():
            raise PydanticCustomError("required", "{field} is required", {"field": info.field_name})
        return value


class StoreUpdate(StorePayload):
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

    @field_validator("name", "address")
    @classmethod
    def not_empty(cls, value: Optional[str], info: ValidationInfo) -> str:
        # Only runs for fields present in the payload
        if value is None or not value.strip():
            raise PydanticCustomError("not_empty", "{field} cannot be empty", {"field": info.field_name})
        return value


class StoreResponse(BaseModel):
    id: int
    name: str
    address: str
    phone: Optional[str] = None
    email: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


def _describe(error: Dict[str, Any], field: Optional[str]) -> str:
    if error["type"] in RULE_ERRORS:
        return error["msg"]
    if error["type"].startswith("string"):
        return f"{field} must be a string"
    return error["msg"]


def _echo(value: Any) -> Any:
    """Submitted value as reported back; nested structures and unsafe text are not echoed."""
    if not isinstance(value, SCALAR_TYPES):
        return None
    if isinstance(value, str) and ILLEGAL_XML_CHARS.search(value):
        return None
    return value


def validate_payload(schema: Type[SchemaT], payload: Dict[str, Any]) -> SchemaT:
    """
    Validate an unwrapped canonical record against ``schema``.

    Every violated rule becomes one entry of the raised ValidationError.
    """
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        errors: List[Dict[str, Any]] = []
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else None
            errors.append({
                "msg": _describe(error, field),
                "path": field,
                "location": "body",
                "value": _echo(payload.get(field)) if field else None,
            })
        raise ValidationError(errors) from exc


def to_record(store) -> Dict[str, Any]:
    """Canonical record for a persisted store; timestamps become ISO strings."""
    return StoreResponse.model_validate(store).model_dump(mode="json")
