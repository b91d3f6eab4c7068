"""
Error taxonomy for the Stores API.

Route handlers raise these; the handlers in ``stores_api.core.handlers``
turn them into negotiated JSON or XML responses.
"""
from typing import Any, Dict, List, Optional


class StoresAPIError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def body(self) -> Dict[str, Any]:
        return {"error": self.message}


class InvalidPayload(StoresAPIError):
    """Request body could not be parsed in its declared format."""

    status_code = 400
    message = "Invalid payload"

    def __init__(self, message: str, details: str):
        super().__init__(message)
        self.details = details

    def body(self) -> Dict[str, Any]:
        return {"error": self.message, "details": self.details}


class ValidationError(StoresAPIError):
    status_code = 400
    message = "Validation failed"

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__()
        self.errors = errors

    def body(self) -> Dict[str, Any]:
        return {"errors": self.errors}


class NotFound(StoresAPIError):
    status_code = 404
    message = "Store not found"


class PayloadTooLarge(StoresAPIError):
    status_code = 413
    message = "Payload too large"


class StorageError(StoresAPIError):
    status_code = 500
    message = "Database error"


class InternalError(StoresAPIError):
    status_code = 500
    message = "Internal server error"
