import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from stores_api.core.errors import InternalError, StoresAPIError
from stores_api.core.security import SECURITY_HEADERS
from stores_api.formats.negotiation import negotiate, render

logger = logging.getLogger(__name__)


async def stores_api_error_handler(request: Request, exc: StoresAPIError):
    return render(exc.body(), negotiate(request.headers.get("accept")), exc.status_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Framework errors (unknown route, wrong method) in the same envelope."""
    response = render(
        {"error": exc.detail},
        negotiate(request.headers.get("accept")),
        exc.status_code,
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    error = InternalError()
    # Rendered outside the middleware stack, so the security headers are added here
    return JSONResponse(status_code=error.status_code, content=error.body(), headers=SECURITY_HEADERS)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoresAPIError, stores_api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
