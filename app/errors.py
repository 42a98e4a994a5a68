"""
Error responses.

Every error the API emits has the shape ``{"error": {"message": ...}}``.
Handlers raise ``HTTPException`` for 400/404; Starlette's own routing
errors (unknown path, wrong method) arrive through the same handler.
Anything else is a server error whose detail is only shown when the
application was built with ``expose_error_details`` enabled.
"""
import logging

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from app.middleware import SECURITY_HEADERS

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "server error"


def error_body(message: str) -> dict:
    return {"error": {"message": message}}


def server_error_body(exc: Exception, expose_details: bool) -> dict:
    """Build the 500 payload; hardened deployments get a fixed message."""
    if not expose_details:
        return error_body(SERVER_ERROR_MESSAGE)
    return {"message": str(exc), "error": {"type": exc.__class__.__name__}}


async def http_exception_handler(_request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    expose = getattr(request.app.state, "expose_error_details", False)
    return JSONResponse(
        status_code=500,
        content=server_error_body(exc, expose),
        headers=_server_error_headers(request),
    )


def _server_error_headers(request: Request) -> dict[str, str]:
    """
    Headers for a 500 response.

    This handler runs outside the middleware stack, so the security and
    CORS headers those middlewares would add are set here.
    """
    headers = {name.decode(): value.decode() for name, value in SECURITY_HEADERS}
    origin = request.headers.get("origin")
    allowed = getattr(request.app.state, "cors_origins", [])
    if origin and ("*" in allowed or origin in allowed):
        headers["access-control-allow-origin"] = "*" if "*" in allowed else origin
    return headers


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
