"""Error Handlers — global exception handlers for the channel gateway.

Invariants:
    - GatewayError → {"success": false, "error": message, "code": ...} with its http_status
    - RequestValidationError → 500 (malformed input is an internal fault) with field-level details
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (GatewayError), validation (Pydantic), catch-all (Exception)
    - Channel operations already map client faults to GatewayError inside the dispatcher,
      so the catch-all only sees bugs outside that boundary
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from channel_gateway.core.errors import GatewayError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_gateway_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_gateway_error_handler(app: FastAPI) -> None:
    """Register gateway domain/infrastructure error handler."""

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        """Write the failure envelope for a mapped gateway error."""
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"GatewayError: {exc.message}",
            extra={**exc.log_extra(), "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Malformed input is an internal fault: 500 with the parser's message."""
        logger.error(
            f"Malformed request on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "error_code": "MALFORMED_REQUEST"},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Failure envelope whose error text is the first parser complaint."""
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    first = details[0] if details else None
    return {
        "success": False,
        "error": f"{first['field']}: {first['message']}" if first else "Malformed request",
        "code": "MALFORMED_REQUEST",
        "details": details,
    }
