"""Exception handlers for the FastAPI application."""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exceptions import AppException, ErrorCode

logger = structlog.get_logger()

SERVER_ERROR_MESSAGE = "Server Error"


def _field_error(error: dict[str, Any]) -> dict[str, str]:
    """Flatten one pydantic error into ``{msg, param, location}``."""
    loc = [str(part) for part in error.get("loc", ())]
    location = loc[0] if loc else "body"
    param = ".".join(loc[1:]) if len(loc) > 1 else location

    msg = error.get("msg", "Invalid value")
    ctx = error.get("ctx") or {}
    # Messages raised from our own validators arrive wrapped as
    # "Value error, <message>"; surface the original text.
    if error.get("type") == "value_error" and "error" in ctx:
        msg = str(ctx["error"])

    return {"msg": msg, "param": param, "location": location}


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle custom application exceptions."""
        logger.warning(
            "app_exception",
            error_code=exc.error_code.value,
            message=exc.message,
            status_code=exc.status_code,
        )
        content: dict[str, Any] = {
            "error_code": exc.error_code.value,
            "msg": exc.message,
        }
        if exc.details is not None:
            content["details"] = exc.details
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions from FastAPI/Starlette (unknown routes, 405s)."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error_code": "HTTP_ERROR", "msg": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report every violated field at once with status 400."""
        errors = [_field_error(error) for error in exc.errors()]
        logger.info("validation_error", errors=errors)
        return JSONResponse(
            status_code=400,
            content={
                "error_code": ErrorCode.VALIDATION_ERROR.value,
                "errors": errors,
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions without leaking internals."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )

        return JSONResponse(
            status_code=500,
            content={
                "error_code": ErrorCode.INTERNAL_ERROR.value,
                "msg": SERVER_ERROR_MESSAGE,
                "details": {"request_id": request_id},
            },
        )
