"""Exception handlers for the FastAPI application."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import AppException, ErrorCode, ServiceUnavailableError

logger = structlog.get_logger()


def _error_body(error_code: str, message: str, details: object = None) -> dict:
    return {"error_code": error_code, "message": message, "details": details}


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle custom application exceptions."""
        logger.warning(
            "app_exception",
            error_code=exc.error_code.value,
            message=exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.error_code.value, exc.message, exc.details),
        )

    @app.exception_handler(OperationalError)
    @app.exception_handler(InterfaceError)
    async def database_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """The store is unreachable; nothing was committed."""
        logger.error("database_unavailable", error_type=type(exc).__name__)
        unavailable = ServiceUnavailableError()
        return JSONResponse(
            status_code=unavailable.status_code,
            content=_error_body(unavailable.error_code.value, unavailable.message),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions from FastAPI/Starlette."""
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body("HTTP_ERROR", exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic validation errors. Input values are never echoed."""
        errors = exc.errors()
        logger.info("validation_error", fields=[".".join(map(str, e["loc"])) for e in errors])
        return JSONResponse(
            status_code=422,
            content=_error_body(
                ErrorCode.VALIDATION_ERROR.value,
                "Request validation failed",
                [
                    {
                        "field": ".".join(str(x) for x in error["loc"]),
                        "message": error["msg"],
                        "type": error["type"],
                    }
                    for error in errors
                ],
            ),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )

        message = "An unexpected error occurred"
        if not settings.is_production:
            message = str(exc)

        return JSONResponse(
            status_code=500,
            content=_error_body(
                ErrorCode.INTERNAL_ERROR.value, message, {"request_id": request_id}
            ),
        )
