"""Translate domain and infrastructure errors into JSON responses."""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from app.core.config import settings
from app.core.errors import DomainError

logger = logging.getLogger(__name__)


def error_body(code: str, message: str, errors=None) -> dict:
    body = {"success": False, "code": code, "message": message}
    if errors:
        body["errors"] = errors
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error handlers to the application"""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        if exc.status_code >= 500:
            logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
        else:
            logger.info(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.code, exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Drop ctx, it can hold non-serializable ValueError objects
        errors = [
            {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
            for error in exc.errors()
        ]
        logger.info(f"Validation error on {request.method} {request.url.path}: {errors}")
        return JSONResponse(
            status_code=400,
            content=error_body("VALIDATION_ERROR", "Request validation failed", errors),
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
        return JSONResponse(
            status_code=409,
            content=error_body("CONFLICT", "Request conflicts with existing data"),
        )

    @app.exception_handler(OperationalError)
    @app.exception_handler(PoolTimeoutError)
    async def database_unavailable_handler(request: Request, exc: Exception):
        logger.error(f"Database unavailable on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=503,
            content=error_body("UNAVAILABLE", "Database is temporarily unavailable"),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global exception: {exc}", exc_info=True)
        message = str(exc) if settings.DEBUG else "Internal server error"
        return JSONResponse(status_code=500, content=error_body("INTERNAL_ERROR", message))
