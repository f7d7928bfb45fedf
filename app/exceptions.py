"""Application-level exceptions and FastAPI exception handlers.

Every error reaches the client as ``{"error": "<message>"}``, the shape the
admin dashboard and contact form already read.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

log = logging.getLogger("uvicorn.error")


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class Unauthenticated(AppException):
    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, status_code=401)


class Forbidden(AppException):
    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, status_code=403)


class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: int | str | None = None):
        msg = f"{entity} not found" if entity_id is None else f"{entity} {entity_id} not found"
        super().__init__(msg, status_code=404)


class AccountNotFoundError(AppException):
    """Login with an email that has no account. Reported as 400 like any bad login."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message, status_code=400)


class InvalidCredentialError(AppException):
    def __init__(self, message: str = "Invalid password"):
        super().__init__(message, status_code=400)


class StorageError(AppException):
    """The external image host rejected or failed an upload."""

    def __init__(self, message: str = "Upload failed"):
        super().__init__(message, status_code=500)


class MailDispatchError(AppException):
    def __init__(self, message: str = "Failed to send reply email"):
        super().__init__(message, status_code=500)


class InternalError(AppException):
    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message, status_code=500)


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(x) for x in err.get("loc", ()) if x not in ("body", "query", "path")]
        field = ".".join(loc)
        msg = err.get("msg", "Invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": _validation_message(exc)})

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        log.error("[DB] %s %s failed", request.method, request.url.path, exc_info=exc)
        err = InternalError()
        return JSONResponse(status_code=err.status_code, content={"error": err.message})
