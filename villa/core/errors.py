"""
Error taxonomy shared by services and the HTTP layer.

Services raise these; `register_exception_handlers` turns every one of them
into a `{"error": message}` JSON body with the matching status code.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


class VillaError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(VillaError):
    """Missing or malformed input, bad date ordering."""

    status_code = 400


class ConflictError(VillaError):
    """Requested dates overlap a booking or a blackout day."""

    status_code = 400


class NotFoundError(VillaError):
    status_code = 404


class InternalError(VillaError):
    """Store or connectivity failure."""

    status_code = 500


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        if err.get("type") == "missing":
            parts.append(f"{field} is required" if field else "Request body is required")
        else:
            msg = err.get("msg", "Invalid value")
            parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(VillaError)
    async def villa_error_handler(request: Request, exc: VillaError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
            return error_response(exc.status_code, GENERIC_ERROR_MESSAGE)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(400, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            return error_response(404, "Route not found")
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            f"Store failure on {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )
        return error_response(500, GENERIC_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled error on {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )
        return error_response(500, GENERIC_ERROR_MESSAGE)
