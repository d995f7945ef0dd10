"""
Domain errors and their translation to HTTP responses.

Services raise the exceptions defined here; ``register_exception_handlers``
installs FastAPI handlers that turn them into the error body::

    {"httpCode": 404, "message": "...", "internalCode": "ML-1102", "errors": []}

Anything that is not a ``BookstoreError`` (nor a FastAPI request
validation error or ``HTTPException``) is logged and answered with a
generic 500.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# Starlette renamed the 422 constant; the number is stable.
UNPROCESSABLE_ENTITY = 422


class Errors(Enum):
    """Catalog of internal error codes and message templates."""

    ML000 = ("ML-000", "Access denied")
    ML0001 = ("ML-0001", "Fields errors")
    ML1001 = ("ML-1001", "Book [%s] doesn't exists")
    ML1002 = ("ML-1002", "Cannot update book with the status [%s]")
    ML1102 = ("ML-1102", "Customer with the id [%s] doesn't exist")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def message(self) -> str:
        return self.value[1]

    def format(self, *args) -> str:
        return self.message % args if args else self.message


@dataclass
class FieldError:
    message: str
    field: str


class BookstoreError(Exception):
    """Base class for errors that map to a well-known HTTP response."""

    http_status: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, error_code: str, errors: Optional[List[FieldError]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.errors = errors or []


class NotFoundError(BookstoreError):
    http_status = status.HTTP_404_NOT_FOUND


class ValidationError(BookstoreError):
    http_status = UNPROCESSABLE_ENTITY

    def __init__(self, errors: List[FieldError]) -> None:
        super().__init__(Errors.ML0001.message, Errors.ML0001.code, errors)


class ConflictError(BookstoreError):
    http_status = status.HTTP_409_CONFLICT


class ForbiddenError(BookstoreError):
    http_status = status.HTTP_403_FORBIDDEN

    def __init__(self) -> None:
        super().__init__(Errors.ML000.message, Errors.ML000.code)


def error_body(http_code: int, message: str, internal_code: Optional[str], errors: Optional[List[FieldError]] = None) -> dict:
    return {
        "httpCode": http_code,
        "message": message,
        "internalCode": internal_code,
        "errors": [{"message": e.message, "field": e.field} for e in errors or []],
    }


async def bookstore_error_handler(request: Request, exc: BookstoreError) -> JSONResponse:
    logger.info(
        "%s %s -> %s %s: %s",
        request.method,
        request.url.path,
        exc.http_status,
        exc.error_code,
        exc.message,
    )
    return JSONResponse(
        status_code=exc.http_status,
        content=error_body(exc.http_status, exc.message, exc.error_code, exc.errors),
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report pydantic payload errors with the same body as domain validation."""
    errors = []
    for err in exc.errors():
        # ``loc`` looks like ("body", "name"); drop the request part.
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append(FieldError(message=err.get("msg", "Invalid value"), field=".".join(loc)))
    code = UNPROCESSABLE_ENTITY
    return JSONResponse(
        status_code=code,
        content=error_body(code, Errors.ML0001.message, Errors.ML0001.code, errors),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(status_code=code, content=error_body(code, "Internal server error", None))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error translation handlers on ``app``."""
    app.add_exception_handler(BookstoreError, bookstore_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
