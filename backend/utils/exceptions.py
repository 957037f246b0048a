"""
Domain errors raised by services and mapped to HTTP responses.

ValidationError -> 400, AuthError -> 401, ForbiddenError -> 403,
NotFoundError -> 404, ConflictError -> 409, InternalError -> 500.
Bodies keep FastAPI's `{"detail": ...}` shape.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from utils.constants import (
    INTERNAL_ERROR,
    INVALID_AUTH_CREDENTIALS,
    WWW_AUTHENTICATE_HEADER,
)

logger = logging.getLogger(__name__)


class MTSError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = INTERNAL_ERROR
    headers = None

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(MTSError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class InvalidField(ValidationError):
    """A supplied field could not be parsed (e.g. a non-numeric id)."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Invalid {field_name} value.")


class MissingRequiredField(ValidationError):
    def __init__(self, detail: str = None, fields: list = None):
        self.fields = fields or []
        super().__init__(detail)


class AuthError(MTSError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = INVALID_AUTH_CREDENTIALS
    headers = {"WWW-Authenticate": WWW_AUTHENTICATE_HEADER}


class ForbiddenError(MTSError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"


class NotFoundError(MTSError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ConflictError(MTSError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class InternalError(MTSError):
    pass


async def handle_mts_error(request: Request, exc: MTSError) -> JSONResponse:
    if isinstance(exc, InternalError):
        logger.error(f"{request.method} {request.url.path}: {exc.detail}")
        detail = INTERNAL_ERROR
    else:
        logger.warning(
            f"{request.method} {request.url.path} -> "
            f"{exc.status_code}: {exc.detail}"
        )
        detail = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": detail},
        headers=exc.headers,
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report body/query validation failures as 400 naming the field."""
    errors = exc.errors()
    field = None
    if errors:
        loc = [str(part) for part in errors[0].get("loc", ())]
        # Drop the "body"/"query"/"path" prefix
        field = ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc)
    if not field:
        detail = "Invalid request body."
    elif errors[0].get("type") == "missing":
        detail = f"Missing {field} value."
    else:
        detail = f"Invalid {field} value."
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": detail},
    )


async def handle_database_error(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    logger.error(
        f"Unhandled database error on {request.method} "
        f"{request.url.path}: {exc}"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_ERROR},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MTSError, handle_mts_error)
    app.add_exception_handler(
        RequestValidationError, handle_request_validation_error
    )
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
