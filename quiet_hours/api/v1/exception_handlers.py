"""Exception handlers to translate domain exceptions to HTTP responses."""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from quiet_hours.domain.exceptions import (
    AuthException,
    DomainException,
    InvalidEmailType,
    InvalidTimeRange,
    InvalidToken,
    NotificationException,
    NotificationFetchError,
    ProfileException,
    ProfileNotFound,
    QuietBlockException,
    QuietBlockNotFound,
    RequiredFieldMissing,
    UnauthorizedDispatch,
    ValidationException,
)
from quiet_hours.utils.logger import get_logger


logger = get_logger("exception_handlers")


class DomainExceptionHandler:
    """Centralized handler for domain exceptions."""

    # Mapping of domain exceptions to HTTP status codes
    EXCEPTION_STATUS_MAP = {
        # Auth exceptions
        UnauthorizedDispatch: status.HTTP_401_UNAUTHORIZED,
        InvalidToken: status.HTTP_401_UNAUTHORIZED,

        # Quiet block exceptions
        QuietBlockNotFound: status.HTTP_404_NOT_FOUND,
        InvalidTimeRange: status.HTTP_400_BAD_REQUEST,

        # Profile exceptions
        ProfileNotFound: status.HTTP_404_NOT_FOUND,

        # Notification exceptions
        NotificationFetchError: status.HTTP_500_INTERNAL_SERVER_ERROR,

        # Validation exceptions
        RequiredFieldMissing: status.HTTP_400_BAD_REQUEST,
        InvalidEmailType: status.HTTP_400_BAD_REQUEST,
    }

    # Base exception type status codes
    BASE_EXCEPTION_STATUS_MAP = {
        AuthException: status.HTTP_401_UNAUTHORIZED,
        QuietBlockException: status.HTTP_400_BAD_REQUEST,
        ProfileException: status.HTTP_400_BAD_REQUEST,
        NotificationException: status.HTTP_500_INTERNAL_SERVER_ERROR,
        ValidationException: status.HTTP_400_BAD_REQUEST,
    }

    @classmethod
    def status_for(cls, exc: DomainException) -> int:
        status_code = cls.EXCEPTION_STATUS_MAP.get(type(exc))

        if status_code is None:
            for base_type, base_status in cls.BASE_EXCEPTION_STATUS_MAP.items():
                if isinstance(exc, base_type):
                    status_code = base_status
                    break

        if status_code is None:
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return status_code

    @classmethod
    def handle_domain_exception(cls, exc: DomainException) -> JSONResponse:
        """Convert domain exception to a JSON error response."""
        status_code = cls.status_for(exc)
        headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.message, "error_code": exc.error_code},
            headers=headers,
        )


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    return DomainExceptionHandler.handle_domain_exception(exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
