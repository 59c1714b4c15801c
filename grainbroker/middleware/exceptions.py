"""Custom exception handlers for consistent error responses.

Provides the application exception hierarchy, the standard error envelope,
and the logging that goes with each failure family.
"""

import logging
from typing import Union

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError
from starlette.exceptions import HTTPException as StarletteHTTPException

from grainbroker.persistence import ConcurrencyError

logger = logging.getLogger(__name__)


class GrainBrokerException(Exception):
    """Base exception for Grain Broker application errors."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_ERROR",
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(self.message)


class ValidationError(GrainBrokerException):
    """Caller input broke a field rule (e.g. empty location, negative amount)."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="VALIDATION_ERROR",
        )


class IdMismatchError(GrainBrokerException):
    """Path id and body id disagree on a full update."""

    def __init__(self, message: str = "ID mismatch"):
        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code="ID_MISMATCH",
        )


class ResourceNotFoundError(GrainBrokerException):
    """Exception for resources not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            message=f"{resource} not found: {identifier}",
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="RESOURCE_NOT_FOUND",
        )


# Order columns whose foreign keys a request can break, keyed by column name.
FOREIGN_KEY_FIELDS = {
    "customer_id": ("customerId", "Customer"),
    "supplier_id": ("supplierId", "Supplier"),
}


def create_error_response(
    status_code: int,
    message: str,
    error_code: str,
    details: Union[dict, None] = None,
) -> JSONResponse:
    """Wrap a failure in the {"error": {"code", "message", "details"}} envelope.

    ``details`` is left out of the body when there is nothing to add.
    """
    error = {"code": error_code, "message": message}
    if details:
        error["details"] = details
    return JSONResponse(status_code=status_code, content={"error": error})


def _request_extra(request: Request) -> dict:
    return {"path": request.url.path, "method": request.method}


def describe_integrity_error(exc: IntegrityError) -> tuple[str, str, Union[dict, None]]:
    """Map a constraint failure to (error_code, message, details).

    PostgreSQL names the violated constraint ("orders_customer_id_fkey"),
    so the offending field can be reported. SQLite only says
    "FOREIGN KEY constraint failed" and gets the generic message.
    """
    text = str(exc.orig if exc.orig is not None else exc).lower()

    if "unique" in text or "duplicate key" in text:
        return "DUPLICATE_RECORD", "A record with this id already exists", None

    if "foreign key" in text:
        for column, (field, entity) in FOREIGN_KEY_FIELDS.items():
            if column in text:
                return (
                    "FOREIGN_KEY_VIOLATION",
                    f"{entity} does not exist",
                    {"field": field},
                )
        return "FOREIGN_KEY_VIOLATION", "Referenced customer or supplier does not exist", None

    return "INTEGRITY_ERROR", "Database constraint violation", None


async def grainbroker_exception_handler(
    request: Request,
    exc: GrainBrokerException,
) -> JSONResponse:
    logger.warning(
        f"{request.method} {request.url.path} rejected: {exc.error_code} - {exc.message}",
        extra={"error_code": exc.error_code, **_request_extra(request)},
    )
    return create_error_response(exc.status_code, exc.message, exc.error_code)


async def http_exception_handler(
    request: Request,
    exc: Union[HTTPException, StarletteHTTPException],
) -> JSONResponse:
    """Re-wrap framework errors (unknown route, bad method) in the envelope."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}", extra=_request_extra(request))
    return create_error_response(exc.status_code, str(exc.detail), f"HTTP_{exc.status_code}")


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle malformed request bodies and path parameters."""
    errors = [
        {
            "field": " -> ".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(
        f"Malformed request to {request.url.path}: {len(errors)} error(s)",
        extra=_request_extra(request),
    )
    return create_error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation error",
        "VALIDATION_ERROR",
        details={"errors": errors},
    )


async def concurrency_exception_handler(
    request: Request,
    exc: ConcurrencyError,
) -> JSONResponse:
    """Handle a conflict that survived the existence re-check."""
    logger.error(
        f"Unresolved concurrency conflict on {request.url.path}: {exc.message}",
        extra=_request_extra(request),
    )
    return create_error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "The record was changed by another request. Please reload and retry.",
        "CONCURRENCY_CONFLICT",
    )


async def integrity_exception_handler(
    request: Request,
    exc: IntegrityError,
) -> JSONResponse:
    """Report a dangling customer/supplier reference or a reused id as 422."""
    error_code, message, details = describe_integrity_error(exc)
    logger.warning(
        f"{error_code} on {request.method} {request.url.path}: {exc.orig}",
        extra=_request_extra(request),
    )
    return create_error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        message,
        error_code,
        details=details,
    )


async def operational_exception_handler(
    request: Request,
    exc: OperationalError,
) -> JSONResponse:
    logger.error(f"Store unreachable during {request.method} {request.url.path}: {exc.orig}", extra=_request_extra(request))
    return create_error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "Order store is unavailable. Please try again.",
        "DATABASE_UNAVAILABLE",
    )


async def general_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        extra=_request_extra(request),
        exc_info=exc,
    )
    return create_error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred. Please try again later.",
        "INTERNAL_SERVER_ERROR",
    )


def register_exception_handlers(app):
    """Attach the handlers, most specific first."""
    handlers = [
        (GrainBrokerException, grainbroker_exception_handler),
        (HTTPException, http_exception_handler),
        (StarletteHTTPException, http_exception_handler),
        (RequestValidationError, validation_exception_handler),
        (ConcurrencyError, concurrency_exception_handler),
        (IntegrityError, integrity_exception_handler),
        (OperationalError, operational_exception_handler),
        (Exception, general_exception_handler),
    ]
    for exc_class, handler in handlers:
        app.add_exception_handler(exc_class, handler)
