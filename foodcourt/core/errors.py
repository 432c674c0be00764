"""
Ordering error taxonomy.

Services raise these; the API layer turns them into JSON responses with
a matching status code (see ``register_error_handlers``).
"""
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

log = logging.getLogger(__name__)


class OrderingError(Exception):
    kind = "internal"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(OrderingError):
    """Vendor, menu item or order does not exist."""
    kind = "not_found"
    status_code = 404


class InvalidItem(OrderingError):
    """An order references a missing or unavailable menu item."""
    kind = "invalid_item"
    status_code = 400


class ValidationError(OrderingError):
    """Malformed input: empty item list, bad quantity, missing payment method."""
    kind = "validation_error"
    status_code = 422


class InvalidTransition(OrderingError):
    """Illegal order lifecycle move."""
    kind = "invalid_transition"
    status_code = 409


class Conflict(OrderingError):
    """Queue number race lost after all retries."""
    kind = "conflict"
    status_code = 409


class Forbidden(OrderingError):
    kind = "forbidden"
    status_code = 403


class Internal(OrderingError):
    """Store failure."""
    kind = "internal"
    status_code = 500


async def ordering_error_handler(request: Request, exc: OrderingError):
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "kind": exc.kind},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Same envelope as service-level ValidationError
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{location}: {first.get('msg')}" if location else str(first.get("msg", "Invalid request"))
    return JSONResponse(
        status_code=422,
        content={"error": message, "kind": ValidationError.kind, "details": jsonable_encoder(errors)},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderingError, ordering_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
