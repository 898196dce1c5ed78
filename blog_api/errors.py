"""
HTTP error mapping.

Only this module and the routers speak HTTP status codes; services and
repositories report absence as ``None`` / ``False`` and let engine errors
propagate.

- Request validation failures → 400 with a problem body listing the
  messages per field.
- Any ``SQLAlchemyError`` that reaches the boundary → logged with its
  traceback and answered with a generic 500.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

VALIDATION_TITLE = "One or more validation errors occurred."

# First element of a FastAPI error location names the request part.
_REQUEST_PARTS = frozenset({"body", "query", "path", "header", "cookie"})


def validation_problem(errors: dict[str, list[str]]) -> JSONResponse:
    """Build the 400 response used for every validation failure."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "title": VALIDATION_TITLE,
            "status": status.HTTP_400_BAD_REQUEST,
            "errors": errors,
        },
    )


def collect_field_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    """Group validation messages by field name (request part stripped)."""
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        loc = list(err.get("loc", ()))
        part = loc[0] if loc else "body"
        if loc and loc[0] in _REQUEST_PARTS:
            loc = loc[1:]
        key = ".".join(str(p) for p in loc) or str(part)
        errors.setdefault(key, []).append(err.get("msg", "Invalid value"))
    return errors


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = collect_field_errors(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, errors)
    return validation_problem(errors)


async def _persistence_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "Unhandled database error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, _persistence_error_handler)
