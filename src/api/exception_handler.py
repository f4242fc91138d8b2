import logging
import re
import traceback

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from ninja.errors import ValidationError as NinjaValidationError
from ninja_extra import NinjaExtraAPI

# psycopg 3: use error classes under psycopg.errors (no "errorcodes" module)
from psycopg import errors as pg_errors

from src.core.exceptions import APIError, AlreadyExistsError, ConflictError

logger = logging.getLogger(__name__)

# Constraint that surfaced from the database -> domain error it stands for.
CONSTRAINT_ERRORS = {
    "did_version_single_active": ConflictError,
    "did_version_sequence_unique": ConflictError,
    "did_version_sequence_positive": ConflictError,
}

_SQLITE_INDEX = re.compile(r"index '([^']+)'")


def _request_id(request) -> str:
    return request.headers.get("X-Request-Id", "") or request.META.get("HTTP_X_REQUEST_ID", "") or ""


def _constraint_name(exc: IntegrityError) -> str:
    cause = exc.__cause__
    diag = getattr(cause, "diag", None)
    name = getattr(diag, "constraint_name", None)
    if name:
        return name
    # sqlite has no diagnostics; some of its messages name the index
    match = _SQLITE_INDEX.search(str(exc))
    return match.group(1) if match else ""


def _is_unique_violation(exc: IntegrityError) -> bool:
    cause = exc.__cause__
    if isinstance(cause, pg_errors.UniqueViolation):
        return True
    return getattr(cause, "sqlstate", "") == "23505" or "UNIQUE constraint failed" in str(exc)


def attach_exception_handlers(api: NinjaExtraAPI) -> None:
    def _envelope(request, *, message: str, status: int, code: str, errors=None, extra=None):
        body = {
            "success": False,
            "message": message,
            "data": {},
            "extra": extra or {},
            "errors": errors,
            "code": code,
            "request_id": _request_id(request),
        }
        return api.create_response(request, body, status=status)

    def _from_api_error(request, exc: APIError):
        return _envelope(
            request,
            message=exc.message,
            status=exc.status,
            code=exc.code,
            errors=exc.errors,
            extra=exc.extra,
        )

    @api.exception_handler(APIError)
    def on_api_error(request, exc: APIError):
        if exc.status >= 500:
            logger.warning("%s on %s: %s %s", exc.code, request.path, exc.message, exc.extra)
        return _from_api_error(request, exc)

    @api.exception_handler(IntegrityError)
    def on_integrity_error(request, exc: IntegrityError):
        constraint = _constraint_name(exc)
        logger.warning("Integrity error on %s (constraint=%s)", request.path, constraint or "?")
        error_cls = CONSTRAINT_ERRORS.get(constraint)
        if error_cls is None and _is_unique_violation(exc):
            error_cls = AlreadyExistsError
        if error_cls is None:
            return _envelope(request, message="Conflict", status=409, code="CONFLICT")
        return _from_api_error(request, error_cls())

    @api.exception_handler(DjangoValidationError)
    def on_django_validation_error(request, exc: DjangoValidationError):
        errors = exc.message_dict if hasattr(exc, "message_dict") else exc.messages
        return _envelope(request, message="Validation error", status=422, code="VALIDATION_ERROR", errors=errors)

    @api.exception_handler(NinjaValidationError)
    def on_ninja_validation_error(request, exc: NinjaValidationError):
        return _envelope(request, message="Validation error", status=422, code="VALIDATION_ERROR", errors=exc.errors)

    @api.exception_handler(Exception)
    def on_unexpected_error(request, exc: Exception):
        logger.exception("Unhandled error on %s", request.path)
        if not settings.DEBUG:
            return _envelope(request, message="Unexpected error", status=500, code="INTERNAL_ERROR")
        return _envelope(
            request,
            message="Unexpected error",
            status=500,
            code="INTERNAL_ERROR",
            errors=str(exc),
            extra={"trace": traceback.format_exc(limit=20)},
        )
