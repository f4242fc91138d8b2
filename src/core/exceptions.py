from __future__ import annotations
from typing import Any


class APIError(Exception):
    def __init__(self, *, message: str, code: str, status: int, errors: Any = None, extra: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.errors = errors
        self.extra = extra or {}


class NotFoundError(APIError):
    """Unknown identity, or no active version left for it."""

    def __init__(self, message: str = "DID document not found", *, code: str = "NOT_FOUND", extra: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status=404, extra=extra)


class NotAuthorizedError(APIError):
    """The principal does not own the identity it tries to mutate."""

    def __init__(self, message: str = "Not authorized to update this DID document", *, code: str = "NOT_AUTHORIZED", extra: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status=403, extra=extra)


class DomainConflictError(APIError):
    def __init__(self, *, message: str, code: str, errors: Any = None, extra: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status=409, errors=errors, extra=extra)


class ConflictError(DomainConflictError):
    """Lost a compare-and-swap race on the active version."""

    def __init__(self, message: str = "DID document was modified concurrently", *, extra: dict[str, Any] | None = None):
        super().__init__(message=message, code="VERSION_CONFLICT", extra=extra)


class AlreadyExistsError(DomainConflictError):
    def __init__(self, message: str = "DID already exists", *, extra: dict[str, Any] | None = None):
        super().__init__(message=message, code="DID_TAKEN", extra=extra)


class UnavailableError(APIError):
    """External identity agent timed out or failed."""

    def __init__(self, message: str = "Identity agent unavailable", *, extra: dict[str, Any] | None = None):
        super().__init__(message=message, code="UNAVAILABLE", status=503, extra=extra)


class DomainValidationError(APIError):
    def __init__(self, *, message: str, code: str = "VALIDATION_ERROR", errors: Any = None, extra: dict[str, Any] | None = None):
        super().__init__(message=message, code=code, status=422, errors=errors, extra=extra)
