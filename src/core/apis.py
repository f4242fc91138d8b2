from __future__ import annotations
from typing import Any

from django.contrib.auth.models import AnonymousUser
from ninja_extra.controllers import ControllerBase
from ninja_jwt.authentication import JWTAuth


def allow_anonymous(request):
    """Last auth callback of public routes: lets callers without a token through."""
    return AnonymousUser()


def optional_jwt():
    """
    Auth for public routes that still want to know who is calling: a valid
    Bearer token sets request.auth to its user, no token means anonymous,
    an invalid token is rejected.
    """
    return [JWTAuth(), allow_anonymous]


class BaseAPIController(ControllerBase):
    @property
    def current_request(self):
        return getattr(self, "context", None) and getattr(self.context, "request", None)

    @property
    def principal(self) -> str | None:
        """
        Id of the authenticated user (JWT auth sets request.auth, session auth
        request.user); None for anonymous callers.
        """
        request = self.current_request
        if not request:
            return None
        user = getattr(request, "auth", None) or getattr(request, "user", None)
        if user is None or not getattr(user, "is_authenticated", False):
            return None
        return str(user.pk)

    def create_response(self, *, message: str = "", data: Any = None, extra: dict[str, Any] | None = None,
                        errors: Any = None, status_code: int = 200, code: str | None = None,):
        request = self.current_request
        request_id = ""
        if request:
            request_id = request.headers.get("X-Request-Id", "") or request.META.get("HTTP_X_REQUEST_ID", "") or ""

        payload = {"success": 200 <= status_code < 400,
                   "message": message,
                   "data": data if data is not None else {},
                   "extra": extra or {},
                   "errors": errors,
                   "code": code,
                   "request_id": request_id,
                   }
        return super().create_response(payload, status_code=status_code)
