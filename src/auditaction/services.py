from __future__ import annotations

import logging
import uuid
from typing import Any, NamedTuple

from django.http import HttpRequest

from src.auditaction.models import AuditAction, AuditCategory, AuditLog, Severity

logger = logging.getLogger(__name__)

# Target type recorded for each action; anything else is a plain DID access.
_TARGET_TYPES = {
    AuditAction.DID_HISTORY_READ: "did_history",
}


class RequestMeta(NamedTuple):
    ip_address: str | None = None
    user_agent: str = ""
    request_id: str = ""


def _infer_category_from_action(action: str) -> str:
    """
    Category from the action prefix (DID_CREATED -> DID), SYSTEM when unknown.
    """
    prefix = (action or "").split("_", 1)[0].upper()
    return prefix if prefix in AuditCategory.values else AuditCategory.SYSTEM


def _client_ip(request: HttpRequest) -> str | None:
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.META.get("REMOTE_ADDR") or None


def _extract_request_meta(request: HttpRequest | None) -> RequestMeta:
    if request is None:
        return RequestMeta()
    # Falls back to request.id when a middleware assigned one
    req_id = request.headers.get("X-Request-Id") or getattr(request, "id", "") or ""
    return RequestMeta(
        ip_address=_client_ip(request),
        user_agent=request.META.get("HTTP_USER_AGENT", ""),
        request_id=str(req_id),
    )


def _json_sanitize(obj: Any) -> Any:
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, dict):
        return {str(k): _json_sanitize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [_json_sanitize(v) for v in obj]
    if isinstance(obj, uuid.UUID):
        return str(obj)
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    return str(obj)


def audit_action_create(
    *,
    principal,
    action: str,
    details: dict[str, Any] | None = None,
    category: str | None = None,
    target_type: str = "",
    target_id: str | None = None,
    severity: str = Severity.INFO,
    request: HttpRequest | None = None,
) -> AuditLog:
    """
    Create a single audit entry.
    - If category is None, inferred from action prefix.
    - If request is provided, IP, UA and request_id are captured.
    """
    meta = _extract_request_meta(request)
    entry = AuditLog.objects.create(
        principal="" if principal is None else str(principal),
        category=category or _infer_category_from_action(action),
        action=action,
        target_type=target_type,
        target_id=target_id,
        details=_json_sanitize(details or {}),
        severity=severity,
        ip_address=meta.ip_address,
        user_agent=meta.user_agent,
        request_id=meta.request_id,
    )
    logger.debug("audit %s %s by %s", action, target_id, entry.principal or "-")
    return entry


def record_access(principal, identity: str, action: str, *, request: HttpRequest | None = None,
                  details: dict[str, Any] | None = None) -> AuditLog:
    """Audit sink for DID operations: who did what to which DID."""
    return audit_action_create(
        principal=principal,
        action=action,
        category=AuditCategory.DID,
        target_type=_TARGET_TYPES.get(action, "did"),
        target_id=identity,
        details=details,
        request=request,
    )
