from __future__ import annotations

from src.core.exceptions import NotFoundError
from src.dids.models import DIDDocumentVersion


def get_active(identity: str) -> DIDDocumentVersion | None:
    """
    The single active version for `identity`, or None when the identity is
    unknown or deactivated.
    """
    return DIDDocumentVersion.objects.filter(identity=identity, is_active=True).first()


def get_active_or_raise(identity: str) -> DIDDocumentVersion:
    current = get_active(identity)
    if current is None:
        raise NotFoundError(extra={"did": identity})
    return current


def get_history(identity: str) -> list[DIDDocumentVersion]:
    """
    Every version of `identity`, ascending by sequence.
    Empty list when the store has never seen the identity.
    """
    return list(DIDDocumentVersion.objects.filter(identity=identity).order_by("sequence"))


def list_owned(principal: str) -> list[DIDDocumentVersion]:
    """Active versions whose owner is `principal`, newest first."""
    return list(
        DIDDocumentVersion.objects.filter(owner=principal, is_active=True).order_by("-created_at")
    )
