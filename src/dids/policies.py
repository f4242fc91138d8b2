# file: src/dids/policies.py
from __future__ import annotations

from src.core.exceptions import NotAuthorizedError
from src.dids import selectors


def can_mutate(version, principal) -> bool:
    """
    Owner-only: only the principal recorded on the active version may change
    the chain. No active version means nobody owns it (yet, or any more).
    """
    if version is None or not getattr(version, "is_active", False):
        return False
    if principal is None or principal == "":
        return False
    return str(getattr(version, "owner", "")) == str(principal)


def authorize(identity: str, principal) -> bool:
    return can_mutate(selectors.get_active(identity), principal)


def ensure_can_mutate(version, principal) -> None:
    if not can_mutate(version, principal):
        raise NotAuthorizedError(extra={"did": getattr(version, "identity", None)})
