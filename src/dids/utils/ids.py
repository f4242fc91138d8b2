from __future__ import annotations
from uuid import uuid4


def generate_key_id() -> str:
    """
    Fragment for a freshly minted verification method.
    Format: key-(8 hex chars).
    """
    return f"key-{uuid4().hex[:8]}"


def generate_did_suffix() -> str:
    return uuid4().hex


def method_of(did: str) -> str:
    """did:web:host:x -> "web"."""
    parts = did.split(":", 2)
    if len(parts) < 3 or parts[0] != "did" or not parts[1]:
        raise ValueError(f"Not a DID: {did!r}")
    return parts[1]
