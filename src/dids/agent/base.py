from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class MintedIdentity:
    did: str
    verification_method: dict[str, Any]


class IdentityAgent(Protocol):
    """
    External collaborator owning DID-method specifics: minting identifiers
    with their key material, and resolving DIDs this registry does not hold.
    """

    def mint_identity(self) -> MintedIdentity: ...

    def resolve_externally(self, did: str) -> dict[str, Any] | None:
        """The DID document, or None if the method does not know `did`."""
        ...
