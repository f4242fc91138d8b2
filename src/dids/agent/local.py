from __future__ import annotations

import logging

from cryptography.hazmat.primitives.asymmetric import ed25519

from src.dids.agent.base import MintedIdentity
from src.dids.utils.ids import generate_did_suffix, generate_key_id
from src.dids.utils.jwk import jwk_from_public_key

logger = logging.getLogger(__name__)


class LocalIdentityAgent:
    """
    In-process agent minting did:web identifiers under this registry's host.

    Only the public half of the generated Ed25519 key is kept; the private
    key is discarded, so the minted method is placeholder key material until
    the owner rotates in their own key.
    """

    def __init__(self, host: str):
        self.host = host

    def mint_identity(self) -> MintedIdentity:
        did = f"did:web:{self.host}:users:{generate_did_suffix()}"
        public_key = ed25519.Ed25519PrivateKey.generate().public_key()
        method = {
            "id": f"{did}#{generate_key_id()}",
            "type": "JsonWebKey2020",
            "controller": did,
            "publicKeyJwk": jwk_from_public_key(public_key),
        }
        logger.info("Minted %s", did)
        return MintedIdentity(did=did, verification_method=method)

    def resolve_externally(self, did: str):
        # Nothing outside the local store to consult.
        return None
