import itertools

import pytest

from src.dids.agent.base import MintedIdentity


class FakeAgent:
    """Mints did:example:1, did:example:2, ... and resolves from a dict."""

    def __init__(self, external=None):
        self._counter = itertools.count(1)
        self.external = dict(external or {})
        self.resolve_calls = []

    def mint_identity(self):
        did = f"did:example:{next(self._counter)}"
        method = {
            "id": f"{did}#key-1",
            "type": "Ed25519VerificationKey2020",
            "controller": did,
            "publicKeyMultibase": "z6MkfakeKeyMaterial",
        }
        return MintedIdentity(did=did, verification_method=method)

    def resolve_externally(self, did):
        self.resolve_calls.append(did)
        return self.external.get(did)


@pytest.fixture
def agent():
    return FakeAgent()


@pytest.fixture
def resolver(agent):
    from src.dids.resolver.services import IdentityResolver

    r = IdentityResolver(agent, timeout=0.5, max_workers=2)
    yield r
    r.shutdown()


@pytest.fixture
def registry(agent, resolver, settings):
    from src.dids.registry import IdentityRegistry

    settings.DID_DEFAULT_SERVICE_ENDPOINT = ""
    return IdentityRegistry(agent=agent, resolver=resolver)


@pytest.fixture
def document_factory():
    def make(did="did:example:1", **extra):
        doc = {
            "@context": ["https://www.w3.org/ns/did/v1"],
            "id": did,
            "authentication": [],
            "service": [],
        }
        doc.update(extra)
        return doc

    return make
