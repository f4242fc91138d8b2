import httpx
import pytest
from django.core.exceptions import ImproperlyConfigured

from src.core.exceptions import UnavailableError
from src.dids.agent.factory import build_identity_agent
from src.dids.agent.local import LocalIdentityAgent
from src.dids.agent.remote import HttpIdentityAgent

BASE = "http://agent.test"
MINTED = "did:key:z6Mkminted"


def make_agent(handler):
    client = httpx.Client(transport=httpx.MockTransport(handler), base_url=BASE)
    return HttpIdentityAgent(BASE, client=client)


def test_local_agent_mints_did_web_with_ed25519_key():
    minted = LocalIdentityAgent("registry.test").mint_identity()

    assert minted.did.startswith("did:web:registry.test:users:")
    vm = minted.verification_method
    assert vm["id"].startswith(f"{minted.did}#key-")
    assert vm["controller"] == minted.did
    assert vm["publicKeyJwk"]["kty"] == "OKP"
    assert vm["publicKeyJwk"]["crv"] == "Ed25519"
    assert "d" not in vm["publicKeyJwk"]


def test_local_agent_mints_distinct_identities():
    agent = LocalIdentityAgent("registry.test")
    assert agent.mint_identity().did != agent.mint_identity().did
    assert agent.resolve_externally("did:web:elsewhere") is None


def test_http_agent_mints_from_registrar_state():
    vm = {"id": f"{MINTED}#k1", "type": "Ed25519VerificationKey2020", "controller": MINTED, "publicKeyMultibase": "z6Mk"}

    def handler(request):
        assert request.method == "POST"
        assert request.url.path == "/1.0/create"
        assert request.url.params["method"] == "key"
        return httpx.Response(
            200,
            json={
                "didState": {
                    "state": "finished",
                    "did": MINTED,
                    "didDocument": {"id": MINTED, "verificationMethod": [vm], "authentication": [vm["id"]]},
                }
            },
        )

    minted = make_agent(handler).mint_identity()

    assert minted.did == MINTED
    assert minted.verification_method == vm


def test_http_agent_mint_without_key_is_unavailable():
    def handler(request):
        return httpx.Response(200, json={"didState": {"state": "failed", "did": MINTED}})

    with pytest.raises(UnavailableError):
        make_agent(handler).mint_identity()


def test_http_agent_server_error_is_unavailable():
    agent = make_agent(lambda request: httpx.Response(500, text="boom"))

    with pytest.raises(UnavailableError):
        agent.mint_identity()
    with pytest.raises(UnavailableError):
        agent.resolve_externally(MINTED)


def test_http_agent_resolve_unwraps_resolution_result():
    def handler(request):
        assert request.url.path == f"/1.0/identifiers/{MINTED}"
        return httpx.Response(200, json={"didDocument": {"id": MINTED}, "didDocumentMetadata": {}})

    assert make_agent(handler).resolve_externally(MINTED) == {"id": MINTED}


def test_http_agent_resolve_accepts_bare_document():
    agent = make_agent(lambda request: httpx.Response(200, json={"id": MINTED}))
    assert agent.resolve_externally(MINTED) == {"id": MINTED}


def test_http_agent_resolve_unknown_is_none():
    agent = make_agent(lambda request: httpx.Response(404, json={"error": "notFound"}))
    assert agent.resolve_externally(MINTED) is None


def test_factory_builds_configured_backend(settings):
    settings.DID_DOMAIN_HOST = "registry.test"

    local = build_identity_agent({"BACKEND": "local"})
    remote = build_identity_agent({"BACKEND": "http", "URL": BASE, "METHOD": "web"})

    assert isinstance(local, LocalIdentityAgent)
    assert local.host == "registry.test"
    assert isinstance(remote, HttpIdentityAgent)
    assert remote.method == "web"
    remote.close()


def test_factory_rejects_unknown_backend():
    with pytest.raises(ImproperlyConfigured):
        build_identity_agent({"BACKEND": "carrier-pigeon"})
