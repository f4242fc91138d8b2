import pytest

from src.core.exceptions import DomainValidationError, NotAuthorizedError, NotFoundError
from src.dids.mutators import AddService

pytestmark = pytest.mark.django_db

SERVICE = {"id": "svc-1", "type": "X", "serviceEndpoint": "https://e"}


def test_service_add_remove_scenario(registry):
    created = registry.create_identity("alice")
    did = created.identity
    assert did == "did:example:1"
    assert created.sequence == 1
    assert registry.get_document(did) == created.payload

    registry.add_service(did, "alice", SERVICE)
    history = registry.get_history(did)
    assert len(history) == 2
    assert SERVICE in history[1].payload["service"]

    payload = registry.remove_service(did, "alice", "svc-1")
    assert SERVICE not in payload["service"]
    # Content went back to v1, but the removal is still recorded.
    assert len(registry.get_history(did)) == 3

    again = registry.remove_service(did, "alice", "svc-1")
    assert again == payload
    assert len(registry.get_history(did)) == 3


def test_created_document_carries_minted_key(registry):
    created = registry.create_identity("alice")

    assert created.payload["id"] == created.identity
    assert created.payload["authentication"][0]["id"] == f"{created.identity}#key-1"
    assert created.owner == "alice"


def test_created_document_gets_registry_service_when_configured(registry, settings):
    settings.DID_DEFAULT_SERVICE_ENDPOINT = "https://registry.test/dids/"

    created = registry.create_identity("alice")

    assert created.payload["service"] == [
        {
            "id": f"{created.identity}#registry-service",
            "type": "DIDRegistryService",
            "serviceEndpoint": f"https://registry.test/dids/{created.identity}",
        }
    ]


def test_create_requires_principal(registry):
    with pytest.raises(DomainValidationError):
        registry.create_identity("")


def test_only_owner_can_update(registry):
    did = registry.create_identity("alice").identity

    assert registry.is_owner(did, "alice") is True
    assert registry.is_owner(did, "bob") is False
    with pytest.raises(NotAuthorizedError):
        registry.add_service(did, "bob", SERVICE)


def test_replace_document_keeps_identity(registry, document_factory):
    did = registry.create_identity("alice").identity

    payload = registry.replace_document(did, "alice", document_factory("did:example:999", controller="x"))

    assert payload["id"] == did
    assert payload["controller"] == "x"


def test_add_verification_method_appends_to_authentication(registry):
    did = registry.create_identity("alice").identity
    method = {
        "id": f"{did}#key-2",
        "type": "JsonWebKey2020",
        "controller": did,
        "publicKeyJwk": {"kty": "OKP", "crv": "Ed25519", "x": "abc"},
    }

    payload = registry.add_verification_method(did, "alice", method)

    assert [m["id"] for m in payload["authentication"]] == [f"{did}#key-1", f"{did}#key-2"]


def test_deactivated_identity_is_gone_but_history_stays(registry, agent):
    did = registry.create_identity("alice").identity
    registry.add_service(did, "alice", SERVICE)

    registry.deactivate_identity(did, "alice")

    with pytest.raises(NotFoundError):
        registry.get_document(did)
    history = registry.get_history(did)
    assert [v.sequence for v in history] == [1, 2]
    assert not any(v.is_active for v in history)
    assert registry.list_owned("alice") == []
    # Local miss falls through to the agent, which does not know it either.
    assert agent.resolve_calls == [did]


def test_list_owned_only_returns_principals_dids(registry):
    mine = registry.create_identity("alice").identity
    registry.create_identity("bob")

    assert [v.identity for v in registry.list_owned("alice")] == [mine]


def test_mutate_returns_the_version_it_committed(registry):
    did = registry.create_identity("alice").identity

    committed = registry.mutate(did, "alice", AddService(SERVICE))
    registry.remove_service(did, "alice", "svc-1")

    assert committed.sequence == 2
    assert committed.payload["service"] == [SERVICE]
    assert committed.is_active is True
    assert registry.get_history(did)[-1].sequence == 3
