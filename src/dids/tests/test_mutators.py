import pytest

from src.core.exceptions import DomainValidationError
from src.dids.mutators import AddService, AddVerificationMethod, RemoveService, ReplaceDocument

SERVICE = {"id": "svc-1", "type": "X", "serviceEndpoint": "https://e"}
METHOD = {
    "id": "did:example:1#key-2",
    "type": "Ed25519VerificationKey2020",
    "controller": "did:example:1",
    "publicKeyMultibase": "z6Mkanother",
}


def test_replace_document_keeps_subject(document_factory):
    current = document_factory()
    replacement = document_factory(did="did:example:other", alsoKnownAs=["https://a"])

    out = ReplaceDocument(replacement).apply(current)

    assert out["id"] == "did:example:1"
    assert out["alsoKnownAs"] == ["https://a"]
    assert replacement["id"] == "did:example:other"


def test_replace_document_rejects_document_without_id():
    with pytest.raises(DomainValidationError) as exc:
        ReplaceDocument({"service": []}).validate()
    assert exc.value.status == 422
    assert exc.value.errors


def test_add_verification_method_appends_copy(document_factory):
    current = document_factory()
    out = AddVerificationMethod(METHOD).apply(current)

    assert out["authentication"] == [METHOD]
    assert current["authentication"] == []
    assert out["authentication"][0] is not METHOD


def test_add_verification_method_twice_is_not_deduplicated(document_factory):
    mutation = AddVerificationMethod(METHOD)
    out = mutation.apply(mutation.apply(document_factory()))
    assert len(out["authentication"]) == 2


def test_add_verification_method_without_key_material_is_invalid():
    method = {k: v for k, v in METHOD.items() if k != "publicKeyMultibase"}
    with pytest.raises(DomainValidationError):
        AddVerificationMethod(method).validate()


def test_add_service_creates_missing_list():
    out = AddService(SERVICE).apply({"id": "did:example:1"})
    assert out["service"] == [SERVICE]


def test_add_service_requires_endpoint():
    with pytest.raises(DomainValidationError):
        AddService({"id": "svc-1", "type": "X"}).validate()


def test_remove_service_drops_matching_entry(document_factory):
    other = {"id": "svc-2", "type": "Y", "serviceEndpoint": "https://f"}
    current = document_factory(service=[SERVICE, other])

    out = RemoveService("svc-1").apply(current)

    assert out["service"] == [other]
    assert len(current["service"]) == 2


def test_remove_service_absent_is_noop(document_factory):
    assert RemoveService("svc-1").apply(document_factory()) is None
    assert RemoveService("svc-1").apply({"id": "did:example:1"}) is None
