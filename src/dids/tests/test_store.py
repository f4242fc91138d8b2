import datetime
import uuid

import pytest
from django.db import IntegrityError, transaction

from src.core.exceptions import AlreadyExistsError, ConflictError, NotAuthorizedError
from src.dids import selectors, services
from src.dids.models import DIDDocumentVersion

pytestmark = pytest.mark.django_db

DID = "did:example:1"


@pytest.fixture
def v1(document_factory):
    return services.insert_initial(identity=DID, payload=document_factory(), owner="alice")


def test_insert_initial_creates_active_first_version(v1):
    assert v1.sequence == 1
    assert v1.is_active is True
    assert v1.owner == "alice"
    assert selectors.get_active(DID).pk == v1.pk


def test_insert_initial_twice_is_rejected(v1, document_factory):
    with pytest.raises(AlreadyExistsError) as exc:
        services.insert_initial(identity=DID, payload=document_factory(), owner="bob")
    assert exc.value.code == "DID_TAKEN"
    assert DIDDocumentVersion.objects.filter(identity=DID).count() == 1


def test_commit_next_version_swaps_active(v1, document_factory):
    v2 = services.commit_next_version(
        identity=DID, expected_active_id=v1.pk, payload=document_factory(note="v2"), owner="alice"
    )

    v1.refresh_from_db()
    assert v1.is_active is False
    assert v2.sequence == 2
    assert v2.is_active is True
    assert [v.sequence for v in selectors.get_history(DID)] == [1, 2]


def test_commit_against_stale_version_conflicts(v1, document_factory):
    services.commit_next_version(
        identity=DID, expected_active_id=v1.pk, payload=document_factory(), owner="alice"
    )

    with pytest.raises(ConflictError) as exc:
        services.commit_next_version(
            identity=DID, expected_active_id=v1.pk, payload=document_factory(), owner="alice"
        )
    assert exc.value.status == 409
    assert len(selectors.get_history(DID)) == 2


def test_commit_against_unknown_version_conflicts(v1, document_factory):
    with pytest.raises(ConflictError):
        services.commit_next_version(
            identity=DID, expected_active_id=uuid.uuid4(), payload=document_factory(), owner="alice"
        )
    assert selectors.get_active(DID).pk == v1.pk


def test_commit_cannot_change_owner(v1, document_factory):
    with pytest.raises(NotAuthorizedError):
        services.commit_next_version(
            identity=DID, expected_active_id=v1.pk, payload=document_factory(), owner="bob"
        )

    # The flip was rolled back with the failed insert.
    v1.refresh_from_db()
    assert v1.is_active is True
    assert len(selectors.get_history(DID)) == 1


def test_deactivate_all_leaves_no_active_version(v1):
    services.deactivate_all(identity=DID, expected_active_id=v1.pk)

    assert selectors.get_active(DID) is None
    assert len(selectors.get_history(DID)) == 1
    with pytest.raises(ConflictError):
        services.deactivate_all(identity=DID, expected_active_id=v1.pk)


def test_database_rejects_second_active_version(v1, document_factory):
    with pytest.raises(IntegrityError), transaction.atomic():
        DIDDocumentVersion.objects.create(
            identity=DID, sequence=2, payload=document_factory(), owner="alice", is_active=True
        )


def test_database_rejects_duplicate_sequence(v1, document_factory):
    with pytest.raises(IntegrityError), transaction.atomic():
        DIDDocumentVersion.objects.create(
            identity=DID, sequence=1, payload=document_factory(), owner="alice", is_active=False
        )


def test_list_owned_returns_active_versions_of_principal(v1, document_factory):
    services.insert_initial(identity="did:example:2", payload=document_factory("did:example:2"), owner="bob")
    v2 = services.commit_next_version(
        identity=DID, expected_active_id=v1.pk, payload=document_factory(), owner="alice"
    )

    owned = selectors.list_owned("alice")

    assert [v.pk for v in owned] == [v2.pk]


def test_retired_version_records_when_it_was_retired(v1, document_factory, monkeypatch):
    retired_at = v1.updated_at + datetime.timedelta(hours=1)
    monkeypatch.setattr(services.timezone, "now", lambda: retired_at)

    services.commit_next_version(
        identity=DID, expected_active_id=v1.pk, payload=document_factory(), owner="alice"
    )

    v1.refresh_from_db()
    assert v1.updated_at == retired_at
