from types import SimpleNamespace as NS

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from src.dids import chain, services
from src.dids.integrity import chain_violations
from src.dids.models import DIDDocumentVersion
from src.dids.mutators import AddService


def make_version(sequence, is_active=False, owner="alice"):
    return NS(sequence=sequence, is_active=is_active, owner=owner)


def test_sound_chain_has_no_violations():
    versions = [make_version(2, is_active=True), make_version(1)]
    assert chain_violations(versions) == []


def test_deactivated_chain_is_sound():
    assert chain_violations([make_version(1), make_version(2)]) == []


def test_reports_each_broken_invariant():
    versions = [
        make_version(1, is_active=True),
        make_version(3, is_active=True, owner="bob"),
    ]

    problems = chain_violations(versions)

    assert len(problems) == 3
    assert problems[0].startswith("more than one active version")
    assert problems[1].startswith("sequence is not 1..2")
    assert problems[2].startswith("owner changed")


def test_stale_active_version_is_reported():
    problems = chain_violations([make_version(1, is_active=True), make_version(2)])
    assert problems == ["active version v1 is not the latest (v2)"]


@pytest.mark.django_db
def test_validate_command_accepts_store_built_through_chain(document_factory, capsys):
    services.insert_initial(identity="did:example:1", payload=document_factory(), owner="alice")
    chain.apply_mutation(
        identity="did:example:1",
        principal="alice",
        mutation=AddService({"id": "svc-1", "type": "X", "serviceEndpoint": "https://e"}),
    )

    call_command("dids_validate")

    assert "Valid" in capsys.readouterr().out


@pytest.mark.django_db
def test_validate_command_flags_owner_drift(document_factory):
    DIDDocumentVersion.objects.create(
        identity="did:example:1", sequence=1, payload=document_factory(), owner="alice", is_active=False
    )
    DIDDocumentVersion.objects.create(
        identity="did:example:1", sequence=2, payload=document_factory(), owner="bob", is_active=True
    )

    with pytest.raises(CommandError):
        call_command("dids_validate", identity="did:example:1")


@pytest.mark.django_db
def test_validate_command_unknown_identity():
    with pytest.raises(CommandError, match="Unknown DID"):
        call_command("dids_validate", identity="did:example:missing")


@pytest.mark.django_db
def test_history_command_marks_active_version(document_factory, capsys):
    v1 = services.insert_initial(identity="did:example:1", payload=document_factory(), owner="alice")
    services.commit_next_version(
        identity="did:example:1", expected_active_id=v1.pk, payload=document_factory(), owner="alice"
    )

    call_command("dids_history", "did:example:1")

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("  v1")
    assert lines[1].startswith("* v2")
