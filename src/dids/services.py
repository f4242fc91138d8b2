"""
Write primitives of the DID document store.

Invariants (enforced here, not by callers):
    - at most one active version per identity
    - sequences per identity are 1..n without gaps; only the last may be active
    - the owner never changes along a chain

Every function below either writes nothing or performs its whole write in a
single transaction. Concurrent writers are serialized by the conditional
UPDATE on `is_active`: the loser sees zero affected rows and gets
ConflictError.
"""
from __future__ import annotations

import logging
import uuid

from django.db import IntegrityError, transaction
from django.utils import timezone

from src.core.exceptions import AlreadyExistsError, ConflictError, NotAuthorizedError
from src.dids.models import DIDDocumentVersion

logger = logging.getLogger(__name__)


def insert_initial(*, identity: str, payload: dict, owner: str) -> DIDDocumentVersion:
    """
    Create version 1 of a new identity.
    Fails with AlreadyExistsError if any version (active or not) exists.
    """
    try:
        with transaction.atomic():
            if DIDDocumentVersion.objects.filter(identity=identity).exists():
                raise AlreadyExistsError(extra={"did": identity})
            version = DIDDocumentVersion.objects.create(
                identity=identity,
                sequence=1,
                payload=payload,
                owner=owner,
                is_active=True,
            )
    except IntegrityError as exc:
        # A concurrent creator won the (identity, sequence) unique index.
        raise AlreadyExistsError(extra={"did": identity}) from exc

    logger.info("DID created: %s owner=%s", identity, owner)
    return version


def _flip_inactive(identity: str, expected_active_id: uuid.UUID) -> int:
    # update() bypasses auto_now; stamp the retirement explicitly.
    return DIDDocumentVersion.objects.filter(
        pk=expected_active_id, identity=identity, is_active=True
    ).update(is_active=False, updated_at=timezone.now())


def commit_next_version(
    *, identity: str, expected_active_id: uuid.UUID, payload: dict, owner: str
) -> DIDDocumentVersion:
    """
    Compare-and-swap: deactivate `expected_active_id` if it is still active and
    append the next version, atomically.

    Raises ConflictError when the expected row is no longer active (another
    writer or a deactivation got there first); nothing is inserted then.
    """
    try:
        with transaction.atomic():
            if _flip_inactive(identity, expected_active_id) != 1:
                raise ConflictError(
                    extra={"did": identity, "expected_version_id": str(expected_active_id)}
                )
            previous = DIDDocumentVersion.objects.only("sequence", "owner").get(pk=expected_active_id)
            if previous.owner != owner:
                raise NotAuthorizedError(
                    "Ownership of a DID cannot change through an update",
                    extra={"did": identity},
                )
            version = DIDDocumentVersion.objects.create(
                identity=identity,
                sequence=previous.sequence + 1,
                payload=payload,
                owner=owner,
                is_active=True,
            )
    except IntegrityError as exc:
        raise ConflictError(extra={"did": identity}) from exc

    logger.info("DID updated: %s v%s", identity, version.sequence)
    return version


def deactivate_all(*, identity: str, expected_active_id: uuid.UUID) -> None:
    """
    Turn the active version off without a replacement. Terminal: the identity
    never has an active version again.
    """
    with transaction.atomic():
        if _flip_inactive(identity, expected_active_id) != 1:
            raise ConflictError(
                extra={"did": identity, "expected_version_id": str(expected_active_id)}
            )

    logger.info("DID deactivated: %s", identity)
