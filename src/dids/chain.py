"""
Version chain manager: the read → authorize → mutate → compare-and-swap cycle
shared by every DID document update.

No locks are taken. A writer that loses the race on the active row re-reads,
re-checks ownership and re-applies its mutation once; a second loss is
surfaced as ConflictError. Heavy contention on a single identity can
therefore starve a writer; callers see the conflict rather than a hang.
"""
from __future__ import annotations

import logging

from src.core.exceptions import ConflictError
from src.dids import policies, selectors, services
from src.dids.models import DIDDocumentVersion
from src.dids.mutators import DocumentMutation

logger = logging.getLogger(__name__)

MAX_RETRIES = 1


def apply_mutation(*, identity: str, principal: str, mutation: DocumentMutation) -> DIDDocumentVersion:
    """
    Commit `mutation` on top of the active version of `identity`.

    Returns the new active version, or the unchanged current version when the
    mutation is a no-op. Raises NotFoundError, NotAuthorizedError,
    DomainValidationError or ConflictError.
    """
    mutation.validate()

    for attempt in range(MAX_RETRIES + 1):
        current = selectors.get_active_or_raise(identity)
        # Gate on the row fetched in this attempt, never an earlier one.
        policies.ensure_can_mutate(current, principal)

        new_payload = mutation.apply(current.payload)
        if new_payload is None:
            logger.info(
                "No-op %s on %s: version %s kept", mutation.action, identity, current.sequence
            )
            return current

        try:
            return services.commit_next_version(
                identity=identity,
                expected_active_id=current.pk,
                payload=new_payload,
                owner=current.owner,
            )
        except ConflictError:
            if attempt >= MAX_RETRIES:
                logger.error(
                    "Giving up %s on %s after %s attempts", mutation.action, identity, attempt + 1
                )
                raise
            logger.warning(
                "Lost version race on %s (attempt %s, expected v%s); retrying",
                identity,
                attempt + 1,
                current.sequence,
            )

    raise AssertionError("unreachable")


def deactivate(*, identity: str, principal: str) -> DIDDocumentVersion:
    """
    Deactivate `identity`. Returns the version that was active when the
    deactivation won. Same retry discipline as apply_mutation.
    """
    for attempt in range(MAX_RETRIES + 1):
        current = selectors.get_active_or_raise(identity)
        policies.ensure_can_mutate(current, principal)
        try:
            services.deactivate_all(identity=identity, expected_active_id=current.pk)
        except ConflictError:
            if attempt >= MAX_RETRIES:
                logger.error("Giving up deactivation of %s after %s attempts", identity, attempt + 1)
                raise
            logger.warning("Lost version race deactivating %s (attempt %s); retrying", identity, attempt + 1)
            continue
        current.is_active = False
        return current

    raise AssertionError("unreachable")
