from __future__ import annotations

from itertools import groupby

from src.dids.models import DIDDocumentVersion


def chain_violations(versions) -> list[str]:
    """
    Problems found in one identity's chain, given its versions in any order.
    Empty list means the chain is sound.
    """
    ordered = sorted(versions, key=lambda v: v.sequence)
    if not ordered:
        return []
    problems: list[str] = []

    active = [v for v in ordered if v.is_active]
    if len(active) > 1:
        problems.append(
            "more than one active version: " + ", ".join(f"v{v.sequence}" for v in active)
        )
    if active and active[-1] is not ordered[-1]:
        problems.append(f"active version v{active[-1].sequence} is not the latest (v{ordered[-1].sequence})")

    sequences = [v.sequence for v in ordered]
    expected = list(range(1, len(ordered) + 1))
    if sequences != expected:
        problems.append(f"sequence is not 1..{len(ordered)}: {sequences}")

    owners = {v.owner for v in ordered}
    if len(owners) > 1:
        problems.append(f"owner changed along the chain: {sorted(owners)}")

    return problems


def scan_store(identity: str | None = None) -> dict[str, list[str]]:
    """Map identity -> problems, for every identity with at least one problem."""
    qs = DIDDocumentVersion.objects.order_by("identity", "sequence")
    if identity:
        qs = qs.filter(identity=identity)
    report: dict[str, list[str]] = {}
    for did, versions in groupby(qs.iterator(), key=lambda v: v.identity):
        problems = chain_violations(list(versions))
        if problems:
            report[did] = problems
    return report
