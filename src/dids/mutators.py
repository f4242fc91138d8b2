"""
Pure transformations of a DID Document payload.

Each mutation is a small frozen object with `apply(payload)`. It returns the
new payload, or None when applying it would change nothing (the chain
manager then skips the commit and keeps the current version). Inputs are
deep-copied; no mutator ever touches storage.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, ClassVar

from src.dids.utils.validators import (
    validate_did_document,
    validate_service,
    validate_verification_method,
)


class DocumentMutation:
    action: ClassVar[str] = "update"

    def validate(self) -> None:
        """Raise DomainValidationError before any store access."""

    def apply(self, payload: dict[str, Any]) -> dict[str, Any] | None:
        raise NotImplementedError


@dataclass(frozen=True)
class ReplaceDocument(DocumentMutation):
    document: dict[str, Any]
    action: ClassVar[str] = "replace_document"

    def validate(self) -> None:
        validate_did_document(self.document)

    def apply(self, payload):
        new_doc = copy.deepcopy(self.document)
        # The subject of a chain never changes.
        if "id" in payload:
            new_doc["id"] = payload["id"]
        return new_doc


@dataclass(frozen=True)
class AddVerificationMethod(DocumentMutation):
    """Appended as-is: the same method added twice yields two versions."""

    method: dict[str, Any]
    action: ClassVar[str] = "add_verification_method"

    def validate(self) -> None:
        validate_verification_method(self.method)

    def apply(self, payload):
        doc = copy.deepcopy(payload)
        doc.setdefault("authentication", [])
        doc["authentication"].append(copy.deepcopy(self.method))
        return doc


@dataclass(frozen=True)
class AddService(DocumentMutation):
    service: dict[str, Any]
    action: ClassVar[str] = "add_service"

    def validate(self) -> None:
        validate_service(self.service)

    def apply(self, payload):
        doc = copy.deepcopy(payload)
        doc.setdefault("service", [])
        doc["service"].append(copy.deepcopy(self.service))
        return doc


@dataclass(frozen=True)
class RemoveService(DocumentMutation):
    service_id: str
    action: ClassVar[str] = "remove_service"

    def apply(self, payload):
        services = payload.get("service")
        if not isinstance(services, list):
            return None
        kept = [s for s in services if not (isinstance(s, dict) and s.get("id") == self.service_id)]
        if len(kept) == len(services):
            return None
        doc = copy.deepcopy(payload)
        doc["service"] = copy.deepcopy(kept)
        return doc
