"""
Operations exposed to the HTTP layer, one method per operation.

Each mutating call goes through chain.apply_mutation with the matching
mutator; auditing is left to the caller.
"""
from __future__ import annotations

from typing import Any

from django.conf import settings

from src.core.exceptions import DomainValidationError
from src.dids import chain, policies, selectors, services
from src.dids.agent.base import IdentityAgent
from src.dids.did_document_compiler.builders import build_initial_document
from src.dids.models import DIDDocumentVersion
from src.dids.mutators import (
    AddService,
    AddVerificationMethod,
    DocumentMutation,
    RemoveService,
    ReplaceDocument,
)
from src.dids.resolver.services import IdentityResolver


class IdentityRegistry:
    def __init__(self, *, agent: IdentityAgent, resolver: IdentityResolver):
        self.agent = agent
        self.resolver = resolver

    def create_identity(self, principal: str) -> DIDDocumentVersion:
        if not principal:
            raise DomainValidationError(message="A principal is required to create a DID")
        minted = self.agent.mint_identity()
        payload = build_initial_document(
            minted.did,
            minted.verification_method,
            service_endpoint=getattr(settings, "DID_DEFAULT_SERVICE_ENDPOINT", "") or None,
        )
        return services.insert_initial(identity=minted.did, payload=payload, owner=str(principal))

    def get_document(self, identity: str, *, timeout: float | None = None) -> dict:
        return self.resolver.resolve(identity, timeout=timeout)

    def get_history(self, identity: str) -> list[DIDDocumentVersion]:
        return self.resolver.get_history(identity)

    def list_owned(self, principal: str) -> list[DIDDocumentVersion]:
        return selectors.list_owned(str(principal))

    def is_owner(self, identity: str, principal: str) -> bool:
        return policies.authorize(identity, str(principal))

    def replace_document(self, identity: str, principal: str, document: dict[str, Any]) -> dict:
        return self.mutate(identity, principal, ReplaceDocument(document)).payload

    def add_verification_method(self, identity: str, principal: str, method: dict[str, Any]) -> dict:
        return self.mutate(identity, principal, AddVerificationMethod(method)).payload

    def add_service(self, identity: str, principal: str, service: dict[str, Any]) -> dict:
        return self.mutate(identity, principal, AddService(service)).payload

    def remove_service(self, identity: str, principal: str, service_id: str) -> dict:
        """Idempotent: an absent service leaves the chain untouched."""
        return self.mutate(identity, principal, RemoveService(service_id)).payload

    def deactivate_identity(self, identity: str, principal: str) -> None:
        chain.deactivate(identity=identity, principal=str(principal))

    def mutate(self, identity: str, principal: str, mutation: DocumentMutation) -> DIDDocumentVersion:
        """
        Version the mutation produced (or the unchanged current one on a no-op),
        as committed by this call.
        """
        return chain.apply_mutation(identity=identity, principal=str(principal), mutation=mutation)
