from django.apps import apps
from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from src.auditaction.models import AuditAction
from src.auditaction.services import record_access
from src.core.apis import BaseAPIController, optional_jwt
from src.core.exceptions import DomainValidationError, NotAuthorizedError
from src.dids.mutators import AddService, AddVerificationMethod, RemoveService, ReplaceDocument
from src.dids.presenters import history_to_dto, owned_to_list_dto, version_to_dto
from src.dids.schemas import DocumentReplaceIn, ServiceIn, VerificationMethodIn


def _registry():
    return apps.get_app_config("dids").registry


@api_controller("/dids", tags=["DIDs"], auth=JWTAuth())
class DIDController(BaseAPIController):
    def _require_principal(self) -> str:
        principal = self.principal
        if principal is None:
            raise NotAuthorizedError("Authentication required", code="NOT_AUTHENTICATED")
        return principal

    def _audit(self, principal, did: str, action: str, **details):
        record_access(principal, did, action, request=self.current_request, details=details or None)

    @route.post("")
    def create_did(self):
        principal = self._require_principal()
        version = _registry().create_identity(principal)
        self._audit(principal, version.identity, AuditAction.DID_CREATED)
        return self.create_response(
            message="DID created",
            data={"did": version.identity, "document": version.payload, "version": version.sequence},
            status_code=201,
        )

    @route.get("")
    def list_my_dids(self):
        principal = self._require_principal()
        items = [owned_to_list_dto(v) for v in _registry().list_owned(principal)]
        return self.create_response(message="OK", data={"count": len(items), "items": items})

    @route.get("/{did}", auth=optional_jwt())
    def get_document(self, did: str):
        document = _registry().get_document(did)
        principal = self.principal
        if principal:
            self._audit(principal, did, AuditAction.DID_READ)
        return self.create_response(message="OK", data=document)

    @route.get("/{did}/history", auth=optional_jwt())
    def get_history(self, did: str):
        versions = _registry().get_history(did)
        principal = self.principal
        if principal:
            self._audit(principal, did, AuditAction.DID_HISTORY_READ)
        return self.create_response(message="OK", data=history_to_dto(versions))

    @route.put("/{did}")
    def replace_document(self, did: str, body: DocumentReplaceIn):
        principal = self._require_principal()
        if not body.document:
            raise DomainValidationError(message="Valid DID document update required")
        version = _registry().mutate(did, principal, ReplaceDocument(body.document))
        self._audit(principal, did, AuditAction.DID_UPDATED, operation="replace_document")
        return self.create_response(message="OK", data=version_to_dto(version))

    @route.post("/{did}/verification-methods")
    def add_verification_method(self, did: str, method: VerificationMethodIn):
        principal = self._require_principal()
        version = _registry().mutate(did, principal, AddVerificationMethod(method.to_document()))
        self._audit(principal, did, AuditAction.DID_UPDATED, operation="add_verification_method", method_id=method.id)
        return self.create_response(message="OK", data=version_to_dto(version))

    @route.post("/{did}/services")
    def add_service(self, did: str, service: ServiceIn):
        principal = self._require_principal()
        version = _registry().mutate(did, principal, AddService(service.to_document()))
        self._audit(principal, did, AuditAction.DID_UPDATED, operation="add_service", service_id=service.id)
        return self.create_response(message="OK", data=version_to_dto(version))

    @route.delete("/{did}/services/{service_id}")
    def remove_service(self, did: str, service_id: str):
        principal = self._require_principal()
        version = _registry().mutate(did, principal, RemoveService(service_id))
        self._audit(principal, did, AuditAction.DID_UPDATED, operation="remove_service", service_id=service_id)
        return self.create_response(message="OK", data=version_to_dto(version))

    @route.delete("/{did}")
    def deactivate(self, did: str):
        principal = self._require_principal()
        _registry().deactivate_identity(did, principal)
        self._audit(principal, did, AuditAction.DID_DEACTIVATED)
        return self.create_response(
            message="DID deactivated successfully",
            data={"did": did, "deactivated": True},
        )
