from typing import Any

from ninja import Field, Schema


class VerificationMethodIn(Schema):
    id: str
    type: str
    controller: str
    publicKeyJwk: dict | None = None
    publicKeyMultibase: str | None = None
    publicKeyBase58: str | None = None

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ServiceIn(Schema):
    id: str
    type: str
    serviceEndpoint: str | dict | list = Field(..., description="URI, map or set of URIs")

    def to_document(self) -> dict[str, Any]:
        return self.model_dump()


class DocumentReplaceIn(Schema):
    document: dict[str, Any]
