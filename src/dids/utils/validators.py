import jsonschema

from src.core.exceptions import DomainValidationError

_PUBLIC_KEY_FIELDS = ["publicKeyJwk", "publicKeyMultibase", "publicKeyBase58"]

VERIFICATION_METHOD_SCHEMA = {
    "type": "object",
    "required": ["id", "type", "controller"],
    "properties": {
        "id": {"type": "string", "minLength": 1},
        "type": {"type": "string", "minLength": 1},
        "controller": {"type": "string", "minLength": 1},
        "publicKeyJwk": {"type": "object", "required": ["kty"]},
        "publicKeyMultibase": {"type": "string", "minLength": 1},
        "publicKeyBase58": {"type": "string", "minLength": 1},
    },
    "anyOf": [{"required": [field]} for field in _PUBLIC_KEY_FIELDS],
}

SERVICE_SCHEMA = {
    "type": "object",
    "required": ["id", "type", "serviceEndpoint"],
    "properties": {
        "id": {"type": "string", "minLength": 1},
        "type": {"anyOf": [{"type": "string", "minLength": 1}, {"type": "array", "items": {"type": "string"}}]},
        "serviceEndpoint": {"anyOf": [{"type": "string", "minLength": 1}, {"type": "object"}, {"type": "array"}]},
    },
}

# Free-form beyond the relationships the registry manipulates.
DID_DOCUMENT_SCHEMA = {
    "type": "object",
    "required": ["id"],
    "properties": {
        "@context": {"anyOf": [{"type": "string"}, {"type": "array"}]},
        "id": {"type": "string", "pattern": "^did:[a-z0-9]+:.+$"},
        "authentication": {
            "type": "array",
            "items": {"anyOf": [{"type": "string"}, VERIFICATION_METHOD_SCHEMA]},
        },
        "verificationMethod": {"type": "array", "items": VERIFICATION_METHOD_SCHEMA},
        "service": {"type": "array", "items": SERVICE_SCHEMA},
    },
}


def _validate(instance, schema, what: str) -> None:
    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: list(e.absolute_path))
    if errors:
        raise DomainValidationError(
            message=f"Invalid {what}",
            errors=[
                {"path": "/".join(str(p) for p in e.absolute_path), "message": e.message}
                for e in errors
            ],
        )


def validate_did_document(doc: dict) -> None:
    _validate(doc, DID_DOCUMENT_SCHEMA, "DID document")


def validate_verification_method(method: dict) -> None:
    _validate(method, VERIFICATION_METHOD_SCHEMA, "verification method")


def validate_service(service: dict) -> None:
    _validate(service, SERVICE_SCHEMA, "service")
