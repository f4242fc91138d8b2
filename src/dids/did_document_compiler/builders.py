from __future__ import annotations

import copy

DID_CONTEXT = "https://www.w3.org/ns/did/v1"
JWS_2020_CONTEXT = "https://w3id.org/security/suites/jws-2020/v1"

# Key order of published documents (stored payloads keep whatever order they had)
PREFERRED_ORDER = [
    "@context",
    "id",
    "controller",
    "verificationMethod",
    "authentication",
    "assertionMethod",
    "keyAgreement",
    "capabilityInvocation",
    "capabilityDelegation",
    "service",
    "metadata",
]


def order_did_document(doc: dict) -> dict:
    out = {k: doc[k] for k in PREFERRED_ORDER if k in doc}
    out.update((k, v) for k, v in doc.items() if k not in out)
    return out


def build_initial_document(
    did: str,
    verification_method: dict,
    *,
    service_endpoint: str | None = None,
) -> dict:
    """
    Version 1 of a DID document: the minted key as the sole authentication
    method, plus the registry service when an endpoint is configured.
    """
    method = copy.deepcopy(verification_method)
    context = [DID_CONTEXT]
    if "publicKeyJwk" in method:
        context.append(JWS_2020_CONTEXT)

    doc = {
        "@context": context,
        "id": did,
        "authentication": [method],
        "service": [],
    }
    if service_endpoint:
        doc["service"].append(
            {
                "id": f"{did}#registry-service",
                "type": "DIDRegistryService",
                "serviceEndpoint": f"{service_endpoint.rstrip('/')}/{did}",
            }
        )
    return doc
