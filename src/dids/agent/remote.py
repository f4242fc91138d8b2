from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from src.core.exceptions import UnavailableError
from src.dids.agent.base import MintedIdentity

logger = logging.getLogger(__name__)


class HttpIdentityAgent:
    """
    Agent backed by a Universal Registrar / Universal Resolver style service.

        POST {base}/1.0/create?method={method}  -> didState.did, didState.didDocument
        GET  {base}/1.0/identifiers/{did}       -> DID resolution result or bare document
    """

    def __init__(
        self,
        base_url: str,
        *,
        method: str = "key",
        token: str = "",
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ):
        self.method = method
        headers = {"Accept": "application/did-resolution+json, application/did+json;q=0.9, application/json;q=0.8"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = client or httpx.Client(
            base_url=base_url.rstrip("/"), timeout=timeout, headers=headers
        )

    def close(self) -> None:
        self._client.close()

    def mint_identity(self) -> MintedIdentity:
        try:
            response = self._client.post(
                "/1.0/create",
                params={"method": self.method},
                json={"options": {}, "secret": {}, "didDocument": {}},
            )
            response.raise_for_status()
            state = response.json().get("didState") or {}
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Identity agent create failed: %s", exc)
            raise UnavailableError("Identity agent could not mint a DID") from exc

        did = state.get("did")
        document = state.get("didDocument") or {}
        method = _first_verification_method(document)
        if not did or method is None:
            raise UnavailableError(
                "Identity agent returned no DID or key material",
                extra={"state": state.get("state")},
            )
        return MintedIdentity(did=did, verification_method=method)

    def resolve_externally(self, did: str) -> dict[str, Any] | None:
        try:
            response = self._client.get(f"/1.0/identifiers/{quote(did, safe=':')}")
            if response.status_code == 404:
                return None
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Identity agent resolve failed for %s: %s", did, exc)
            raise UnavailableError(extra={"did": did}) from exc

        if isinstance(body, dict) and "didDocument" in body:
            return body["didDocument"] or None
        return body or None


def _first_verification_method(document: dict) -> dict | None:
    by_id = {vm.get("id"): vm for vm in document.get("verificationMethod") or [] if isinstance(vm, dict)}
    for entry in document.get("authentication") or []:
        if isinstance(entry, dict):
            return entry
        if entry in by_id:
            return by_id[entry]
    return next(iter(by_id.values()), None)
