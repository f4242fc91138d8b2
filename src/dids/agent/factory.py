from __future__ import annotations

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from src.dids.agent.base import IdentityAgent
from src.dids.agent.remote import HttpIdentityAgent
from src.dids.agent.local import LocalIdentityAgent


def build_identity_agent(config: dict) -> IdentityAgent:
    backend = (config.get("BACKEND") or "local").lower()
    if backend == "local":
        return LocalIdentityAgent(host=settings.DID_DOMAIN_HOST)
    if backend == "http":
        return HttpIdentityAgent(
            config["URL"],
            method=config.get("METHOD", "key"),
            token=config.get("TOKEN", ""),
            timeout=config.get("HTTP_TIMEOUT", 10.0),
        )
    raise ImproperlyConfigured(f"Unknown IDENTITY_AGENT backend {backend!r}")
