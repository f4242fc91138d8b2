import logging

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)


class DidsConfig(AppConfig):
    name = "src.dids"
    default_auto_field = "django.db.models.BigAutoField"

    agent = None
    resolver = None
    registry = None

    def ready(self):
        # The identity agent is built once here and handed to the resolver and
        # registry; nothing else constructs one.
        from src.dids.agent.factory import build_identity_agent
        from src.dids.registry import IdentityRegistry
        from src.dids.resolver.services import IdentityResolver

        config = settings.IDENTITY_AGENT
        self.agent = build_identity_agent(config)
        self.resolver = IdentityResolver(
            self.agent,
            timeout=config["RESOLVE_TIMEOUT"],
            max_workers=config.get("RESOLVER_WORKERS", 4),
        )
        self.registry = IdentityRegistry(agent=self.agent, resolver=self.resolver)
        logger.info("Identity agent ready: %s", type(self.agent).__name__)
