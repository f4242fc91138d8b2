from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

from src.core.exceptions import APIError, NotFoundError, UnavailableError
from src.dids import selectors
from src.dids.agent.base import IdentityAgent
from src.dids.models import DIDDocumentVersion

logger = logging.getLogger(__name__)


class IdentityResolver:
    """
    Public read path. The local store wins; identities it has never held (or
    no longer has active) are looked up through the identity agent, bounded by
    a timeout. External results are not cached.
    """

    def __init__(self, agent: IdentityAgent, *, timeout: float = 5.0, max_workers: int = 4):
        self.agent = agent
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="did-resolve")

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def resolve(self, identity: str, *, timeout: float | None = None) -> dict:
        document, _ = self.resolve_with_source(identity, timeout=timeout)
        return document

    def resolve_with_source(
        self, identity: str, *, timeout: float | None = None
    ) -> tuple[dict, DIDDocumentVersion | None]:
        """
        (document, local version). The version is None when the document
        came from the identity agent.
        """
        current = selectors.get_active(identity)
        if current is not None:
            return current.payload, current
        return self.resolve_externally(identity, timeout=timeout), None

    def resolve_externally(self, identity: str, *, timeout: float | None = None) -> dict:
        limit = self.timeout if timeout is None else timeout
        future = self._executor.submit(self.agent.resolve_externally, identity)
        try:
            document = future.result(timeout=limit)
        except FutureTimeoutError as exc:
            future.cancel()
            logger.warning("External resolution of %s timed out after %ss", identity, limit)
            raise UnavailableError(
                "Identity agent did not answer in time", extra={"did": identity, "timeout": limit}
            ) from exc
        except APIError:
            raise
        except Exception as exc:
            logger.exception("External resolution of %s failed", identity)
            raise UnavailableError(extra={"did": identity}) from exc

        if not document:
            raise NotFoundError(extra={"did": identity})
        return document

    def get_history(self, identity: str) -> list[DIDDocumentVersion]:
        history = selectors.get_history(identity)
        if not history:
            raise NotFoundError("DID history not found", extra={"did": identity})
        return history
