"""HTTP notifier calling gateway reload endpoints."""

from typing import Dict, Any, List, Optional

import httpx
from loguru import logger

from mcp_apiserver.api.base.base_exceptions import NotifierError
from mcp_apiserver.api.config.models import MCPConfig
from mcp_apiserver.api.notifier.notifier import Notifier, build_update_event


class ApiNotifier(Notifier):
    """Posts update events to every configured gateway.

    A transport error or a non-2xx answer from any target fails the
    notification after all targets have been tried.
    """

    def __init__(
        self,
        targets: List[str],
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
        name: Optional[str] = None
    ):
        """Initialize notifier.

        Args:
            targets: Gateway reload URLs
            timeout: Per-request timeout in seconds
            client: Client to use instead of creating one on start
            name: Service name
        """
        super().__init__(name or "api_notifier")
        self._targets = list(targets)
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def targets(self) -> List[str]:
        """Get gateway reload URLs."""
        return list(self._targets)

    async def _start(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        logger.info(f"API notifier targeting {len(self._targets)} gateways")

    async def _stop(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def notify_update(self, config: MCPConfig) -> None:
        if self._client is None:
            raise NotifierError(
                "api notifier is not started",
                context={"name": config.name}
            )

        event = build_update_event(config)
        failures = []
        for target in self._targets:
            try:
                response = await self._client.post(target, json=event)
                response.raise_for_status()
                logger.debug("Notified {} about {}", target, config.name)
            except httpx.HTTPError as e:
                logger.error("Failed to notify {}: {}", target, str(e))
                failures.append(f"{target}: {e}")

        if failures:
            raise NotifierError(
                f"{len(failures)} of {len(self._targets)} gateways failed: " + "; ".join(failures),
                context={"name": config.name, "targets": self._targets}
            )

    async def health(self) -> Dict[str, Any]:
        health = await super().health()
        health["context"]["targets"] = len(self._targets)
        return health
