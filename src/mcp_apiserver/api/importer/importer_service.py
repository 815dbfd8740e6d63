"""Importer service."""

from typing import List, Optional

from loguru import logger

from mcp_apiserver.api.base.base_service import BaseService
from mcp_apiserver.api.config.models import MCPConfig
from mcp_apiserver.api.importer.models import AddressingHint, DefaultAddressing, ImportResult
from mcp_apiserver.api.importer.workflow import ImportWorkflow
from mcp_apiserver.api.notifier.notifier import Notifier
from mcp_apiserver.api.openapi.converter import Converter, OpenAPIConverter
from mcp_apiserver.api.storage.store import ConfigStore
from mcp_apiserver.utils.health import ComponentHealth, ServiceHealth


class ImporterService(BaseService):
    """Owns the store and notifier lifecycles and runs imports."""

    def __init__(
        self,
        store: ConfigStore,
        notifier: Notifier,
        converter: Optional[Converter] = None,
        version: str = "1.0.0"
    ):
        """Initialize service.

        Args:
            store: Configuration store
            notifier: Gateway notifier
            converter: OpenAPI converter, defaults to OpenAPIConverter
            version: Service version
        """
        super().__init__("importer")
        self._version = version
        self._store = store
        self._notifier = notifier
        self._workflow = ImportWorkflow(converter or OpenAPIConverter(), store, notifier)
        logger.info(f"{self.name} service initialized")

    @property
    def version(self) -> str:
        """Get service version."""
        return self._version

    @property
    def store(self) -> ConfigStore:
        """Get configuration store."""
        return self._store

    @property
    def notifier(self) -> Notifier:
        """Get gateway notifier."""
        return self._notifier

    async def _start(self) -> None:
        # Store first so nothing is announced before it can be persisted
        await self._store.start()
        try:
            await self._notifier.start()
        except Exception:
            await self._store.stop()
            raise
        logger.info(f"{self.name} service started")

    async def _stop(self) -> None:
        # Stop in reverse order
        await self._notifier.stop()
        await self._store.stop()
        logger.info(f"{self.name} service stopped")

    async def import_spec(self, spec_bytes: bytes, hint: AddressingHint = DefaultAddressing()) -> ImportResult:
        """Run the import workflow for one document."""
        return await self._workflow.execute(spec_bytes, hint)

    async def list_configs(self) -> List[str]:
        """List stored configuration names."""
        return await self._store.list_names()

    async def get_config(self, name: str) -> MCPConfig:
        """Load a stored configuration.

        Raises:
            StoreError: If the configuration is unknown or unreadable
        """
        return await self._store.get(name)

    async def renotify(self, name: str) -> MCPConfig:
        """Re-issue the update notification for a stored configuration.

        Recovers a configuration left persisted but unannounced without
        creating it again.

        Args:
            name: Stored configuration name

        Returns:
            MCPConfig: The configuration that was announced

        Raises:
            StoreError: If the configuration is unknown or unreadable
            NotifierError: If the notification fails again
        """
        config = await self._store.get(name)
        logger.info(f"Re-notifying gateways about {name}")
        await self._notifier.notify_update(config)
        return config

    async def check_health(self) -> ServiceHealth:
        """Get service health status."""
        components = {}
        for key, component in (("store", self._store), ("notifier", self._notifier)):
            try:
                components[key] = ComponentHealth.from_service_health(await component.health())
            except Exception as e:
                logger.error(f"Health check failed for {component.name}: {e}")
                components[key] = ComponentHealth(status="error", error=str(e))

        return ServiceHealth.from_components(
            service=self.name,
            version=self.version,
            is_running=self.is_running,
            uptime=self.uptime,
            components=components
        )
