"""In-memory configuration store."""

import asyncio
from typing import Dict, List, Optional

from loguru import logger

from mcp_apiserver.api.base.base_exceptions import ConfigExistsError, ConfigNotFoundError
from mcp_apiserver.api.config.models import MCPConfig
from mcp_apiserver.api.storage.store import ConfigStore


class MemoryConfigStore(ConfigStore):
    """Configuration store kept in process memory.

    Suitable for tests and single-process deployments; contents are lost on
    restart.
    """

    def __init__(self, name: Optional[str] = None):
        super().__init__(name or "memory_store")
        self._configs: Dict[str, MCPConfig] = {}
        self._lock = asyncio.Lock()

    async def create(self, config: MCPConfig) -> None:
        self.validate_name(config.name)
        async with self._lock:
            if config.name in self._configs:
                raise ConfigExistsError(
                    f"configuration {config.name} already exists",
                    context={"name": config.name}
                )
            self._configs[config.name] = config
        logger.debug("Stored config {} in memory", config.name)

    async def get(self, name: str) -> MCPConfig:
        async with self._lock:
            config = self._configs.get(name)
        if config is None:
            raise ConfigNotFoundError(
                f"configuration {name} not found",
                context={"name": name}
            )
        return config

    async def list_names(self) -> List[str]:
        async with self._lock:
            return sorted(self._configs)
