"""Configuration store interface."""

import re
from abc import ABC, abstractmethod
from typing import Dict, Any, List

from mcp_apiserver.api.base.base_exceptions import StoreValidationError
from mcp_apiserver.api.base.base_service import BaseService
from mcp_apiserver.api.config.models import MCPConfig


NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


class ConfigStore(BaseService, ABC):
    """Durable keyed storage of MCP configurations.

    ``create`` never overwrites: a name that already exists raises
    ``ConfigExistsError``. Concurrent creates of the same name are a race
    that exactly one caller wins.
    """

    @abstractmethod
    async def create(self, config: MCPConfig) -> None:
        """Persist a new configuration.

        Args:
            config: Configuration to store

        Raises:
            ConfigExistsError: If the name is already stored
            StoreUnavailableError: If the backend cannot be written
            StoreValidationError: If the configuration cannot be stored
        """

    @abstractmethod
    async def get(self, name: str) -> MCPConfig:
        """Load a stored configuration.

        Raises:
            ConfigNotFoundError: If the name is unknown
            StoreUnavailableError: If the backend cannot be read
        """

    @abstractmethod
    async def list_names(self) -> List[str]:
        """List stored configuration names in sorted order."""

    def validate_name(self, name: str) -> None:
        """Reject names the store cannot key on.

        Raises:
            StoreValidationError: If the name is empty or has unsafe characters
        """
        if not NAME_PATTERN.match(name):
            raise StoreValidationError(
                f"invalid configuration name: {name!r}",
                context={"name": name}
            )

    async def health(self) -> Dict[str, Any]:
        health = await super().health()
        health["context"]["backend"] = self.name
        return health
