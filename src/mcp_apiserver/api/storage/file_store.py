"""File-backed configuration store."""

import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, List, Optional, Union

import aiofiles
import yaml
from loguru import logger
from pydantic import ValidationError

from mcp_apiserver.api.base.base_exceptions import (
    ConfigExistsError,
    ConfigNotFoundError,
    StoreUnavailableError,
)
from mcp_apiserver.api.config.models import MCPConfig
from mcp_apiserver.api.storage.store import ConfigStore


class FileConfigStore(ConfigStore):
    """Stores each configuration as one YAML file named after it.

    A record is written to a temporary file first and then hard-linked to
    its final name. Linking fails when the name exists, so the first writer
    wins and a stored record is never overwritten or seen half-written.
    """

    def __init__(self, base_path: Union[str, Path], name: Optional[str] = None):
        """Initialize store.

        Args:
            base_path: Directory holding the configuration files
            name: Service name
        """
        super().__init__(name or "file_store")
        self._base_path = Path(base_path)

    @property
    def base_path(self) -> Path:
        """Get storage directory."""
        return self._base_path

    async def _start(self) -> None:
        self._base_path.mkdir(parents=True, exist_ok=True)
        logger.info(f"File store using {self._base_path}")

    def _config_file(self, name: str) -> Path:
        return self._base_path / f"{name}.yaml"

    async def create(self, config: MCPConfig) -> None:
        self.validate_name(config.name)

        config_file = self._config_file(config.name)
        temp_file = self._base_path / f".{config.name}.{uuid.uuid4().hex}.tmp"
        record = {
            "created_at": datetime.now().isoformat(),
            "config": config.model_dump(mode="json"),
        }

        try:
            async with aiofiles.open(temp_file, "w") as f:
                await f.write(yaml.safe_dump(record, sort_keys=False))
            os.link(temp_file, config_file)
        except FileExistsError:
            raise ConfigExistsError(
                f"configuration {config.name} already exists",
                context={"name": config.name, "file": str(config_file)}
            )
        except OSError as e:
            logger.error("Failed to write config {}: {}", config.name, str(e))
            raise StoreUnavailableError(
                f"failed to write configuration {config.name}: {e}",
                context={"name": config.name, "file": str(config_file)}
            )
        finally:
            if temp_file.exists():
                temp_file.unlink()

        logger.debug("Saved config: {}", config_file)

    async def get(self, name: str) -> MCPConfig:
        self.validate_name(name)
        config_file = self._config_file(name)

        try:
            async with aiofiles.open(config_file, "r") as f:
                record = yaml.safe_load(await f.read())
        except FileNotFoundError:
            raise ConfigNotFoundError(
                f"configuration {name} not found",
                context={"name": name}
            )
        except (OSError, yaml.YAMLError) as e:
            logger.error("Failed to load config {}: {}", name, str(e))
            raise StoreUnavailableError(
                f"failed to read configuration {name}: {e}",
                context={"name": name, "file": str(config_file)}
            )

        try:
            return MCPConfig.model_validate(record["config"])
        except (TypeError, KeyError, ValidationError) as e:
            raise StoreUnavailableError(
                f"stored configuration {name} is corrupt: {e}",
                context={"name": name, "file": str(config_file)}
            )

    async def list_names(self) -> List[str]:
        try:
            return sorted(path.stem for path in self._base_path.glob("*.yaml"))
        except OSError as e:
            raise StoreUnavailableError(f"failed to list configurations: {e}")

    async def health(self) -> Dict[str, Any]:
        health = await super().health()
        base_exists = self._base_path.exists()
        base_writable = os.access(self._base_path, os.W_OK) if base_exists else False
        health["is_healthy"] = health["is_healthy"] and base_writable
        health["context"]["base_path"] = str(self._base_path)
        if not base_writable:
            health["error"] = "Base directory not accessible"
        return health
