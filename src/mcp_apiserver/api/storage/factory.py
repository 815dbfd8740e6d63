"""Configuration store factory."""

from loguru import logger

from mcp_apiserver.api.config.settings import StorageSettings
from mcp_apiserver.api.storage.file_store import FileConfigStore
from mcp_apiserver.api.storage.memory_store import MemoryConfigStore
from mcp_apiserver.api.storage.store import ConfigStore


def create_store(settings: StorageSettings) -> ConfigStore:
    """Create the configured store backend.

    Args:
        settings: Storage settings

    Returns:
        ConfigStore: Store instance, not yet started
    """
    if settings.type == "memory":
        logger.info("Using in-memory config store")
        return MemoryConfigStore()

    logger.info(f"Using file config store at {settings.base_path}")
    return FileConfigStore(settings.base_path)
