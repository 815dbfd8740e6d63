"""Configuration storage backends."""

from mcp_apiserver.api.storage.store import ConfigStore
from mcp_apiserver.api.storage.memory_store import MemoryConfigStore
from mcp_apiserver.api.storage.file_store import FileConfigStore
from mcp_apiserver.api.storage.factory import create_store

__all__ = [
    "ConfigStore",
    "MemoryConfigStore",
    "FileConfigStore",
    "create_store",
]
