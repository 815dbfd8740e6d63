"""MCP configuration models and application settings."""

from mcp_apiserver.api.config.models import (
    ArgConfig,
    ToolConfig,
    ServerConfig,
    RouterConfig,
    MCPConfig,
)
from mcp_apiserver.api.config.settings import (
    AppSettings,
    ServiceSettings,
    StorageSettings,
    NotifierSettings,
    LoggingSettings,
    load_settings,
)

__all__ = [
    # Models
    "ArgConfig",
    "ToolConfig",
    "ServerConfig",
    "RouterConfig",
    "MCPConfig",
    # Settings
    "AppSettings",
    "ServiceSettings",
    "StorageSettings",
    "NotifierSettings",
    "LoggingSettings",
    "load_settings",
]
