"""Shared utilities."""

from mcp_apiserver.utils.errors import create_error
from mcp_apiserver.utils.health import ServiceHealth, ComponentHealth, get_uptime
from mcp_apiserver.utils.logging_setup import setup_logging

__all__ = [
    "create_error",
    "ServiceHealth",
    "ComponentHealth",
    "get_uptime",
    "setup_logging",
]
