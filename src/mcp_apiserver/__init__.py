"""MCP API server: imports OpenAPI documents as MCP gateway configurations."""

__version__ = "1.0.0"
