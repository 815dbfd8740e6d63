"""Importer endpoints."""

from mcp_apiserver.api.importer.endpoints.import_endpoints import router

__all__ = ["router"]
