"""OpenAPI document conversion."""

from mcp_apiserver.api.openapi.converter import (
    Converter,
    OpenAPIConverter,
    DEFAULT_TENANT,
)

__all__ = [
    "Converter",
    "OpenAPIConverter",
    "DEFAULT_TENANT",
]
