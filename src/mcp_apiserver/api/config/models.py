"""MCP server configuration models.

An ``MCPConfig`` is the unit the import workflow produces, persists and
announces to gateways. Every model here is frozen and uses tuples for
ordered collections, so a configuration cannot be changed once built.
"""

from typing import Dict, Any, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


class ArgConfig(BaseModel):
    """Tool argument derived from an OpenAPI parameter or body property."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Argument name")
    position: str = Field(..., description="Where the value goes: path, query, header, cookie or body")
    required: bool = Field(False, description="Whether the argument is required")
    type: str = Field("string", description="JSON schema type")
    description: str = Field("", description="Argument description")
    default: Optional[Any] = Field(None, description="Default value")
    wire_name: Optional[str] = Field(
        None, description="Name in the HTTP request when it differs from the argument name"
    )


class ToolConfig(BaseModel):
    """Tool derived from one OpenAPI operation."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Tool name")
    description: str = Field("", description="Tool description")
    method: str = Field(..., description="HTTP method")
    endpoint: str = Field(..., description="Target URL template")
    headers: Dict[str, str] = Field(default_factory=dict, description="Static request headers")
    args: Tuple[ArgConfig, ...] = Field(default_factory=tuple, description="Tool arguments")
    input_schema: Dict[str, Any] = Field(default_factory=dict, description="JSON schema of the tool input")


class ServerConfig(BaseModel):
    """MCP server exposed by a gateway."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Server name")
    description: str = Field("", description="Server description")
    config: Dict[str, str] = Field(default_factory=dict, description="Server variables such as the upstream url")
    allowed_tools: Tuple[str, ...] = Field(default_factory=tuple, description="Tools the server exposes")


class RouterConfig(BaseModel):
    """Gateway route binding a prefix to a server."""
    model_config = ConfigDict(frozen=True)

    server: str = Field(..., description="Server name")
    prefix: str = Field(..., description="Route prefix")


class MCPConfig(BaseModel):
    """Normalized MCP server configuration."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Configuration name, unique within the store")
    tenant: str = Field(..., description="Tenant namespace")
    prefix: str = Field(..., description="Path prefix namespace")
    servers: Tuple[ServerConfig, ...] = Field(default_factory=tuple, description="Servers")
    routers: Tuple[RouterConfig, ...] = Field(default_factory=tuple, description="Routers")
    tools: Tuple[ToolConfig, ...] = Field(default_factory=tuple, description="Tools in document order")
    metadata: Dict[str, str] = Field(default_factory=dict, description="Metadata carried from the source document")
