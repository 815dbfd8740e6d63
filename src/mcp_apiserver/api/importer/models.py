"""Import workflow models."""

from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from mcp_apiserver.api.config.models import MCPConfig


# Addressing hints

class DefaultAddressing(BaseModel):
    """Let the converter apply its own tenant and prefix convention."""
    model_config = ConfigDict(frozen=True)

    mode: Literal["default"] = "default"


class ExplicitAddressing(BaseModel):
    """Use exactly these values, empty strings included."""
    model_config = ConfigDict(frozen=True)

    mode: Literal["explicit"] = "explicit"
    tenant: str = Field("", description="Tenant namespace")
    prefix: str = Field("", description="Route prefix")


AddressingHint = Union[DefaultAddressing, ExplicitAddressing]


def addressing_from_form(tenant: Optional[str] = None, prefix: Optional[str] = None) -> AddressingHint:
    """Build a hint from two optional request fields.

    Both absent or empty selects default addressing. Any non-empty field
    selects explicit addressing, and the other field is passed through as
    an empty string.

    Args:
        tenant: Tenant field from the request
        prefix: Prefix field from the request

    Returns:
        AddressingHint: Default or explicit addressing
    """
    if not tenant and not prefix:
        return DefaultAddressing()
    return ExplicitAddressing(tenant=tenant or "", prefix=prefix or "")


# Import outcomes

class Imported(BaseModel):
    """Converted, persisted and announced."""
    model_config = ConfigDict(frozen=True)

    outcome: Literal["imported"] = "imported"
    config: MCPConfig


class Rejected(BaseModel):
    """The document could not be converted; nothing happened."""
    model_config = ConfigDict(frozen=True)

    outcome: Literal["rejected"] = "rejected"
    reason: str


class PersistenceFailed(BaseModel):
    """The store refused or failed; no notification was sent."""
    model_config = ConfigDict(frozen=True)

    outcome: Literal["persistence_failed"] = "persistence_failed"
    reason: str


class NotificationFailed(BaseModel):
    """Stored but not announced (split state)."""
    model_config = ConfigDict(frozen=True)

    outcome: Literal["notification_failed"] = "notification_failed"
    reason: str
    config: MCPConfig


ImportResult = Union[Imported, Rejected, PersistenceFailed, NotificationFailed]


# API responses

class BaseResponse(BaseModel):
    """Base response model with timestamp."""
    timestamp: datetime = Field(default_factory=datetime.now, description="Response timestamp")


class MessageResponse(BaseResponse):
    """Generic message response model."""
    message: str = Field(..., description="Response message")


class ImportResponse(BaseResponse):
    """Successful import response model."""
    status: str = Field("success", description="Import status")
    config: MCPConfig = Field(..., description="Imported configuration")


class ConfigResponse(BaseResponse):
    """Stored configuration response model."""
    config: MCPConfig = Field(..., description="Stored configuration")


class ConfigListResponse(BaseResponse):
    """Configuration list response model."""
    configs: List[str] = Field(..., description="List of configuration names")
