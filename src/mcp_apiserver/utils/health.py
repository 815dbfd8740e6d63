"""Health check utilities."""

from typing import Any, Dict, Optional
from datetime import datetime
from pydantic import BaseModel, Field


def get_uptime(start_time: Optional[datetime]) -> float:
    """Get uptime in seconds since start time.

    Args:
        start_time: Start time or None

    Returns:
        Uptime in seconds or 0.0 if not started
    """
    if start_time is None:
        return 0.0
    return (datetime.now() - start_time).total_seconds()


class ComponentHealth(BaseModel):
    """Health of one service owned by the API server."""

    status: str  # ok or error
    error: Optional[str] = None

    @classmethod
    def from_service_health(cls, health: Dict[str, Any]) -> "ComponentHealth":
        """Build from a ``BaseService.health()`` dict."""
        if health.get("is_healthy"):
            return cls(status="ok")
        return cls(
            status="error",
            error=health.get("error") or f"{health.get('service', 'component')} not running"
        )


class ServiceHealth(BaseModel):
    """API server health status."""

    status: str  # ok or error
    service: str
    version: str
    is_running: bool
    uptime: float
    error: Optional[str] = None
    components: Dict[str, ComponentHealth] = Field(default_factory=dict)

    @classmethod
    def from_components(
        cls,
        service: str,
        version: str,
        is_running: bool,
        uptime: float,
        components: Dict[str, ComponentHealth]
    ) -> "ServiceHealth":
        """Aggregate component health; any failing component fails the service."""
        healthy = is_running and all(c.status == "ok" for c in components.values())
        return cls(
            status="ok" if healthy else "error",
            service=service,
            version=version,
            is_running=is_running,
            uptime=uptime,
            error=None if healthy else "One or more components in error state",
            components=components
        )
