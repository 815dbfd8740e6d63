"""Base service module."""

from datetime import datetime
from typing import Dict, Any, Optional

from mcp_apiserver.utils.errors import (
    create_error,
    SERVICE_ERROR,
    CONFLICT
)
from mcp_apiserver.utils.health import get_uptime


class BaseService:
    """Base service with lifecycle management."""

    def __init__(self, name: Optional[str] = None):
        """Initialize service.

        Args:
            name: Service name (defaults to lowercase class name)
        """
        self._is_running = False
        self._start_time: Optional[datetime] = None
        self._name = name or self.__class__.__name__.lower()

    @property
    def name(self) -> str:
        """Get service name."""
        return self._name

    @property
    def is_running(self) -> bool:
        """Get service running state."""
        return self._is_running

    @property
    def uptime(self) -> float:
        """Get service uptime."""
        return get_uptime(self._start_time)

    async def start(self) -> None:
        """Start service.

        Raises:
            HTTPException: If service is already running (409) or fails to start (503)
        """
        if self.is_running:
            raise create_error(
                message=f"{self.name} service is already running",
                status_code=CONFLICT,
                context={"service": self.name}
            )

        try:
            await self._start()
            self._is_running = True
            self._start_time = datetime.now()
        except Exception as e:
            raise create_error(
                message=f"Failed to start {self.name} service",
                status_code=SERVICE_ERROR,
                context={"service": self.name},
                cause=e
            )

    async def stop(self) -> None:
        """Stop service.

        Raises:
            HTTPException: If service is not running (409) or fails to stop (503)
        """
        if not self.is_running:
            raise create_error(
                message=f"{self.name} service is not running",
                status_code=CONFLICT,
                context={"service": self.name}
            )

        try:
            await self._stop()
            self._is_running = False
            self._start_time = None
        except Exception as e:
            raise create_error(
                message=f"Failed to stop {self.name} service",
                status_code=SERVICE_ERROR,
                context={"service": self.name},
                cause=e
            )

    async def _start(self) -> None:
        """Start implementation."""
        pass

    async def _stop(self) -> None:
        """Stop implementation."""
        pass

    async def health(self) -> Dict[str, Any]:
        """Get service health status.

        Returns:
            Dict with health status
        """
        return {
            "is_healthy": self.is_running,
            "status": "running" if self.is_running else "stopped",
            "service": self.name,
            "context": {
                "service": self.name
            }
        }
