"""Gateway update notifier interface."""

from abc import ABC, abstractmethod
from typing import Dict, Any

from mcp_apiserver.api.base.base_service import BaseService
from mcp_apiserver.api.config.models import MCPConfig


UPDATE_ACTION = "update"


def build_update_event(config: MCPConfig) -> Dict[str, Any]:
    """Build the event announcing a changed configuration.

    Args:
        config: Configuration that changed

    Returns:
        Dict[str, Any]: JSON-serializable event
    """
    return {
        "action": UPDATE_ACTION,
        "name": config.name,
        "tenant": config.tenant,
        "config": config.model_dump(mode="json"),
    }


class Notifier(BaseService, ABC):
    """Fans "configuration changed" events out to live gateways.

    Delivery is at-least-once. Any error raised from ``notify_update`` means
    the notification as a whole failed; partial subscriber success is not
    reported.
    """

    @abstractmethod
    async def notify_update(self, config: MCPConfig) -> None:
        """Announce that a configuration changed.

        Args:
            config: Changed configuration

        Raises:
            NotifierError: If the notification could not be delivered
        """
