"""Gateway update notifiers."""

from mcp_apiserver.api.notifier.notifier import Notifier, build_update_event
from mcp_apiserver.api.notifier.messaging_notifier import MessagingNotifier, MessageHandler
from mcp_apiserver.api.notifier.api_notifier import ApiNotifier
from mcp_apiserver.api.notifier.factory import create_notifier

__all__ = [
    "Notifier",
    "build_update_event",
    "MessagingNotifier",
    "MessageHandler",
    "ApiNotifier",
    "create_notifier",
]
