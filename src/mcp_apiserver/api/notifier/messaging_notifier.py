"""In-process topic notifier."""

import copy
import inspect
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from loguru import logger
from pydantic import BaseModel, Field

from mcp_apiserver.api.base.base_exceptions import NotifierError
from mcp_apiserver.api.config.models import MCPConfig
from mcp_apiserver.api.notifier.notifier import Notifier, build_update_event


MessageCallback = Callable[[Dict[str, Any]], Union[None, Awaitable[None]]]


class MessageStats(BaseModel):
    """Message handler statistics."""
    messages_received: int = Field(default=0, description="Number of messages received")
    messages_processed: int = Field(default=0, description="Number of messages processed")
    last_message_time: Optional[datetime] = Field(None, description="Timestamp of last message")
    errors: int = Field(default=0, description="Number of processing errors")
    created_at: datetime = Field(default_factory=datetime.now, description="Handler creation time")

    def record_message(self) -> None:
        """Record received message."""
        self.messages_received += 1
        self.last_message_time = datetime.now()

    def record_processed(self) -> None:
        """Record processed message."""
        self.messages_processed += 1

    def record_error(self) -> None:
        """Record processing error."""
        self.errors += 1


class MessageHandler:
    """Handler for subscribed messages."""

    def __init__(self, callback: MessageCallback):
        """Initialize handler.

        Args:
            callback: Message processing callback, sync or async

        Raises:
            TypeError: If callback is not callable
        """
        if not callable(callback):
            raise TypeError(f"Message handler callback must be callable, got {type(callback)}")
        self.callback = callback
        self.stats = MessageStats()

    def __hash__(self) -> int:
        """Hash based on callback function."""
        return hash(self.callback)

    def __eq__(self, other: object) -> bool:
        """Compare based on callback function."""
        if not isinstance(other, MessageHandler):
            return NotImplemented
        return self.callback == other.callback

    async def process_message(self, data: Dict[str, Any]) -> None:
        """Process a message through the handler.

        Args:
            data: Message data to process

        Raises:
            NotifierError: If the callback fails
        """
        try:
            self.stats.record_message()

            # Handle both async and sync callbacks
            if inspect.iscoroutinefunction(self.callback):
                await self.callback(data)
            else:
                result = self.callback(data)
                if inspect.isawaitable(result):
                    await result

            self.stats.record_processed()

        except Exception as e:
            self.stats.record_error()
            logger.error(f"Message handler error: {e}")
            raise NotifierError(f"Message handler error: {e}")


class MessagingNotifier(Notifier):
    """Publishes update events to in-process subscribers on one topic.

    Gateways running in the same process subscribe a callback. Every
    subscriber receives every event; if any of them fails the notification
    fails. Publishing with no subscribers succeeds.
    """

    def __init__(self, topic: str = "config/update", name: Optional[str] = None):
        super().__init__(name or "messaging_notifier")
        self._topic = topic
        self._handlers: Dict[MessageHandler, None] = {}

    @property
    def topic(self) -> str:
        """Get notification topic."""
        return self._topic

    async def _stop(self) -> None:
        self._handlers.clear()
        logger.info("Messaging notifier stopped")

    async def subscribe(self, callback: MessageCallback) -> None:
        """Subscribe to update events.

        Args:
            callback: Sync or async callable receiving the event dict
        """
        handler = MessageHandler(callback)
        self._handlers[handler] = None
        logger.debug(f"Subscribed to {self._topic}")

    async def unsubscribe(self, callback: MessageCallback) -> None:
        """Remove a subscriber, ignoring unknown callbacks."""
        self._handlers.pop(MessageHandler(callback), None)
        logger.debug(f"Unsubscribed from {self._topic}")

    async def get_subscriber_count(self) -> int:
        """Get number of subscribers."""
        return len(self._handlers)

    def handler_stats(self) -> List[MessageStats]:
        """Get statistics of every subscriber in subscription order."""
        return [handler.stats for handler in self._handlers]

    async def notify_update(self, config: MCPConfig) -> None:
        event = build_update_event(config)
        handlers = list(self._handlers)

        if not handlers:
            logger.debug(f"No subscribers on {self._topic} for {config.name}")
            return

        failures = []
        for handler in handlers:
            try:
                # Each subscriber gets its own copy of the event
                await handler.process_message(copy.deepcopy(event))
            except NotifierError as e:
                failures.append(e.message)

        if failures:
            raise NotifierError(
                f"{len(failures)} of {len(handlers)} subscribers on {self._topic} failed: "
                + "; ".join(failures),
                context={"name": config.name, "topic": self._topic}
            )

        logger.debug(f"Published {config.name} to {len(handlers)} subscribers on {self._topic}")

    async def health(self) -> Dict[str, Any]:
        health = await super().health()
        health["context"].update({
            "topic": self._topic,
            "active_subscribers": len(self._handlers),
        })
        return health
