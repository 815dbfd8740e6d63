"""Notifier factory."""

from loguru import logger

from mcp_apiserver.api.config.settings import NotifierSettings
from mcp_apiserver.api.notifier.api_notifier import ApiNotifier
from mcp_apiserver.api.notifier.messaging_notifier import MessagingNotifier
from mcp_apiserver.api.notifier.notifier import Notifier


def create_notifier(settings: NotifierSettings) -> Notifier:
    """Create the configured notifier backend.

    Args:
        settings: Notifier settings

    Returns:
        Notifier: Notifier instance, not yet started
    """
    if settings.type == "api":
        logger.info(f"Using API notifier with {len(settings.targets)} targets")
        return ApiNotifier(settings.targets, timeout=settings.timeout)

    logger.info(f"Using messaging notifier on topic {settings.topic}")
    return MessagingNotifier(topic=settings.topic)
