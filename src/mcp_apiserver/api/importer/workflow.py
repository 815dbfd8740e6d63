"""OpenAPI import workflow.

One call runs three steps in order and stops at the first failure:

1. convert the document (pure, failure -> ``Rejected``)
2. persist the configuration (failure -> ``PersistenceFailed``)
3. notify gateways (failure -> ``NotificationFailed``, the stored
   configuration stays in place)

Each step hands back either its value or a terminal outcome, so no
exception crosses a step boundary. Nothing is retried and no timeouts are
imposed; cancellation of the calling task reaches the store and notifier
calls unchanged.
"""

from typing import Optional, Union

from loguru import logger

from mcp_apiserver.api.base.base_exceptions import ConversionError, NotifierError, StoreError
from mcp_apiserver.api.config.models import MCPConfig
from mcp_apiserver.api.importer.models import (
    AddressingHint,
    DefaultAddressing,
    ExplicitAddressing,
    Imported,
    ImportResult,
    NotificationFailed,
    PersistenceFailed,
    Rejected,
)
from mcp_apiserver.api.notifier.notifier import Notifier
from mcp_apiserver.api.openapi.converter import Converter
from mcp_apiserver.api.storage.store import ConfigStore


class ImportWorkflow:
    """Runs convert, persist and notify for one OpenAPI document."""

    def __init__(self, converter: Converter, store: ConfigStore, notifier: Notifier):
        """Initialize workflow.

        Args:
            converter: OpenAPI converter
            store: Configuration store
            notifier: Gateway notifier
        """
        self._converter = converter
        self._store = store
        self._notifier = notifier

    async def execute(
        self,
        spec_bytes: bytes,
        hint: AddressingHint = DefaultAddressing()
    ) -> ImportResult:
        """Import one OpenAPI document.

        Args:
            spec_bytes: Raw document bytes
            hint: Default or explicit addressing

        Returns:
            ImportResult: Imported, Rejected, PersistenceFailed or NotificationFailed
        """
        logger.info(f"Importing OpenAPI document ({len(spec_bytes)} bytes, {hint.mode} addressing)")

        converted = self._convert(spec_bytes, hint)
        if isinstance(converted, Rejected):
            return converted
        config = converted

        persist_failure = await self._persist(config)
        if persist_failure is not None:
            return persist_failure

        notify_failure = await self._notify(config)
        if notify_failure is not None:
            return notify_failure

        logger.info(f"OpenAPI imported successfully as {config.name}")
        return Imported(config=config)

    def _convert(self, spec_bytes: bytes, hint: AddressingHint) -> Union[MCPConfig, Rejected]:
        logger.debug("Converting OpenAPI specification")
        try:
            if isinstance(hint, ExplicitAddressing):
                config = self._converter.convert_with_options(spec_bytes, hint.tenant, hint.prefix)
            else:
                config = self._converter.convert(spec_bytes)
        except ConversionError as e:
            logger.error(f"Failed to convert OpenAPI specification: {e.message}")
            return Rejected(reason=e.message)
        except Exception as e:
            logger.exception(f"Converter raised unexpectedly: {e}")
            return Rejected(reason=f"conversion failed: {e}")

        logger.info(f"OpenAPI specification converted successfully: {config.name}")
        return config

    async def _persist(self, config: MCPConfig) -> Optional[PersistenceFailed]:
        logger.debug(f"Creating MCP server configuration {config.name}")
        try:
            await self._store.create(config)
        except StoreError as e:
            logger.error(f"Failed to create MCP server {config.name}: {e.message}")
            return PersistenceFailed(reason=e.message)
        except Exception as e:
            logger.exception(f"Store raised unexpectedly for {config.name}: {e}")
            return PersistenceFailed(reason=f"store failed: {e}")
        return None

    async def _notify(self, config: MCPConfig) -> Optional[NotificationFailed]:
        logger.debug(f"Notifying gateways about {config.name}")
        try:
            await self._notifier.notify_update(config)
        except NotifierError as e:
            logger.error(f"Failed to notify gateways about {config.name}: {e.message}")
            return NotificationFailed(reason=e.message, config=config)
        except Exception as e:
            logger.exception(f"Notifier raised unexpectedly for {config.name}: {e}")
            return NotificationFailed(reason=f"notifier failed: {e}", config=config)
        return None
