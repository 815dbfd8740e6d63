"""OpenAPI import workflow and HTTP surface."""

from mcp_apiserver.api.importer.models import (
    AddressingHint,
    DefaultAddressing,
    ExplicitAddressing,
    addressing_from_form,
    ImportResult,
    Imported,
    Rejected,
    PersistenceFailed,
    NotificationFailed,
)
from mcp_apiserver.api.importer.workflow import ImportWorkflow
from mcp_apiserver.api.importer.importer_service import ImporterService

__all__ = [
    # Addressing
    "AddressingHint",
    "DefaultAddressing",
    "ExplicitAddressing",
    "addressing_from_form",
    # Outcomes
    "ImportResult",
    "Imported",
    "Rejected",
    "PersistenceFailed",
    "NotificationFailed",
    # Components
    "ImportWorkflow",
    "ImporterService",
]
