"""Base API components.

This module provides the core building blocks for the API server:

- BaseService: Base class for stores and notifiers with lifecycle management
- ServiceError and its subclasses: Domain errors raised by collaborators
"""

from mcp_apiserver.api.base.base_service import BaseService
from mcp_apiserver.api.base.base_exceptions import (
    ServiceError,
    ConversionError,
    StoreError,
    ConfigExistsError,
    ConfigNotFoundError,
    StoreUnavailableError,
    StoreValidationError,
    NotifierError,
)

__all__ = [
    "BaseService",
    "ServiceError",
    "ConversionError",
    "StoreError",
    "ConfigExistsError",
    "ConfigNotFoundError",
    "StoreUnavailableError",
    "StoreValidationError",
    "NotifierError",
]
