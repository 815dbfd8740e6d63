"""Base exceptions for the API server."""

from typing import Dict, Any, Optional


class ServiceError(Exception):
    """Base class for service errors.

    All service-specific exceptions should inherit from this class.
    The error context can be used to provide additional information
    that will be included in the error response.
    """
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Initialize service error.

        Args:
            message: Error message
            context: Optional error context
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ConversionError(ServiceError):
    """Raised when an OpenAPI document cannot be converted.

    Used for all caller-input errors including:
    - Empty or undecodable content
    - Malformed JSON/YAML
    - Structural validation failures
    - Unsupported OpenAPI constructs
    """
    pass


class StoreError(ServiceError):
    """Raised when configuration storage fails."""
    pass


class ConfigExistsError(StoreError):
    """Raised when a configuration name is already taken."""
    pass


class ConfigNotFoundError(StoreError):
    """Raised when a configuration name is unknown."""
    pass


class StoreUnavailableError(StoreError):
    """Raised when the storage backend cannot be reached or written."""
    pass


class StoreValidationError(StoreError):
    """Raised when the store refuses a configuration."""
    pass


class NotifierError(ServiceError):
    """Raised when gateway notification fails.

    Used for all propagation errors including:
    - Subscriber failures
    - Transport errors
    - Rejected reload requests
    """
    pass
