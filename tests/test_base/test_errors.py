"""Test error utilities and service exceptions."""

from fastapi import status

from mcp_apiserver.api.base.base_exceptions import (
    ConfigExistsError,
    ConversionError,
    ServiceError,
    StoreError,
)
from mcp_apiserver.utils.errors import create_error, NOT_FOUND


class TestCreateError:
    """Test HTTP error creation."""

    def test_detail_format(self):
        """Test detail carries status, message and context."""
        error = create_error("missing", NOT_FOUND, context={"name": "x"})

        assert error.status_code == status.HTTP_404_NOT_FOUND
        assert error.detail["status"] == "error"
        assert error.detail["message"] == "missing"
        assert error.detail["context"] == {"name": "x"}
        assert "timestamp" in error.detail

    def test_cause(self):
        """Test cause is recorded in context and chained."""
        cause = ValueError("bad value")
        error = create_error("failed", status.HTTP_400_BAD_REQUEST, cause=cause)

        assert error.detail["context"]["error"] == "bad value"
        assert error.__cause__ is cause

    def test_context_not_mutated(self):
        """Test the caller's context dict is left untouched."""
        context = {"name": "x"}
        create_error("failed", status.HTTP_400_BAD_REQUEST, context=context, cause=ValueError("v"))
        assert context == {"name": "x"}


class TestServiceErrors:
    """Test service exception hierarchy."""

    def test_message_and_context(self):
        """Test errors keep message and context."""
        error = ConversionError("empty OpenAPI document", context={"size": 0})
        assert str(error) == "empty OpenAPI document"
        assert error.message == "empty OpenAPI document"
        assert error.context == {"size": 0}

    def test_default_context(self):
        """Test context defaults to an empty dict."""
        assert ServiceError("x").context == {}

    def test_store_hierarchy(self):
        """Test collisions are store errors."""
        assert issubclass(ConfigExistsError, StoreError)
        assert issubclass(StoreError, ServiceError)
