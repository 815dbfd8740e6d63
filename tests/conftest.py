"""Root test configuration and shared fixtures."""

from typing import AsyncGenerator, List

import httpx
import pytest
from fastapi import FastAPI

from mcp_apiserver.api.base.base_exceptions import NotifierError
from mcp_apiserver.api.base.base_service import BaseService
from mcp_apiserver.api.config.models import MCPConfig
from mcp_apiserver.api.config.settings import AppSettings
from mcp_apiserver.api.importer.importer_app import create_apiserver_app
from mcp_apiserver.api.notifier.notifier import Notifier
from mcp_apiserver.api.openapi.converter import OpenAPIConverter
from mcp_apiserver.api.storage.memory_store import MemoryConfigStore


TWO_OPERATION_SPEC = b"""\
openapi: 3.0.3
info:
  title: Pet Store
  version: 1.0.0
  description: Minimal pet store
servers:
  - url: https://petstore.example.com/api/
paths:
  /pets:
    get:
      operationId: listPets
      summary: List pets
      parameters:
        - name: limit
          in: query
          description: Maximum number of pets
          schema:
            type: integer
            default: 20
    post:
      operationId: createPet
      summary: Create a pet
      requestBody:
        required: true
        content:
          application/json:
            schema:
              $ref: '#/components/schemas/NewPet'
components:
  schemas:
    NewPet:
      type: object
      required: [name]
      properties:
        name:
          type: string
          description: Pet name
        tag:
          type: string
"""

MALFORMED_SPEC = b"openapi: 3.0.3\ninfo: [unclosed"


class MockBaseService(BaseService):
    """Mock base service for testing."""

    def __init__(self, name: str = None):
        """Initialize test service."""
        super().__init__(name or "test_service")
        self.started = False

    async def _start(self) -> None:
        """Start the service."""
        self.started = True

    async def _stop(self) -> None:
        """Stop the service."""
        self.started = False


class RecordingNotifier(Notifier):
    """Notifier that records configs and can be told to fail."""

    def __init__(self, fail_with: str = None):
        super().__init__("recording_notifier")
        self.fail_with = fail_with
        self.notified: List[MCPConfig] = []

    async def notify_update(self, config: MCPConfig) -> None:
        self.notified.append(config)
        if self.fail_with:
            raise NotifierError(self.fail_with, context={"name": config.name})


class RecordingStore(MemoryConfigStore):
    """Memory store that records every create call."""

    def __init__(self):
        super().__init__("recording_store")
        self.created: List[MCPConfig] = []

    async def create(self, config: MCPConfig) -> None:
        self.created.append(config)
        await super().create(config)


@pytest.fixture
def converter() -> OpenAPIConverter:
    """Create converter."""
    return OpenAPIConverter()


@pytest.fixture
def store() -> RecordingStore:
    """Create recording memory store."""
    return RecordingStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Create recording notifier."""
    return RecordingNotifier()


@pytest.fixture
async def test_app(store, notifier) -> AsyncGenerator[FastAPI, None]:
    """Create API server app with started in-memory collaborators."""
    settings = AppSettings.model_validate({"storage": {"type": "memory"}})
    app = create_apiserver_app(settings, store=store, notifier=notifier)
    # ASGITransport does not run the lifespan
    await app.state.service.start()
    yield app
    await app.state.service.stop()


@pytest.fixture
async def async_client(test_app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create async test client."""
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=test_app), base_url="http://test") as client:
        yield client
