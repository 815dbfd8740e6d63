"""Tests for importer service."""

import pytest
from fastapi import HTTPException, status

from mcp_apiserver.api.base.base_exceptions import ConfigNotFoundError, NotifierError
from mcp_apiserver.api.importer.importer_service import ImporterService
from mcp_apiserver.api.importer.models import ExplicitAddressing, Imported
from mcp_apiserver.api.storage.file_store import FileConfigStore
from tests.conftest import TWO_OPERATION_SPEC, RecordingNotifier


class UnreachableNotifier(RecordingNotifier):
    """Notifier that cannot start."""

    async def _start(self) -> None:
        raise ConnectionError("gateway unreachable")


@pytest.fixture
def service(store, notifier) -> ImporterService:
    """Create importer service over recording collaborators."""
    return ImporterService(store, notifier, version="2.0.0")


class TestImporterServiceLifecycle:
    """Test service lifecycle."""

    @pytest.mark.asyncio
    async def test_start_starts_components(self, service, store, notifier):
        """Test start brings up store and notifier."""
        await service.start()

        assert service.is_running
        assert store.is_running
        assert notifier.is_running

    @pytest.mark.asyncio
    async def test_stop_stops_components(self, service, store, notifier):
        """Test stop shuts down store and notifier."""
        await service.start()
        await service.stop()

        assert not service.is_running
        assert not store.is_running
        assert not notifier.is_running

    @pytest.mark.asyncio
    async def test_start_fails_when_store_cannot_start(self, tmp_path, notifier):
        """Test an unusable store directory fails startup."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        service = ImporterService(FileConfigStore(blocker / "configs"), notifier)

        with pytest.raises(HTTPException) as exc_info:
            await service.start()

        assert exc_info.value.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert not service.is_running
        assert not notifier.is_running

    @pytest.mark.asyncio
    async def test_start_stops_store_when_notifier_cannot_start(self, store):
        """Test a notifier that fails to start leaves no running store behind."""
        service = ImporterService(store, UnreachableNotifier())

        with pytest.raises(HTTPException) as exc_info:
            await service.start()

        assert exc_info.value.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert not service.is_running
        assert not store.is_running

    def test_properties(self, service, store, notifier):
        """Test service exposes its components."""
        assert service.name == "importer"
        assert service.version == "2.0.0"
        assert service.store is store
        assert service.notifier is notifier


class TestImporterServiceOperations:
    """Test service operations."""

    @pytest.mark.asyncio
    async def test_import_and_read_back(self, service):
        """Test an imported configuration can be listed and read."""
        await service.start()

        result = await service.import_spec(TWO_OPERATION_SPEC, ExplicitAddressing(tenant="acme", prefix="/v1"))

        assert isinstance(result, Imported)
        assert await service.list_configs() == [result.config.name]
        assert await service.get_config(result.config.name) == result.config

    @pytest.mark.asyncio
    async def test_get_unknown_config(self, service):
        """Test reading an unknown configuration raises."""
        await service.start()

        with pytest.raises(ConfigNotFoundError):
            await service.get_config("missing")

    @pytest.mark.asyncio
    async def test_renotify(self, service, notifier):
        """Test re-notification announces the stored configuration."""
        await service.start()
        notifier.fail_with = "down"
        failed = await service.import_spec(TWO_OPERATION_SPEC)
        notifier.fail_with = None

        config = await service.renotify(failed.config.name)

        assert config == failed.config
        assert notifier.notified == [failed.config, failed.config]

    @pytest.mark.asyncio
    async def test_renotify_failure_propagates(self, service, notifier):
        """Test a failing re-notification raises."""
        await service.start()
        await service.import_spec(TWO_OPERATION_SPEC)
        notifier.fail_with = "down"

        with pytest.raises(NotifierError):
            await service.renotify((await service.list_configs())[0])


class TestImporterServiceHealth:
    """Test service health reporting."""

    @pytest.mark.asyncio
    async def test_health_running(self, service):
        """Test health when all components run."""
        await service.start()

        health = await service.check_health()

        assert health.status == "ok"
        assert health.is_running
        assert health.version == "2.0.0"
        assert health.components["store"].status == "ok"
        assert health.components["notifier"].status == "ok"
        assert health.error is None

    @pytest.mark.asyncio
    async def test_health_stopped(self, service):
        """Test health before start reports component errors."""
        health = await service.check_health()

        assert health.status == "error"
        assert not health.is_running
        assert health.components["store"].status == "error"
        assert health.components["store"].error == "recording_store not running"

    @pytest.mark.asyncio
    async def test_health_component_raises(self, service, notifier, monkeypatch):
        """Test a crashing health check is reported, not raised."""
        await service.start()

        async def broken_health():
            raise RuntimeError("health check failed")

        monkeypatch.setattr(notifier, "health", broken_health)
        health = await service.check_health()

        assert health.status == "error"
        assert health.components["notifier"].error == "health check failed"

