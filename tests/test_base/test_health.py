"""Test health utilities."""

from datetime import datetime, timedelta

from mcp_apiserver.utils.health import ComponentHealth, ServiceHealth, get_uptime


def test_get_uptime():
    """Test uptime since a start time."""
    assert get_uptime(None) == 0.0
    assert get_uptime(datetime.now() - timedelta(seconds=5)) >= 5.0


def test_component_from_service_health():
    """Test conversion of service health dicts."""
    assert ComponentHealth.from_service_health({"is_healthy": True}).status == "ok"

    stopped = ComponentHealth.from_service_health({"is_healthy": False, "service": "file_store"})
    assert stopped.error == "file_store not running"

    broken = ComponentHealth.from_service_health({"is_healthy": False, "error": "disk gone"})
    assert broken.error == "disk gone"


def test_service_health_aggregation():
    """Test one failing component fails the service."""
    components = {"store": ComponentHealth(status="ok"), "notifier": ComponentHealth(status="error", error="x")}

    health = ServiceHealth.from_components("importer", "1.0.0", True, 1.0, components)
    assert health.status == "error"
    assert health.error == "One or more components in error state"

    components["notifier"] = ComponentHealth(status="ok")
    assert ServiceHealth.from_components("importer", "1.0.0", True, 1.0, components).status == "ok"
    assert ServiceHealth.from_components("importer", "1.0.0", False, 0.0, components).status == "error"
