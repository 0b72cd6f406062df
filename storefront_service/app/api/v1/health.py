from typing import Any, Dict

from fastapi import APIRouter

from storefront_service.app.core.database import database_manager
from storefront_service.app.core.event_management import health_check_events
from storefront_service.app.core.setting import get_settings
from storefront_service.app.services.tracking_service import KAFKA_SINK
from storefront_service.app.utils.service_health import StorefrontHealthChecker

router = APIRouter()

health_checker = StorefrontHealthChecker("storefront-service")


async def _database_check() -> Dict[str, Any]:
    healthy = await database_manager.health_check()
    return {
        "status": "healthy" if healthy else "unhealthy",
        "component": "database",
        "database_type": database_manager.database_type,
    }


async def _event_bus_check() -> Dict[str, Any]:
    settings = get_settings()
    if settings.TRACKING_SINK != KAFKA_SINK:
        return {"status": "healthy", "component": "event_bus", "enabled": False}
    connected = await health_check_events()
    # Kafka being down only degrades tracking, the storefront keeps serving
    return {
        "status": "healthy" if connected else "degraded",
        "component": "event_bus",
        "enabled": True,
        "connected": connected,
    }


health_checker.add_check("database", _database_check)
health_checker.add_check("event_bus", _event_bus_check)


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Health check endpoint for the storefront service."""
    report = await health_checker.run_checks()
    report["version"] = get_settings().APP_VERSION
    report["tracking_sink"] = get_settings().TRACKING_SINK
    return report
