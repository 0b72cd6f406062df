"""
Storefront Service FastAPI Application
======================================

Main application entry point for the MyKart storefront: product catalog,
cart, checkout and analytics, with interaction tracking written either to
the database or to Kafka.
"""

import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from storefront_service.app.api.v1.analytics import router as analytics_router
from storefront_service.app.api.v1.cart import router as cart_router
from storefront_service.app.api.v1.health import router as health_router
from storefront_service.app.api.v1.orders import router as orders_router
from storefront_service.app.api.v1.products import router as products_router
from storefront_service.app.api.v1.tracking import router as tracking_router
from storefront_service.app.core.database import database_manager
from storefront_service.app.core.event_management import close_events, init_events
from storefront_service.app.core.setting import get_settings
from storefront_service.app.middleware.error.error_handler import (
    setup_storefront_error_handling,
)
from storefront_service.app.middleware.logging.request_logging import (
    RequestLoggingMiddleware,
)
from storefront_service.app.services.tracking_service import KAFKA_SINK
from storefront_service.app.utils.logging import setup_storefront_logging

settings = get_settings()
logger = setup_storefront_logging(
    "storefront_service",
    log_level=settings.LOG_LEVEL,
    enable_file_logging=settings.is_production,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager for startup and shutdown."""
    startup_start = time.time()

    try:
        await _initialize_services(startup_start)
    except Exception as e:
        logger.error(
            "Failed to start storefront service",
            exc_info=True,
            extra={
                "startup_duration_ms": int((time.time() - startup_start) * 1000),
                "error_type": type(e).__name__,
            },
        )
        raise

    yield

    await _shutdown_services()


async def _initialize_services(startup_start: float) -> None:
    logger.info(
        "Starting storefront service initialization",
        extra={
            "environment": settings.ENVIRONMENT,
            "debug_mode": settings.DEBUG,
            "tracking_sink": settings.TRACKING_SINK,
            "service_version": settings.APP_VERSION,
        },
    )

    db_start = time.time()
    await database_manager.create_tables()
    db_duration = int((time.time() - db_start) * 1000)

    event_duration = 0
    events_connected = False
    if settings.TRACKING_SINK == KAFKA_SINK:
        event_start = time.time()
        events_connected = await init_events()
        event_duration = int((time.time() - event_start) * 1000)

    logger.info(
        "Storefront service started successfully",
        extra={
            "total_startup_duration_ms": int((time.time() - startup_start) * 1000),
            "database_init_ms": db_duration,
            "event_publisher_init_ms": event_duration,
            "event_publisher_connected": events_connected,
        },
    )


async def _shutdown_services() -> None:
    shutdown_start = time.time()
    logger.info("Starting storefront service shutdown")

    await close_events()
    await database_manager.close()

    logger.info(
        "Storefront service shutdown completed",
        extra={"shutdown_duration_ms": int((time.time() - shutdown_start) * 1000)},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
    )

    app.add_middleware(RequestLoggingMiddleware)
    setup_storefront_error_handling(app)
    _setup_cors(app)
    _setup_routers(app)

    if settings.is_production:
        _setup_client_build(app, Path(settings.CLIENT_BUILD_DIR))

    return app


def _setup_cors(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_CREDENTIALS,
        allow_methods=settings.CORS_METHODS,
        allow_headers=settings.CORS_HEADERS,
    )


def _setup_routers(app: FastAPI) -> None:
    routers_info: list[dict[str, Any]] = []

    app.include_router(health_router, tags=["Health"])
    routers_info.append({"router": "health", "prefix": ""})

    for name, router, tag in (
        ("products", products_router, "Catalog"),
        ("cart", cart_router, "Cart"),
        ("orders", orders_router, "Orders"),
        ("tracking", tracking_router, "Tracking"),
        ("analytics", analytics_router, "Analytics"),
    ):
        app.include_router(router, prefix="/api", tags=[tag])
        routers_info.append({"router": name, "prefix": "/api"})

    logger.info(
        "API routes configured",
        extra={"total_routers": len(routers_info), "routers": routers_info},
    )


def _setup_client_build(app: FastAPI, build_dir: Path) -> None:
    """Serve the React build and fall back to index.html for client routes"""
    index_file = build_dir / "index.html"
    if not index_file.is_file():
        logger.warning(
            "Client build not found, static serving disabled",
            extra={"client_build_dir": str(build_dir)},
        )
        return

    static_dir = build_dir / "static"
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_client(full_path: str):
        if full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")
        candidate = (build_dir / full_path).resolve()
        if (
            full_path
            and candidate.is_file()
            and candidate.is_relative_to(build_dir.resolve())
        ):
            return FileResponse(candidate)
        return FileResponse(index_file)

    logger.info("Client build served", extra={"client_build_dir": str(build_dir)})


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(  # type: ignore
        "storefront_service.app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=True,
    )
