"""
FastAPI dependency injection for Storefront Service

Provides database sessions, the configured tracking sink, service instances
and correlation ID lookup.
"""

from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront_service.app.core.database import get_db_session
from storefront_service.app.core.event_management import get_event_producer
from storefront_service.app.core.setting import get_settings
from storefront_service.app.events.event_producers import InteractionEventProducer
from storefront_service.app.services.analytics_service import AnalyticsService
from storefront_service.app.services.cart_service import CartService
from storefront_service.app.services.catalog_service import CatalogService
from storefront_service.app.services.order_service import OrderService
from storefront_service.app.services.tracking_service import (
    TrackingSink,
    create_tracking_sink,
)

# =====================================================
# DATABASE DEPENDENCIES
# =====================================================


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide async database session"""
    async for session in get_db_session():
        yield session


# =====================================================
# REQUEST CONTEXT DEPENDENCIES
# =====================================================


def get_correlation_id(request: Request) -> Optional[str]:
    """Correlation ID from request headers or the logging middleware"""
    return request.headers.get("X-Correlation-ID") or getattr(
        request.state, "correlation_id", None
    )


# =====================================================
# TRACKING DEPENDENCIES
# =====================================================


def get_interaction_event_producer() -> Optional[InteractionEventProducer]:
    return get_event_producer()


def get_tracking_sink(
    session: AsyncSession = Depends(get_async_session),
    event_producer: Optional[InteractionEventProducer] = Depends(
        get_interaction_event_producer
    ),
    correlation_id: Optional[str] = Depends(get_correlation_id),
) -> TrackingSink:
    """Provide the tracking sink selected by TRACKING_SINK"""
    return create_tracking_sink(
        get_settings().TRACKING_SINK,
        session,
        event_producer=event_producer,
        correlation_id=correlation_id,
    )


# =====================================================
# SERVICE DEPENDENCIES
# =====================================================


def get_catalog_service(
    session: AsyncSession = Depends(get_async_session),
    tracking_sink: TrackingSink = Depends(get_tracking_sink),
) -> CatalogService:
    return CatalogService(session, tracking_sink)


def get_cart_service(
    session: AsyncSession = Depends(get_async_session),
    tracking_sink: TrackingSink = Depends(get_tracking_sink),
) -> CartService:
    return CartService(session, tracking_sink)


def get_order_service(
    session: AsyncSession = Depends(get_async_session),
) -> OrderService:
    return OrderService(session)


def get_analytics_service(
    session: AsyncSession = Depends(get_async_session),
) -> AnalyticsService:
    return AnalyticsService(session)


# =====================================================
# COMMON DEPENDENCY ALIASES
# =====================================================

CorrelationIdDep = Depends(get_correlation_id)
DatabaseDep = Depends(get_async_session)
TrackingSinkDep = Depends(get_tracking_sink)
CatalogServiceDep = Depends(get_catalog_service)
CartServiceDep = Depends(get_cart_service)
OrderServiceDep = Depends(get_order_service)
AnalyticsServiceDep = Depends(get_analytics_service)
