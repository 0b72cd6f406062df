"""
Storefront Service Event Producers
==================================

Publishes user-interaction events (page hits, clicks, impressions and cart
events) to Kafka. Publishing is fire-and-forget: the producer buffers the
record and the request carries on without waiting for the broker.
"""

from typing import Dict, Optional

from ..core.setting import get_settings
from ..utils.logging import setup_storefront_logging as setup_logging
from .base import BaseEvent, EventPublisher
from .schemas import (
    CartEventData,
    ClickEventData,
    ImpressionEventData,
    InteractionEventData,
    PageHitEventData,
)

settings = get_settings()
logger = setup_logging(
    "storefront_service.events.producers", log_level=settings.LOG_LEVEL
)

PAGE_HIT = "page_hit"
CLICK = "click"
IMPRESSION = "impression"
CART_EVENT = "cart_event"


class InteractionEventProducer:
    """Turns interaction records into events on their configured topics."""

    def __init__(
        self,
        publisher: EventPublisher,
        topics: Optional[Dict[str, str]] = None,
        source_service: str = settings.SERVICE_NAME,
    ):
        self.publisher = publisher
        self.topics = topics or settings.kafka_topics
        self.source_service = source_service

    async def _publish(
        self,
        event_type: str,
        payload: InteractionEventData,
        correlation_id: Optional[str] = None,
    ) -> BaseEvent:
        event = BaseEvent(
            event_type=event_type,
            source_service=self.source_service,
            data=payload.to_dict(),
            correlation_id=correlation_id,
        )
        await self.publisher.publish(event, topic=self.topics[event_type], wait=False)
        return event

    async def publish_page_hit(
        self, page_name: str, correlation_id: Optional[str] = None
    ) -> BaseEvent:
        return await self._publish(
            PAGE_HIT, PageHitEventData(page_name=page_name), correlation_id
        )

    async def publish_click(
        self, product_id: int, correlation_id: Optional[str] = None
    ) -> BaseEvent:
        return await self._publish(
            CLICK, ClickEventData(product_id=product_id), correlation_id
        )

    async def publish_impression(
        self, product_id: int, correlation_id: Optional[str] = None
    ) -> BaseEvent:
        return await self._publish(
            IMPRESSION, ImpressionEventData(product_id=product_id), correlation_id
        )

    async def publish_cart_event(
        self,
        product_id: int,
        quantity: int,
        event_type: str,
        correlation_id: Optional[str] = None,
    ) -> BaseEvent:
        event = await self._publish(
            CART_EVENT,
            CartEventData(
                product_id=product_id, quantity=quantity, event_type=event_type
            ),
            correlation_id,
        )
        logger.info(
            "Published cart event",
            extra={
                "product_id": product_id,
                "quantity": quantity,
                "cart_event_type": event_type,
                "correlation_id": correlation_id,
            },
        )
        return event
