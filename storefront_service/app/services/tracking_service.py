"""
Interaction tracking sinks.

Every page hit, click, impression and cart event goes through a TrackingSink.
The `database` sink inserts rows synchronously; the `kafka` sink publishes
them to the bus and never touches the interaction tables.
"""

from abc import ABC, abstractmethod
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..events.event_producers import InteractionEventProducer
from ..repository.tracking_repository import TrackingRepository
from ..utils.logging import setup_storefront_logging as setup_logging

logger = setup_logging("storefront_service.tracking")

DATABASE_SINK = "database"
KAFKA_SINK = "kafka"


class TrackingSink(ABC):
    """Destination for user-interaction events"""

    # Whether cart state can be rebuilt from what this sink records
    supports_cart_state: bool = False

    @abstractmethod
    async def record_page_hit(self, page_name: str) -> None: ...

    @abstractmethod
    async def record_click(self, product_id: int) -> None: ...

    @abstractmethod
    async def record_impression(self, product_id: int) -> None: ...

    @abstractmethod
    async def record_cart_event(
        self, product_id: int, quantity: int, event_type: str
    ) -> None: ...


class DatabaseTrackingSink(TrackingSink):
    supports_cart_state = True

    def __init__(self, db: AsyncSession):
        self.repository = TrackingRepository(db)

    async def record_page_hit(self, page_name: str) -> None:
        await self.repository.record_page_hit(page_name)

    async def record_click(self, product_id: int) -> None:
        await self.repository.record_click(product_id)

    async def record_impression(self, product_id: int) -> None:
        await self.repository.record_impression(product_id)

    async def record_cart_event(
        self, product_id: int, quantity: int, event_type: str
    ) -> None:
        await self.repository.record_cart_event(product_id, quantity, event_type)


class KafkaTrackingSink(TrackingSink):
    supports_cart_state = False

    def __init__(
        self,
        event_producer: InteractionEventProducer,
        correlation_id: Optional[str] = None,
    ):
        self.event_producer = event_producer
        self.correlation_id = correlation_id

    async def record_page_hit(self, page_name: str) -> None:
        await self.event_producer.publish_page_hit(page_name, self.correlation_id)

    async def record_click(self, product_id: int) -> None:
        await self.event_producer.publish_click(product_id, self.correlation_id)

    async def record_impression(self, product_id: int) -> None:
        await self.event_producer.publish_impression(product_id, self.correlation_id)

    async def record_cart_event(
        self, product_id: int, quantity: int, event_type: str
    ) -> None:
        await self.event_producer.publish_cart_event(
            product_id, quantity, event_type, self.correlation_id
        )


def create_tracking_sink(
    sink_name: str,
    db: AsyncSession,
    event_producer: Optional[InteractionEventProducer] = None,
    correlation_id: Optional[str] = None,
) -> TrackingSink:
    """Build the sink selected by configuration"""
    if sink_name == DATABASE_SINK:
        return DatabaseTrackingSink(db)
    if sink_name == KAFKA_SINK:
        if event_producer is None:
            raise RuntimeError("Event producer not initialized")
        return KafkaTrackingSink(event_producer, correlation_id)
    raise ValueError(f"Unknown tracking sink '{sink_name}'")
