"""Cart service: append cart events, rebuild cart contents from them"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.tracking import CartEventType
from ..repository.cart_repository import (
    NEGATIVE_EVENT_TYPES,
    POSITIVE_EVENT_TYPES,
    CartRepository,
)
from ..schemas.cart import CartItemResponse, CartResponse
from ..utils.logging import setup_storefront_logging as setup_logging
from .tracking_service import TrackingSink

logger = setup_logging("storefront_service.cart")

CART_PAGE = "cart"


def signed_quantity(event_type: str, quantity: int) -> int:
    """Contribution of one cart event to the running quantity of its product"""
    if event_type in POSITIVE_EVENT_TYPES:
        return quantity
    if event_type in NEGATIVE_EVENT_TYPES:
        return -quantity
    return 0


def reconstruct_cart(events: Iterable[Mapping[str, Any]]) -> Dict[int, int]:
    """
    Fold cart events into {product_id: quantity}.

    Same rule as the SQL aggregation: products whose signed total is not
    strictly positive are left out.
    """
    totals: Dict[int, int] = {}
    for event in events:
        product_id = event["product_id"]
        totals[product_id] = totals.get(product_id, 0) + signed_quantity(
            event["event_type"], event["quantity"]
        )
    return {pid: qty for pid, qty in totals.items() if qty > 0}


class CartService:
    def __init__(self, db: AsyncSession, tracking_sink: TrackingSink):
        self.repository = CartRepository(db)
        self.tracking_sink = tracking_sink

    async def add_to_cart(
        self, product_id: int, quantity: int, correlation_id: Optional[str] = None
    ) -> None:
        await self._append(
            product_id, quantity, CartEventType.ADDED.value, correlation_id
        )

    async def remove_from_cart(
        self, product_id: int, quantity: int, correlation_id: Optional[str] = None
    ) -> None:
        await self._append(
            product_id, quantity, CartEventType.REMOVED.value, correlation_id
        )

    async def get_cart(self, correlation_id: Optional[str] = None) -> CartResponse:
        """Current cart contents; records a page hit first"""
        await self.tracking_sink.record_page_hit(CART_PAGE)

        if not self.tracking_sink.supports_cart_state:
            # Cart events live on the bus, there is no log to aggregate here
            logger.info(
                "Cart state unavailable for tracking sink, returning empty cart",
                extra={
                    "sink": type(self.tracking_sink).__name__,
                    "correlation_id": correlation_id,
                },
            )
            return CartResponse(cart_items=[])

        rows: List[Dict[str, Any]] = await self.repository.get_cart_items()
        return CartResponse(
            cart_items=[CartItemResponse.model_validate(row) for row in rows]
        )

    async def _append(
        self,
        product_id: int,
        quantity: int,
        event_type: str,
        correlation_id: Optional[str],
    ) -> None:
        await self.tracking_sink.record_cart_event(product_id, quantity, event_type)
        logger.info(
            "Cart event recorded",
            extra={
                "product_id": product_id,
                "quantity": quantity,
                "cart_event_type": event_type,
                "correlation_id": correlation_id,
            },
        )
