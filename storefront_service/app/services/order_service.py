"""Checkout: turn the client's cart into an order with line items"""

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import EmptyCartError
from ..repository.order_repository import OrderRepository
from ..schemas.order import OrderItemRequest, PlaceOrderResponse
from ..utils.logging import setup_storefront_logging as setup_logging

logger = setup_logging("storefront_service.orders")

CENTS = Decimal("0.01")


def order_total(items: List[OrderItemRequest]) -> Decimal:
    """Sum of price x quantity, rounded to cents"""
    total = sum((item.price * item.quantity for item in items), Decimal("0"))
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)


class OrderService:
    def __init__(self, db: AsyncSession):
        self.repository = OrderRepository(db)

    async def place_order(
        self,
        items: Optional[List[OrderItemRequest]],
        correlation_id: Optional[str] = None,
    ) -> PlaceOrderResponse:
        if not items:
            raise EmptyCartError()

        total = order_total(items)
        order = await self.repository.create_order(
            total_amount=total,
            items=[item.model_dump() for item in items],
        )

        logger.info(
            "Order placed",
            extra={
                "order_id": order.order_id,
                "line_items": len(items),
                "total_amount": str(total),
                "correlation_id": correlation_id,
            },
        )

        return PlaceOrderResponse(order_id=order.order_id, total=f"{total:.2f}")
