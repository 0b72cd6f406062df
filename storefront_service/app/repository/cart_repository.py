"""Cart state derived from the append-only cart_events log"""

from typing import Any, Dict, List

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.product import Product
from ..models.tracking import CartEvent, CartEventType

POSITIVE_EVENT_TYPES = (CartEventType.ADDED.value, CartEventType.INCREASED.value)
NEGATIVE_EVENT_TYPES = (CartEventType.REMOVED.value, CartEventType.DECREASED.value)


class CartRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_cart_items(self) -> List[Dict[str, Any]]:
        """
        Sum every cart event per product, added/increased counting positive
        and removed/decreased negative, and keep products whose total is > 0.

        The log is not partitioned by user: this is the cart of the store.
        """
        signed_quantity = case(
            (CartEvent.event_type.in_(POSITIVE_EVENT_TYPES), CartEvent.quantity),
            (CartEvent.event_type.in_(NEGATIVE_EVENT_TYPES), -CartEvent.quantity),
            else_=0,
        )
        total_quantity = func.sum(signed_quantity)

        query = (
            select(
                Product.product_id,
                Product.name,
                Product.price,
                Product.image_url,
                total_quantity.label("quantity"),
            )
            .select_from(CartEvent)
            .join(Product, CartEvent.product_id == Product.product_id)
            .group_by(
                Product.product_id, Product.name, Product.price, Product.image_url
            )
            .having(total_quantity > 0)
            .order_by(Product.product_id)
        )
        result = await self.db.execute(query)
        return [dict(row) for row in result.mappings().all()]
