from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.order import ORDER_STATUS_PLACED, Order, OrderLineItem


class OrderRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_order(
        self,
        total_amount: Decimal,
        items: List[Dict[str, Any]],
        status: str = ORDER_STATUS_PLACED,
    ) -> Order:
        """Insert the order and its line items in one transaction"""
        order = Order(total_amount=total_amount, status=status)
        self.session.add(order)
        await self.session.flush()  # Get the order ID

        for item in items:
            self.session.add(
                OrderLineItem(
                    order_id=order.order_id,
                    product_id=item["product_id"],
                    quantity=item["quantity"],
                    price=item["price"],
                )
            )

        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return order

    async def count_orders(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Order))
        return result.scalar() or 0

    async def get_line_items(self, order_id: int) -> List[OrderLineItem]:
        query = (
            select(OrderLineItem)
            .where(OrderLineItem.order_id == order_id)
            .order_by(OrderLineItem.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())
