"""Relational writes and counts for the interaction log tables"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.tracking import CartEvent, Click, Impression, PageHit


class TrackingRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def record_page_hit(self, page_name: str) -> PageHit:
        return await self._insert(PageHit(page_name=page_name))

    async def record_click(self, product_id: int) -> Click:
        return await self._insert(Click(product_id=product_id))

    async def record_impression(self, product_id: int) -> Impression:
        return await self._insert(Impression(product_id=product_id))

    async def record_cart_event(
        self, product_id: int, quantity: int, event_type: str
    ) -> CartEvent:
        return await self._insert(
            CartEvent(product_id=product_id, quantity=quantity, event_type=event_type)
        )

    async def count_clicks(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Click))
        return result.scalar() or 0

    async def count_impressions(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Impression))
        return result.scalar() or 0

    async def _insert(self, row):
        self.db.add(row)
        await self.db.commit()
        return row
