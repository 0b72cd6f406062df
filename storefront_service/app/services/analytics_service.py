"""Store-wide counters for the analytics banner"""

from sqlalchemy.ext.asyncio import AsyncSession

from ..repository.order_repository import OrderRepository
from ..repository.product_repository import ProductRepository
from ..repository.tracking_repository import TrackingRepository
from ..schemas.analytics import AnalyticsSummary


class AnalyticsService:
    def __init__(self, db: AsyncSession):
        self.products = ProductRepository(db)
        self.orders = OrderRepository(db)
        self.tracking = TrackingRepository(db)

    async def summary(self) -> AnalyticsSummary:
        # One session cannot run statements concurrently, so count in turn
        return AnalyticsSummary(
            total_products=await self.products.count_products(),
            total_orders=await self.orders.count_orders(),
            total_clicks=await self.tracking.count_clicks(),
            total_impressions=await self.tracking.count_impressions(),
        )
