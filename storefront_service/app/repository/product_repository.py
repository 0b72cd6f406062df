"""Product repository for catalog reads"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.product import Product


class ProductRepository:
    """Repository for product database operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_products(self, offset: int, limit: int) -> List[Product]:
        """One page of products in catalog order"""
        query = (
            select(Product).order_by(Product.product_id).offset(offset).limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count_products(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Product))
        return result.scalar() or 0

    async def get_product_by_id(self, product_id: int) -> Optional[Product]:
        query = select(Product).where(Product.product_id == product_id)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()
