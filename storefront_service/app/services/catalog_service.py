"""Catalog reads with page-hit and click tracking"""

import math
import re
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ProductNotFoundError
from ..repository.product_repository import ProductRepository
from ..schemas.product import PaginationInfo, ProductListResponse, ProductResponse
from ..utils.logging import setup_storefront_logging as setup_logging
from .tracking_service import TrackingSink

logger = setup_logging("storefront_service.catalog")

PRODUCTS_PAGE = "products"

# Leading integer of a query value, as in "2.5" -> 2 or "3abc" -> 3
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def coerce_positive_int(raw: Optional[str], default: int) -> int:
    """Query-string integer; missing, malformed or non-positive means default"""
    match = _LEADING_INT.match(raw) if raw else None
    if match is None:
        return default
    value = int(match.group(1))
    return value if value > 0 else default


class CatalogService:
    def __init__(self, db: AsyncSession, tracking_sink: TrackingSink):
        self.repository = ProductRepository(db)
        self.tracking_sink = tracking_sink

    async def list_products(
        self, page: int, limit: int, correlation_id: Optional[str] = None
    ) -> ProductListResponse:
        """One catalog page plus pagination totals; records a page hit first"""
        await self.tracking_sink.record_page_hit(PRODUCTS_PAGE)

        offset = (page - 1) * limit
        products = await self.repository.list_products(offset=offset, limit=limit)
        total = await self.repository.count_products()

        logger.info(
            "Product page listed",
            extra={
                "page": page,
                "limit": limit,
                "returned": len(products),
                "total": total,
                "correlation_id": correlation_id,
            },
        )

        return ProductListResponse(
            products=[ProductResponse.model_validate(p) for p in products],
            pagination=PaginationInfo(
                page=page,
                limit=limit,
                total=total,
                total_pages=math.ceil(total / limit),
            ),
        )

    async def get_product(
        self, product_id: int, correlation_id: Optional[str] = None
    ) -> ProductResponse:
        """Product detail; the click is recorded even when the id is unknown"""
        await self.tracking_sink.record_click(product_id)

        product = await self.repository.get_product_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        logger.info(
            "Product retrieved",
            extra={"product_id": product_id, "correlation_id": correlation_id},
        )
        return ProductResponse.model_validate(product)
