"""Catalog API endpoints"""

from typing import Optional

from fastapi import APIRouter

from storefront_service.app.api.dependencies import CatalogServiceDep, CorrelationIdDep
from storefront_service.app.core.setting import get_settings
from storefront_service.app.schemas.product import (
    ProductListResponse,
    ProductResponse,
)
from storefront_service.app.services.catalog_service import (
    CatalogService,
    coerce_positive_int,
)

router = APIRouter(prefix="/products")


@router.get("", response_model=ProductListResponse)
async def list_products(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    correlation_id: Optional[str] = CorrelationIdDep,
    service: CatalogService = CatalogServiceDep,
):
    """Paginated product catalog"""
    return await service.list_products(
        page=coerce_positive_int(page, 1),
        limit=coerce_positive_int(limit, get_settings().DEFAULT_PAGE_SIZE),
        correlation_id=correlation_id,
    )


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    correlation_id: Optional[str] = CorrelationIdDep,
    service: CatalogService = CatalogServiceDep,
):
    """Product details by ID"""
    return await service.get_product(product_id, correlation_id=correlation_id)
