"""Cart API endpoints"""

from typing import Optional

from fastapi import APIRouter

from storefront_service.app.api.dependencies import CartServiceDep, CorrelationIdDep
from storefront_service.app.schemas.cart import (
    CartActionRequest,
    CartActionResponse,
    CartResponse,
)
from storefront_service.app.services.cart_service import CartService

router = APIRouter(prefix="/cart")


@router.post("/add", response_model=CartActionResponse)
async def add_to_cart(
    body: CartActionRequest,
    correlation_id: Optional[str] = CorrelationIdDep,
    service: CartService = CartServiceDep,
):
    await service.add_to_cart(
        body.product_id, body.quantity, correlation_id=correlation_id
    )
    return CartActionResponse(message="Product added to cart")


@router.post("/remove", response_model=CartActionResponse)
async def remove_from_cart(
    body: CartActionRequest,
    correlation_id: Optional[str] = CorrelationIdDep,
    service: CartService = CartServiceDep,
):
    await service.remove_from_cart(
        body.product_id, body.quantity, correlation_id=correlation_id
    )
    return CartActionResponse(message="Product removed from cart")


@router.get("", response_model=CartResponse)
async def get_cart(
    correlation_id: Optional[str] = CorrelationIdDep,
    service: CartService = CartServiceDep,
):
    """Current cart contents rebuilt from cart events"""
    return await service.get_cart(correlation_id=correlation_id)
