"""Checkout API endpoint"""

from typing import Optional

from fastapi import APIRouter

from storefront_service.app.api.dependencies import CorrelationIdDep, OrderServiceDep
from storefront_service.app.schemas.order import PlaceOrderRequest, PlaceOrderResponse
from storefront_service.app.services.order_service import OrderService

router = APIRouter(prefix="/orders")


@router.post("", response_model=PlaceOrderResponse)
async def place_order(
    body: Optional[PlaceOrderRequest] = None,
    correlation_id: Optional[str] = CorrelationIdDep,
    service: OrderService = OrderServiceDep,
):
    """Place an order from the client-held cart; a missing body is an empty cart"""
    items = body.cart_items if body is not None else None
    return await service.place_order(items, correlation_id=correlation_id)
