from .base import StorefrontBase
from .order import ORDER_STATUS_PLACED, Order, OrderLineItem
from .product import Product
from .tracking import CartEvent, CartEventType, Click, Impression, PageHit

"""Storefront Service Models"""

__all__ = [
    "StorefrontBase",
    "Product",
    "PageHit",
    "Click",
    "Impression",
    "CartEvent",
    "CartEventType",
    "Order",
    "OrderLineItem",
    "ORDER_STATUS_PLACED",
]
