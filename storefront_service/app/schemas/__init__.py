from .analytics import AnalyticsSummary
from .cart import CartActionRequest, CartActionResponse, CartItemResponse, CartResponse
from .order import OrderItemRequest, PlaceOrderRequest, PlaceOrderResponse
from .product import PaginationInfo, ProductListResponse, ProductResponse
from .tracking import ImpressionRequest, SuccessResponse

__all__ = [
    "AnalyticsSummary",
    "CartActionRequest",
    "CartActionResponse",
    "CartItemResponse",
    "CartResponse",
    "ImpressionRequest",
    "OrderItemRequest",
    "PaginationInfo",
    "PlaceOrderRequest",
    "PlaceOrderResponse",
    "ProductListResponse",
    "ProductResponse",
    "SuccessResponse",
]
