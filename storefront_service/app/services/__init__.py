from .analytics_service import AnalyticsService
from .cart_service import CartService, reconstruct_cart, signed_quantity
from .catalog_service import CatalogService
from .order_service import OrderService
from .tracking_service import (
    DatabaseTrackingSink,
    KafkaTrackingSink,
    TrackingSink,
    create_tracking_sink,
)

__all__ = [
    "AnalyticsService",
    "CartService",
    "CatalogService",
    "DatabaseTrackingSink",
    "KafkaTrackingSink",
    "OrderService",
    "TrackingSink",
    "create_tracking_sink",
    "reconstruct_cart",
    "signed_quantity",
]
