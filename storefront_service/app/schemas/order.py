from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderItemRequest(BaseModel):
    """One cart line as the client holds it; display fields are ignored"""

    model_config = ConfigDict(extra="ignore")

    product_id: int
    quantity: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0)


class PlaceOrderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cart_items: Optional[List[OrderItemRequest]] = Field(None, alias="cartItems")


class PlaceOrderResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    order_id: int = Field(..., alias="orderId")
    message: str = "Order placed successfully!"
    total: str
