from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CartActionRequest(BaseModel):
    """Body of /cart/add and /cart/remove"""

    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(..., alias="productId")
    quantity: Optional[int] = 1

    @field_validator("quantity")
    @classmethod
    def default_quantity(cls, v):
        # A missing or zero quantity means one unit
        if not v:
            return 1
        if v < 0:
            raise ValueError("quantity must be positive")
        return v


class CartActionResponse(BaseModel):
    success: bool = True
    message: str


class CartItemResponse(BaseModel):
    product_id: int
    name: str
    price: Decimal
    image_url: Optional[str] = None
    quantity: int


class CartResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cart_items: List[CartItemResponse] = Field(default_factory=list, alias="cartItems")
