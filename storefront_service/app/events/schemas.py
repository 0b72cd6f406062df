"""
Storefront Service Event Schemas
================================

Payloads carried in the `data` field of interaction events.
"""

from typing import Any, Dict

from pydantic import BaseModel


class InteractionEventData(BaseModel):
    """Base interaction event data structure"""

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class PageHitEventData(InteractionEventData):
    page_name: str


class ClickEventData(InteractionEventData):
    product_id: int


class ImpressionEventData(InteractionEventData):
    product_id: int


class CartEventData(InteractionEventData):
    product_id: int
    quantity: int
    event_type: str
