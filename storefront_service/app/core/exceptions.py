"""Domain exceptions raised by the Storefront Service"""


class StorefrontError(Exception):
    """Base class for storefront domain errors"""


class ProductNotFoundError(StorefrontError):
    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__("Product not found")


class EmptyCartError(StorefrontError):
    def __init__(self) -> None:
        super().__init__("Cart is empty")
