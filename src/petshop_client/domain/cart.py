"""Cart domain models."""

from dataclasses import dataclass

from petshop_client.domain.catalog import Product


@dataclass(frozen=True)
class CartItem:
    """One line in the cart: a distinct product and how many of it."""

    product: Product
    quantity: int

    @property
    def subtotal(self) -> float:
        return self.product.price * self.quantity
