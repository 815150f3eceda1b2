"""Product aggregate.

Products live independently of orders. Catalog management owns their
lifecycle; checkout only ever changes ``stock`` through the inventory
ledger's reserve/release operations.
"""

from __future__ import annotations

from dataclasses import dataclass

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.value_objects import Money

DEFAULT_CATEGORY = "general"


@dataclass
class Product:
    """A product in the catalog.

    Invariant: ``stock`` is a non-negative integer.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    category: str = DEFAULT_CATEGORY
    is_active: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.stock, bool) or not isinstance(self.stock, int):
            raise ValidationError(
                f"Stock must be an integer, got {type(self.stock).__name__}"
            )
        if self.stock < 0:
            raise ValidationError(f"Stock for {self.name} cannot be negative")

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock >= quantity
