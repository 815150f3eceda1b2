"""Cart aggregate — the customer's mutable, pre-checkout basket.

One cart per customer. The cart has no inventory awareness; stock
sufficiency is checked by the use cases that mutate it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from checkout.domain.exceptions import EntityNotFoundError
from checkout.domain.model.value_objects import Quantity


@dataclass
class CartLine:
    product_id: str
    quantity: Quantity


@dataclass
class Cart:
    """Aggregate root for a customer's cart.

    Invariants:
    - at most one line per product
    - every line has quantity >= 1 (removing a line is the only way to
      reach zero)
    """

    customer_id: str
    lines: list[CartLine] = field(default_factory=list)
    updated_at: datetime | None = None

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def find_line(self, product_id: str) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def quantity_of(self, product_id: str) -> int:
        line = self.find_line(product_id)
        return line.quantity.value if line else 0

    # --- Mutations ------------------------------------------------------------

    def add(self, product_id: str, quantity: Quantity) -> None:
        """Increment an existing line, or append a new one."""
        line = self.find_line(product_id)
        if line is None:
            self.lines.append(CartLine(product_id=product_id, quantity=quantity))
        else:
            line.quantity = line.quantity + quantity

    def set_quantity(self, product_id: str, quantity: Quantity) -> None:
        line = self.find_line(product_id)
        if line is None:
            raise EntityNotFoundError(
                f"Product '{product_id}' is not in the cart"
            )
        line.quantity = quantity

    def remove(self, product_id: str) -> None:
        self.lines = [line for line in self.lines if line.product_id != product_id]

    def clear(self) -> None:
        self.lines = []

    def contents(self) -> dict[str, int]:
        """Quantity per product id."""
        return {line.product_id: line.quantity.value for line in self.lines}
