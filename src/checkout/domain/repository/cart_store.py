"""Abstract cart store.

Every mutation is a single atomic update of the customer's cart, so
concurrent adds for the same customer never lose an increment.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from checkout.domain.model.cart import Cart
from checkout.domain.repository.transaction import Transaction


class CartStore(ABC):

    @abstractmethod
    def get(self, customer_id: str) -> Cart:
        """Return the customer's cart, creating an empty one if absent."""

    @abstractmethod
    def add_item(self, customer_id: str, product_id: str, quantity: int) -> Cart:
        """Increment the product's line, inserting it if missing."""

    @abstractmethod
    def set_quantity(self, customer_id: str, product_id: str, quantity: int) -> Cart:
        """Overwrite a line's quantity. Raises EntityNotFoundError if absent."""

    @abstractmethod
    def remove_item(self, customer_id: str, product_id: str) -> Cart:
        """Drop the product's line, if any."""

    @abstractmethod
    def clear(
        self,
        customer_id: str,
        txn: Transaction | None = None,
        expected: Cart | None = None,
    ) -> None:
        """Empty the cart. With ``txn`` the change applies on commit.

        With ``expected`` the cart must still hold exactly those lines when
        the change applies, otherwise CartChangedError is raised and, under
        ``txn``, the commit fails.
        """
