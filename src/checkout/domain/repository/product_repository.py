"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Stock changes go through InventoryLedger, except
for the catalog's own stock-level adjustments.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from checkout.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by name (case-insensitive), or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new product, or update an existing one's catalog fields.

        The stock level of an existing product is left to the inventory
        ledger and ``set_stock``.
        """

    @abstractmethod
    def set_stock(self, product_id: str, quantity: int) -> bool:
        """Overwrite the stock level (catalog restock). False if unknown.

        Raises ReservationInProgressError while an uncommitted checkout
        holds a reservation on the product.
        """
