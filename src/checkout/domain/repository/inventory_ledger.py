"""Abstract inventory ledger — the only writer of Product.stock.

``reserve`` must be implemented as one atomic conditional decrement
("subtract only if stock >= quantity"). A lookup followed by a separate
write lets two checkouts both see enough stock and oversell.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from checkout.domain.repository.transaction import Transaction


class ReservationResult(Enum):
    OK = "ok"
    INSUFFICIENT_STOCK = "insufficient_stock"
    NOT_FOUND = "not_found"


class InventoryLedger(ABC):

    @abstractmethod
    def reserve(
        self, product_id: str, quantity: int, txn: Transaction | None = None
    ) -> ReservationResult:
        """Atomically take ``quantity`` units out of stock if available.

        With ``txn``, aborting the transaction puts the units back.
        """

    @abstractmethod
    def release(
        self, product_id: str, quantity: int, txn: Transaction | None = None
    ) -> ReservationResult:
        """Put ``quantity`` units back into stock. Never INSUFFICIENT_STOCK."""
