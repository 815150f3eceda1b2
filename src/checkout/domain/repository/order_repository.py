"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime

from checkout.domain.model.order import Order, OrderStatus
from checkout.domain.repository.transaction import Transaction


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new opaque order id (24 hex characters)."""

    @abstractmethod
    def add(self, order: Order, txn: Transaction | None = None) -> None:
        """Persist a new order, assigning its id if unset.

        With ``txn`` the insert is staged until commit.
        """

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found or malformed."""

    @abstractmethod
    def list_by_customer(self, customer_id: str) -> list[Order]:
        """Return a customer's orders, newest first."""

    @abstractmethod
    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        """Return every order (optionally by status), newest first."""

    @abstractmethod
    def list_created_between(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> list[Order]:
        """Return orders with ``start <= created_at <= end`` (open bounds allowed)."""

    @abstractmethod
    def update(
        self, order_id: str, mutate: Callable[[Order], bool | None]
    ) -> Order | None:
        """Load, mutate and save one order as a single atomic step.

        ``mutate`` may raise to abort the update; returning False means
        nothing changed and skips the write. Returns the resulting order,
        or None if no such order exists.
        """
