"""Application services: order listings (queries)."""

from __future__ import annotations

from checkout.application.dto import OrderDTO, order_to_dto
from checkout.domain.exceptions import ValidationError
from checkout.domain.model.order import OrderStatus
from checkout.domain.repository.order_repository import OrderRepository


class ListCustomerOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, customer_id: str) -> list[OrderDTO]:
        """A customer's orders, newest first."""
        return [order_to_dto(o) for o in self._order_repo.list_by_customer(customer_id)]


class ListAllOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, status: str | None = None) -> list[OrderDTO]:
        """Every order (admin view), newest first, optionally filtered by status."""
        wanted = None
        if status:
            try:
                wanted = OrderStatus(status.strip().lower())
            except ValueError:
                raise ValidationError(f"Unknown order status {status!r}") from None
        return [order_to_dto(o) for o in self._order_repo.list_all(status=wanted)]
