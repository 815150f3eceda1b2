"""Application service: Show Order use case (query)."""

from __future__ import annotations

from checkout.application.dto import OrderDTO, order_to_dto
from checkout.domain.exceptions import ForbiddenError, OrderNotFoundError
from checkout.domain.model.order import Order
from checkout.domain.repository.customer_repository import CustomerRepository
from checkout.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo

    def handle(self, order_id: str, requester_id: str | None = None) -> OrderDTO:
        """Return one order.

        With ``requester_id`` the order must belong to that customer,
        unless the requester is an admin.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        if requester_id is not None and not self._may_view(order, requester_id):
            raise ForbiddenError(f"Order {order.id} does not belong to {requester_id}")
        return order_to_dto(order)

    def _may_view(self, order: Order, requester_id: str) -> bool:
        if order.is_owned_by(requester_id):
            return True
        if self._customer_repo is None:
            return False
        requester = self._customer_repo.get_by_id(requester_id)
        return requester is not None and requester.is_admin
