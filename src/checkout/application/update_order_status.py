"""Application service: Update Order Status use case (admin)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import structlog

from checkout.application.dto import OrderDTO, order_to_dto
from checkout.application.events.event_bus import EventBus
from checkout.domain.exceptions import OrderNotFoundError, ValidationError
from checkout.domain.model.events import OrderEvent
from checkout.domain.model.order import Order, OrderStatus, utcnow
from checkout.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        orders: OrderRepository,
        event_bus: EventBus,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._orders = orders
        self._event_bus = event_bus
        self._clock = clock

    def handle(self, order_id: str, status: str) -> OrderDTO:
        new_status = self._parse_status(status)

        def apply(order: Order) -> None:
            order.update_status(new_status, self._clock())

        order = self._orders.update(order_id, apply)
        if order is None:
            raise OrderNotFoundError(order_id)

        logger.info("order_status_updated", order_id=order.id, status=order.status.value)
        event = (
            OrderEvent.ORDER_SHIPPED
            if order.status == OrderStatus.SHIPPED
            else OrderEvent.ORDER_UPDATED
        )
        self._event_bus.notify(event, order)
        return order_to_dto(order)

    @staticmethod
    def _parse_status(raw: str) -> OrderStatus:
        try:
            return OrderStatus((raw or "").strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Unknown order status {raw!r} (expected one of: {allowed})"
            ) from None
