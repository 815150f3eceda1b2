"""Application service: Cancel Order use case.

Cancellation is terminal. The status check and the write happen in
one atomic update, so two concurrent cancellations cannot both succeed.
Reserved stock is put back by the observers of ``orderCancelled``.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import structlog

from checkout.application.dto import OrderDTO, order_to_dto
from checkout.application.events.event_bus import EventBus
from checkout.domain.exceptions import OrderNotFoundError
from checkout.domain.model.events import OrderEvent
from checkout.domain.model.order import Order, utcnow
from checkout.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class CancelOrderHandler:

    def __init__(
        self,
        orders: OrderRepository,
        event_bus: EventBus,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._orders = orders
        self._event_bus = event_bus
        self._clock = clock

    def handle(self, order_id: str, reason: str = "") -> OrderDTO:
        def apply(order: Order) -> None:
            order.cancel(reason, self._clock())

        order = self._orders.update(order_id, apply)
        if order is None:
            raise OrderNotFoundError(order_id)

        logger.info("order_cancelled", order_id=order.id, reason=order.cancellation_reason)
        self._event_bus.notify(OrderEvent.ORDER_CANCELLED, order)
        return order_to_dto(order)
