"""Application service: Update Order Payment use case.

Records the gateway's settlement on the order. Applying the same
settlement twice is a no-op: the order is returned unchanged and no
second confirmation goes out. A different settlement for an order that
is already paid is refused with AlreadyPaidError instead of overwriting
the recorded one, so a paid order keeps the payment it was confirmed
with.
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
from checkout.domain.model.value_objects import PaymentResult
from checkout.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class UpdateOrderPaymentHandler:

    def __init__(
        self,
        orders: OrderRepository,
        event_bus: EventBus,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._orders = orders
        self._event_bus = event_bus
        self._clock = clock

    def handle(self, order_id: str, payment_result: PaymentResult) -> OrderDTO:
        changed = False

        def apply(order: Order) -> bool:
            nonlocal changed
            changed = order.mark_paid(payment_result, self._clock())
            return changed

        order = self._orders.update(order_id, apply)
        if order is None:
            raise OrderNotFoundError(order_id)

        if not changed:
            logger.info("payment_already_recorded", order_id=order.id, payment_id=payment_result.id)
            return order_to_dto(order)

        logger.info(
            "order_paid",
            order_id=order.id,
            payment_id=payment_result.id,
            payment_status=payment_result.status,
        )
        self._event_bus.notify(OrderEvent.ORDER_PAYMENT_CONFIRMED, order)
        return order_to_dto(order)
