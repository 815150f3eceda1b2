"""Observer contract for order events.

Every observer routes events through a fixed dispatch table keyed by
``OrderEvent``. Events missing from an observer's table are ignored.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping

import structlog

from checkout.domain.model.events import OrderEvent
from checkout.domain.model.order import Order

logger = structlog.get_logger(__name__)

EventHandler = Callable[[Order], None]


class Observer(ABC):

    @abstractmethod
    def handlers(self) -> Mapping[OrderEvent, EventHandler]:
        """The events this observer reacts to, and how."""

    @property
    def name(self) -> str:
        return type(self).__name__

    def update(self, event: OrderEvent, order: Order) -> None:
        """Handle one event. May raise; the event bus contains the failure."""
        handler = self.handlers().get(event)
        if handler is None:
            logger.debug("observer_event_ignored", observer=self.name, order_event=event.value)
            return
        handler(order)
