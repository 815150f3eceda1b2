"""InventoryWatcher — stock alerts after checkout, stock restoration on cancel.

Alert delivery (pager, admin email, ...) is somebody else's job: alerts
go to an injectable sink, which by default just logs them.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum

import structlog

from checkout.application.events.observer import EventHandler, Observer
from checkout.domain.model.events import OrderEvent
from checkout.domain.model.order import Order
from checkout.domain.repository.inventory_ledger import InventoryLedger, ReservationResult
from checkout.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)

DEFAULT_LOW_STOCK_THRESHOLD = 10


class StockLevel(Enum):
    LOW = "low"
    OUT = "out"


@dataclass(frozen=True)
class StockAlert:
    product_id: str
    product_name: str
    stock: int
    threshold: int
    level: StockLevel


def log_stock_alert(alert: StockAlert) -> None:
    logger.warning(
        "stock_alert",
        level=alert.level.value,
        product_id=alert.product_id,
        product_name=alert.product_name,
        stock=alert.stock,
        threshold=alert.threshold,
    )


class InventoryWatcher(Observer):

    def __init__(
        self,
        products: ProductRepository,
        ledger: InventoryLedger,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        alert_sink: Callable[[StockAlert], None] = log_stock_alert,
    ) -> None:
        self._products = products
        self._ledger = ledger
        self._threshold = low_stock_threshold
        self._alert_sink = alert_sink

    def handlers(self) -> Mapping[OrderEvent, EventHandler]:
        return {
            OrderEvent.ORDER_CREATED: self._check_stock_levels,
            OrderEvent.ORDER_CANCELLED: self._restore_stock,
        }

    def _check_stock_levels(self, order: Order) -> None:
        for line in order.lines:
            product = self._products.get_by_id(line.product_id)
            if product is None:
                logger.warning(
                    "stock_check_unknown_product",
                    order_id=order.id,
                    product_id=line.product_id,
                )
                continue

            if product.stock == 0:
                level = StockLevel.OUT
            elif product.stock < self._threshold:
                level = StockLevel.LOW
            else:
                continue
            self._alert_sink(
                StockAlert(
                    product_id=product.id,
                    product_name=product.name,
                    stock=product.stock,
                    threshold=self._threshold,
                    level=level,
                )
            )

    def _restore_stock(self, order: Order) -> None:
        for line in order.lines:
            result = self._ledger.release(line.product_id, line.quantity.value)
            if result is ReservationResult.NOT_FOUND:
                logger.warning(
                    "stock_restore_unknown_product",
                    order_id=order.id,
                    product_id=line.product_id,
                    quantity=line.quantity.value,
                )
                continue
            logger.info(
                "stock_restored",
                order_id=order.id,
                product_id=line.product_id,
                quantity=line.quantity.value,
            )
