"""AnalyticsRecorder — per-day, per-category sales and cancellation counters."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
from decimal import Decimal

import structlog

from checkout.application.events.observer import EventHandler, Observer
from checkout.domain.model.events import OrderEvent
from checkout.domain.model.order import Order
from checkout.domain.repository.metrics_repository import MetricsRepository
from checkout.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)

UNCATEGORIZED = "uncategorized"


class AnalyticsRecorder(Observer):

    def __init__(self, metrics: MetricsRepository, products: ProductRepository) -> None:
        self._metrics = metrics
        self._products = products

    def handlers(self) -> Mapping[OrderEvent, EventHandler]:
        return {
            OrderEvent.ORDER_CREATED: self._on_created,
            OrderEvent.ORDER_CANCELLED: self._on_cancelled,
        }

    def _on_created(self, order: Order) -> None:
        day = order.created_at.date()
        for category, (units, revenue) in self._by_category(order).items():
            self._metrics.increment(day, category, orders=1, units=units, revenue=revenue)
        logger.info(
            "sales_recorded",
            order_id=order.id,
            day=day.isoformat(),
            total=str(order.total_price.amount),
        )

    def _on_cancelled(self, order: Order) -> None:
        day = (order.cancelled_at or order.created_at).date()
        for category, (units, revenue) in self._by_category(order).items():
            self._metrics.increment(
                day,
                category,
                cancellations=1,
                cancelled_units=units,
                cancelled_revenue=revenue,
            )
        logger.info("cancellation_recorded", order_id=order.id, day=day.isoformat())

    def _by_category(self, order: Order) -> dict[str, tuple[int, Decimal]]:
        units: dict[str, int] = defaultdict(int)
        revenue: dict[str, Decimal] = defaultdict(Decimal)
        for line in order.lines:
            product = self._products.get_by_id(line.product_id)
            category = product.category if product is not None else UNCATEGORIZED
            units[category] += line.quantity.value
            revenue[category] += line.line_total.amount
        return {category: (units[category], revenue[category]) for category in units}
