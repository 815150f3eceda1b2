"""Application services: sales reporting (queries).

``SalesAnalyticsHandler`` computes figures on demand from the orders
themselves; ``ShowMetricsHandler`` reads the counters kept up to date
by the analytics observer.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.order import Order, OrderStatus
from checkout.domain.model.value_objects import CENT
from checkout.domain.repository.metrics_repository import MetricsRepository
from checkout.domain.repository.order_repository import OrderRepository
from checkout.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class SalesSummaryDTO:
    total_sales: Decimal
    total_orders: int
    average_order_value: Decimal


@dataclass(frozen=True)
class CategorySalesDTO:
    category: str
    total_sales: Decimal
    total_items: int


@dataclass(frozen=True)
class MetricsLineDTO:
    day: str
    category: str
    orders: int
    units: int
    revenue: str
    cancellations: int
    cancelled_units: int
    cancelled_revenue: str


class SalesAnalyticsHandler:

    def __init__(self, order_repo: OrderRepository, product_repo: ProductRepository) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def summary(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> SalesSummaryDTO:
        """Totals over non-cancelled orders created within [start, end]."""
        orders = self._sold_between(start, end)
        total = sum((o.total_price.amount for o in orders), Decimal("0.00"))
        count = len(orders)
        average = (total / count).quantize(CENT) if count else Decimal("0.00")
        return SalesSummaryDTO(
            total_sales=total.quantize(CENT),
            total_orders=count,
            average_order_value=average,
        )

    def by_category(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> list[CategorySalesDTO]:
        """Line revenue and units per product category, best sellers first.

        Lines whose product has since left the catalog are not counted.
        """
        sales: dict[str, Decimal] = defaultdict(Decimal)
        items: dict[str, int] = defaultdict(int)
        for order in self._sold_between(start, end):
            for line in order.lines:
                product = self._product_repo.get_by_id(line.product_id)
                if product is None:
                    continue
                sales[product.category] += line.line_total.amount
                items[product.category] += line.quantity.value

        rows = [
            CategorySalesDTO(
                category=category,
                total_sales=sales[category].quantize(CENT),
                total_items=items[category],
            )
            for category in sales
        ]
        return sorted(rows, key=lambda r: (-r.total_sales, r.category))

    def _sold_between(self, start: datetime | None, end: datetime | None) -> list[Order]:
        start, end = _as_utc(start), _as_utc(end)
        if start is not None and end is not None and start > end:
            raise ValidationError("Start of the reporting period is after its end")
        return [
            o
            for o in self._order_repo.list_created_between(start, end)
            if o.status != OrderStatus.CANCELLED
        ]


class ShowMetricsHandler:

    def __init__(self, metrics_repo: MetricsRepository) -> None:
        self._metrics_repo = metrics_repo

    def handle(self) -> list[MetricsLineDTO]:
        return [
            MetricsLineDTO(
                day=m.day.isoformat(),
                category=m.category,
                orders=m.orders,
                units=m.units,
                revenue=f"{m.revenue:.2f}",
                cancellations=m.cancellations,
                cancelled_units=m.cancelled_units,
                cancelled_revenue=f"{m.cancelled_revenue:.2f}",
            )
            for m in self._metrics_repo.list_all()
        ]


def _as_utc(value: datetime | None) -> datetime | None:
    # Stored timestamps are timezone-aware; naive input is taken as UTC.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)
