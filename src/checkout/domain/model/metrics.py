"""Sales counters kept per day and product category."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

COUNTER_FIELDS = (
    "orders",
    "units",
    "revenue",
    "cancellations",
    "cancelled_units",
    "cancelled_revenue",
)


@dataclass
class DailyCategoryMetrics:
    day: date
    category: str
    orders: int = 0
    units: int = 0
    revenue: Decimal = Decimal("0.00")
    cancellations: int = 0
    cancelled_units: int = 0
    cancelled_revenue: Decimal = Decimal("0.00")
