"""JSON-store-backed implementation of MetricsRepository."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from checkout.domain.model.metrics import COUNTER_FIELDS, DailyCategoryMetrics
from checkout.domain.repository.metrics_repository import MetricsRepository
from checkout.infrastructure.persistence.json_store import JsonStore

COLLECTION = "metrics"
_MONEY_FIELDS = {"revenue", "cancelled_revenue"}


class JsonMetricsRepository(MetricsRepository):

    def __init__(self, store: JsonStore) -> None:
        self._store = store

    def increment(self, day: date, category: str, **amounts: int | Decimal) -> None:
        unknown = set(amounts) - set(COUNTER_FIELDS)
        if unknown:
            raise KeyError(f"Unknown metric counters: {sorted(unknown)}")

        def apply(current: dict | None) -> dict:
            record = current or {"day": day.isoformat(), "category": category}
            for name, amount in amounts.items():
                if name in _MONEY_FIELDS:
                    record[name] = str(Decimal(record.get(name, "0.00")) + Decimal(amount))
                else:
                    record[name] = record.get(name, 0) + amount
            return record

        self._store.modify(COLLECTION, f"{day.isoformat()}|{category}", apply)

    def list_all(self) -> list[DailyCategoryMetrics]:
        metrics = [self._to_domain(raw) for raw in self._store.values(COLLECTION)]
        return sorted(metrics, key=lambda m: (m.day, m.category))

    @staticmethod
    def _to_domain(raw: dict) -> DailyCategoryMetrics:
        return DailyCategoryMetrics(
            day=date.fromisoformat(raw["day"]),
            category=raw["category"],
            orders=raw.get("orders", 0),
            units=raw.get("units", 0),
            revenue=Decimal(raw.get("revenue", "0.00")),
            cancellations=raw.get("cancellations", 0),
            cancelled_units=raw.get("cancelled_units", 0),
            cancelled_revenue=Decimal(raw.get("cancelled_revenue", "0.00")),
        )
