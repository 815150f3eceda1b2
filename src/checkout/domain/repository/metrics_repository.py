"""Abstract store for sales/cancellation counters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal

from checkout.domain.model.metrics import DailyCategoryMetrics


class MetricsRepository(ABC):

    @abstractmethod
    def increment(self, day: date, category: str, **amounts: int | Decimal) -> None:
        """Atomically add ``amounts`` to the counters of (day, category)."""

    @abstractmethod
    def list_all(self) -> list[DailyCategoryMetrics]:
        """Return all counters ordered by day, then category."""
