"""Runtime settings read from ``CHECKOUT_``-prefixed environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.value_objects import Money
from checkout.domain.service.pricing_policy import PricingPolicy

LOG_FORMATS = ("console", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    free_shipping_threshold: Decimal = Decimal("100.00")
    flat_shipping_fee: Decimal = Decimal("10.00")
    tax_rate: Decimal = Decimal("0.10")
    low_stock_threshold: int = 10
    event_workers: int = 4
    log_level: str = "WARNING"
    log_format: str = "console"

    def __post_init__(self) -> None:
        if self.low_stock_threshold < 0:
            raise ValidationError("Low stock threshold cannot be negative")
        if self.event_workers < 1:
            raise ValidationError("At least one event worker is required")
        if self.log_level not in LOG_LEVELS:
            raise ValidationError(f"Unknown log level {self.log_level!r}")
        if self.log_format not in LOG_FORMATS:
            raise ValidationError(f"Unknown log format {self.log_format!r}")
        self.pricing_policy()

    @property
    def store_path(self) -> Path:
        return self.data_dir / "checkout.json"

    def pricing_policy(self) -> PricingPolicy:
        return PricingPolicy(
            free_shipping_threshold=Money.of(self.free_shipping_threshold),
            flat_shipping_fee=Money.of(self.flat_shipping_fee),
            tax_rate=self.tax_rate,
        )

    @classmethod
    def from_env(
        cls,
        prefix: str = "CHECKOUT_",
        environ: dict[str, str] | None = None,
        **overrides: Any,
    ) -> Settings:
        """Build settings from the environment; keyword overrides win."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for f in fields(cls):
            raw = env.get(prefix + f.name.upper())
            if raw is None or not raw.strip():
                continue
            values[f.name] = _convert(f.name, raw.strip(), f.default)
        settings = cls(**values)
        overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(settings, **overrides) if overrides else settings


def _convert(name: str, raw: str, default: Any) -> Any:
    try:
        if isinstance(default, Path):
            return Path(raw)
        if isinstance(default, Decimal):
            return Decimal(raw)
        if isinstance(default, int):
            return int(raw)
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid value for {name}: {raw!r}") from None
    if name == "log_level":
        return raw.upper()
    return raw.lower()
