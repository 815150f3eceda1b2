"""Domain service: Pricing Policy.

A pure function of the order lines. Flat shipping below a free-shipping
threshold, a flat tax rate over the items price. Every derived field is
rounded to cents as it is computed, so the total is the sum of the
rounded parts.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.order import OrderLine
from checkout.domain.model.value_objects import Money, PriceBreakdown

DEFAULT_FREE_SHIPPING_THRESHOLD = Money(Decimal("100.00"))
DEFAULT_FLAT_SHIPPING_FEE = Money(Decimal("10.00"))
DEFAULT_TAX_RATE = Decimal("0.10")


@dataclass(frozen=True)
class PricingPolicy:

    free_shipping_threshold: Money = DEFAULT_FREE_SHIPPING_THRESHOLD
    flat_shipping_fee: Money = DEFAULT_FLAT_SHIPPING_FEE
    tax_rate: Decimal = DEFAULT_TAX_RATE

    def __post_init__(self) -> None:
        if not Decimal("0") <= self.tax_rate < Decimal("1"):
            raise ValidationError(f"Tax rate must be in [0, 1), got {self.tax_rate}")

    def price(self, lines: Iterable[OrderLine]) -> PriceBreakdown:
        items_price = Money.zero()
        for line in lines:
            items_price = items_price + line.line_total
        items_price = items_price.rounded()

        if items_price >= self.free_shipping_threshold:
            shipping_price = Money.zero()
        else:
            shipping_price = self.flat_shipping_fee.rounded()

        tax_price = (items_price * self.tax_rate).rounded()
        total_price = (items_price + shipping_price + tax_price).rounded()

        return PriceBreakdown(
            items_price=items_price,
            shipping_price=shipping_price,
            tax_price=tax_price,
            total_price=total_price,
        )
