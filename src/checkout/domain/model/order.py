"""Order aggregate — the core of the domain.

An Order is immutable once created, except for the append-only
payment, status and cancellation transitions defined here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from checkout.domain.exceptions import (
    AlreadyCancelledError,
    AlreadyPaidError,
    InvalidTransitionError,
    ValidationError,
)
from checkout.domain.model.value_objects import (
    Money,
    PaymentMethod,
    PaymentResult,
    PriceBreakdown,
    Quantity,
    ShippingAddress,
)

ORDER_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def is_valid_order_id(order_id: object) -> bool:
    return isinstance(order_id, str) and ORDER_ID_PATTERN.match(order_id) is not None


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"


# Status changes reachable through update_status(). PAID is only entered
# through mark_paid() and CANCELLED only through cancel().
_STATUS_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.PAID: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.SHIPPED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class OrderLine:
    """Captures the product's name and price at order-creation time."""

    product_id: str
    name: str
    unit_price: Money  # locked at order-creation time
    quantity: Quantity

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.create()`` factory for new orders. The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders without re-validating.
    """

    id: str | None
    customer_id: str
    lines: list[OrderLine]
    shipping_address: ShippingAddress
    payment_method: PaymentMethod
    items_price: Money
    shipping_price: Money
    tax_price: Money
    total_price: Money
    status: OrderStatus = OrderStatus.PENDING
    is_paid: bool = False
    paid_at: datetime | None = None
    payment_result: PaymentResult | None = None
    cancellation_reason: str | None = None
    cancelled_at: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_id: str,
        lines: list[OrderLine],
        shipping_address: ShippingAddress,
        payment_method: PaymentMethod,
        pricing: PriceBreakdown,
        created_at: datetime | None = None,
    ) -> Order:
        """Create a new pending, unpaid order."""
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer is required")
        if not lines:
            raise ValidationError("Order must contain at least one item")

        return Order(
            id=None,
            customer_id=customer_id.strip(),
            lines=list(lines),
            shipping_address=shipping_address,
            payment_method=payment_method,
            items_price=pricing.items_price,
            shipping_price=pricing.shipping_price,
            tax_price=pricing.tax_price,
            total_price=pricing.total_price,
            created_at=created_at or utcnow(),
        )

    # --- State transitions ----------------------------------------------------

    def mark_paid(self, payment_result: PaymentResult, now: datetime) -> bool:
        """Record a settled payment.

        Returns False when the identical settlement was already recorded,
        leaving every field untouched.
        """
        if self.status == OrderStatus.CANCELLED:
            raise InvalidTransitionError("Cannot record payment for a cancelled order")
        if self.is_paid:
            if self.payment_result == payment_result:
                return False
            raise AlreadyPaidError(
                f"Order {self.id} is already paid "
                f"(payment {self.payment_result.id if self.payment_result else '?'})"
            )

        self.is_paid = True
        self.paid_at = now
        self.payment_result = payment_result
        if self.status == OrderStatus.PENDING:
            self.status = OrderStatus.PAID
        self.updated_at = now
        return True

    def update_status(self, new_status: OrderStatus, now: datetime) -> None:
        if new_status == OrderStatus.CANCELLED:
            raise InvalidTransitionError("Use order cancellation to cancel an order")
        if self.status == OrderStatus.CANCELLED:
            raise InvalidTransitionError("Cancelled orders cannot change status")
        if new_status not in _STATUS_TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"Cannot move order from {self.status.value} to {new_status.value}"
            )
        self.status = new_status
        self.updated_at = now

    def cancel(self, reason: str, now: datetime) -> None:
        """Transition PENDING|PAID -> CANCELLED (terminal).

        Stock is restored by whoever reacts to the cancellation event,
        not here.
        """
        if self.status == OrderStatus.CANCELLED:
            raise AlreadyCancelledError(f"Order {self.id} is already cancelled")
        if self.status == OrderStatus.SHIPPED:
            raise InvalidTransitionError("Cannot cancel an order that has shipped")
        self.status = OrderStatus.CANCELLED
        self.cancellation_reason = (reason or "").strip()
        self.cancelled_at = now
        self.updated_at = now

    # --- Queries --------------------------------------------------------------

    def is_owned_by(self, customer_id: str) -> bool:
        return self.customer_id == customer_id

    @property
    def item_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)
