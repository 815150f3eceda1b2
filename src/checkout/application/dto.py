"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from checkout.domain.model.order import Order
from checkout.domain.model.value_objects import ShippingAddress

_TIME_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class ShippingAddressSpec:
    """Input: the address as typed by the customer, not yet validated."""

    street: str
    city: str
    state: str
    zip_code: str
    country: str

    def to_value(self) -> ShippingAddress:
        return ShippingAddress(
            street=self.street,
            city=self.city,
            state=self.state,
            zip_code=self.zip_code,
            country=self.country,
        )


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single order line as displayed to the user."""

    product_id: str
    name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    customer_id: str
    status: str
    payment_method: str
    is_paid: bool
    items: list[OrderLineDTO]
    items_price: str
    shipping_price: str
    tax_price: str
    total_price: str
    shipping_address: dict[str, str]
    created_at: str
    paid_at: str | None = None
    payment_id: str | None = None
    cancelled_at: str | None = None
    cancellation_reason: str | None = None


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    name: str
    quantity: int
    unit_price: str
    line_total: str
    in_stock: int


@dataclass(frozen=True)
class CartDTO:
    customer_id: str
    lines: list[CartLineDTO]
    subtotal: str


# --- Mapping ------------------------------------------------------------------


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_id=order.customer_id,
        status=order.status.value,
        payment_method=order.payment_method.value,
        is_paid=order.is_paid,
        items=[
            OrderLineDTO(
                product_id=line.product_id,
                name=line.name,
                quantity=line.quantity.value,
                unit_price=str(line.unit_price),
                line_total=str(line.line_total),
            )
            for line in order.lines
        ],
        items_price=str(order.items_price),
        shipping_price=str(order.shipping_price),
        tax_price=str(order.tax_price),
        total_price=str(order.total_price),
        shipping_address=order.shipping_address.as_dict(),
        created_at=order.created_at.strftime(_TIME_FORMAT),
        paid_at=order.paid_at.strftime(_TIME_FORMAT) if order.paid_at else None,
        payment_id=order.payment_result.id if order.payment_result else None,
        cancelled_at=order.cancelled_at.strftime(_TIME_FORMAT) if order.cancelled_at else None,
        cancellation_reason=order.cancellation_reason,
    )


def order_to_email_data(order: Order) -> dict:
    """JSON-friendly view of an order for email templates."""
    return {
        "order_id": order.id,
        "status": order.status.value,
        "payment_method": order.payment_method.value,
        "is_paid": order.is_paid,
        "items": [
            {
                "name": line.name,
                "quantity": line.quantity.value,
                "unit_price": f"{line.unit_price.amount:.2f}",
                "line_total": f"{line.line_total.amount:.2f}",
            }
            for line in order.lines
        ],
        "items_price": f"{order.items_price.amount:.2f}",
        "shipping_price": f"{order.shipping_price.amount:.2f}",
        "tax_price": f"{order.tax_price.amount:.2f}",
        "total_price": f"{order.total_price.amount:.2f}",
        "shipping_address": order.shipping_address.as_dict(),
        "cancellation_reason": order.cancellation_reason,
        "created_at": order.created_at.isoformat(),
    }
