"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from checkout.application.dto import OrderDTO, ShippingAddressSpec
from checkout.domain.exceptions import DomainException
from checkout.domain.model.value_objects import PaymentMethod, PaymentResult
from checkout.infrastructure.bootstrap import Container

_PAYMENT_CHOICES = [m.value for m in PaymentMethod]


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    paid = f"paid {dto.paid_at}" if dto.is_paid else "unpaid"
    click.echo(f"Order {dto.id}  (status={dto.status}, {paid})")
    click.echo(f"Customer: #{dto.customer_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Payment:  {dto.payment_method}" + (f" ({dto.payment_id})" if dto.payment_id else ""))
    address = dto.shipping_address
    click.echo(
        f"Ship to:  {address['street']}, {address['city']}, {address['state']} "
        f"{address['zip_code']}, {address['country']}"
    )
    if dto.cancelled_at:
        reason = f": {dto.cancellation_reason}" if dto.cancellation_reason else ""
        click.echo(f"Cancelled {dto.cancelled_at}{reason}")
    click.echo()

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Items':<27} {dto.items_price:>20}")
    click.echo(f"  {'Shipping':<27} {dto.shipping_price:>20}")
    click.echo(f"  {'Tax':<27} {dto.tax_price:>20}")
    click.echo(f"  {'Order Total':<27} {dto.total_price:>20}")


def _display_order_rows(orders: list[OrderDTO]) -> None:
    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<26} {'Customer':<10} {'Status':<10} {'Paid':<5} {'Total':>12}  Created")
    click.echo("-" * 88)
    for dto in orders:
        click.echo(
            f"{dto.id:<26} {dto.customer_id:<10} {dto.status:<10} "
            f"{'yes' if dto.is_paid else 'no':<5} {dto.total_price:>12}  {dto.created_at}"
        )


@click.command("create")
@click.option("--customer", required=True, help="Customer ID whose cart is checked out.")
@click.option("--street", required=True, help="Street address.")
@click.option("--city", required=True, help="City.")
@click.option("--state", required=True, help="State or region.")
@click.option("--zip", "zip_code", required=True, help="Zip / postal code.")
@click.option("--country", required=True, help="Country.")
@click.option(
    "--payment",
    "payment_method",
    required=True,
    type=click.Choice(_PAYMENT_CHOICES, case_sensitive=False),
    help="Payment method.",
)
@click.pass_obj
def order_create(
    container: Container,
    customer: str,
    street: str,
    city: str,
    state: str,
    zip_code: str,
    country: str,
    payment_method: str,
) -> None:
    """Check out the customer's cart into a new order."""
    address = ShippingAddressSpec(
        street=street, city=city, state=state, zip_code=zip_code, country=country
    )

    try:
        dto = container.create_order.handle(
            customer_id=customer, shipping_address=address, payment_method=payment_method
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} created")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.option("--as", "requester", default=None, help="Customer ID viewing the order.")
@click.pass_obj
def order_show(container: Container, order_id: str, requester: str | None) -> None:
    """Show details of an existing order."""
    try:
        dto = container.show_order.handle(order_id, requester_id=requester)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--customer", default=None, help="Only this customer's orders.")
@click.option("--status", default=None, help="Only orders with this status.")
@click.pass_obj
def order_list(container: Container, customer: str | None, status: str | None) -> None:
    """List orders, newest first."""
    try:
        if customer is not None:
            orders = container.list_customer_orders.handle(customer)
            if status:
                orders = [o for o in orders if o.status == status.strip().lower()]
        else:
            orders = container.list_all_orders.handle(status=status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order_rows(orders)


@click.command("pay")
@click.option("--id", "order_id", required=True, help="Order ID that was paid.")
@click.option("--payment-id", required=True, help="Gateway payment ID.")
@click.option("--status", "payment_status", default="COMPLETED", show_default=True, help="Gateway status.")
@click.option("--receipt-url", default=None, help="Gateway receipt URL.")
@click.pass_obj
def order_pay(
    container: Container,
    order_id: str,
    payment_id: str,
    payment_status: str,
    receipt_url: str | None,
) -> None:
    """Record a gateway settlement for an order."""
    try:
        order = container.show_order.handle(order_id)
        result = PaymentResult(
            id=payment_id,
            status=payment_status,
            payment_method=order.payment_method,
            receipt_url=receipt_url,
        )
        dto = container.update_order_payment.handle(order_id, result)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} paid at {dto.paid_at} (payment {dto.payment_id}).")


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@click.option("--reason", default="", help="Why the order is cancelled.")
@click.pass_obj
def order_cancel(container: Container, order_id: str, reason: str) -> None:
    """Cancel an order (reserved stock is returned)."""
    try:
        dto = container.cancel_order.handle(order_id, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} cancelled.")


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--set", "new_status", required=True, help="New status (e.g. shipped).")
@click.pass_obj
def order_status(container: Container, order_id: str, new_status: str) -> None:
    """Move an order along its lifecycle (admin)."""
    try:
        dto = container.update_order_status.handle(order_id, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} is now {dto.status}.")
