"""CLI commands for the customer's cart."""

from __future__ import annotations

import click

from checkout.application.dto import CartDTO
from checkout.domain.exceptions import DomainException
from checkout.infrastructure.bootstrap import Container

_customer_option = click.option("--customer", required=True, help="Customer ID.")


def _display_cart(dto: CartDTO) -> None:
    if not dto.lines:
        click.echo(f"Cart for customer #{dto.customer_id} is empty.")
        return

    click.echo(f"Cart for customer #{dto.customer_id}")
    click.echo()
    click.echo(f"  {'ID':<6} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*54}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_id:<6} {line.name:<20} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*54}")
    click.echo(f"  {'Subtotal':<33} {dto.subtotal:>20}")


@click.command("add")
@_customer_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Units to add.")
@click.pass_obj
def cart_add(container: Container, customer: str, product_id: str, quantity: int) -> None:
    """Add a product to the cart."""
    try:
        dto = container.add_to_cart.handle(customer, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("update")
@_customer_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
@click.pass_obj
def cart_update(container: Container, customer: str, product_id: str, quantity: int) -> None:
    """Change the quantity of a product in the cart."""
    try:
        dto = container.update_cart_item.handle(customer, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("remove")
@_customer_option
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.pass_obj
def cart_remove(container: Container, customer: str, product_id: str) -> None:
    """Remove a product from the cart."""
    try:
        dto = container.remove_cart_item.handle(customer, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("show")
@_customer_option
@click.pass_obj
def cart_show(container: Container, customer: str) -> None:
    """Show the cart with current prices."""
    _display_cart(container.show_cart.handle(customer))


@click.command("clear")
@_customer_option
@click.pass_obj
def cart_clear(container: Container, customer: str) -> None:
    """Empty the cart."""
    container.clear_cart.handle(customer)
    click.echo(f"Cart for customer #{customer} cleared.")
