"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from checkout.domain.exceptions import DomainException
from checkout.domain.model.product import DEFAULT_CATEGORY
from checkout.infrastructure.bootstrap import Container


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.option("--category", default=DEFAULT_CATEGORY, show_default=True, help="Product category.")
@click.pass_obj
def product_add(container: Container, name: str, price: str, stock: int, category: str) -> None:
    """Add a new product to the catalog."""
    try:
        product = container.add_product.handle(
            name=name, price=price, stock=stock, category=category
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.stock} in stock, category={product.category})"
    )


@click.command("list")
@click.pass_obj
def product_list(container: Container) -> None:
    """List all products with their stock levels."""
    lines = container.show_inventory.handle()

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Category':<14} {'Price':>10} {'Stock':>7}  Flags")
    click.echo("-" * 68)
    for line in lines:
        flags = []
        if line.out_of_stock:
            flags.append("OUT")
        elif line.low_stock:
            flags.append("LOW")
        if not line.is_active:
            flags.append("inactive")
        click.echo(
            f"{line.product_id:<6} {line.product_name:<20} {line.category:<14} "
            f"{line.price:>10} {line.stock:>7}  {' '.join(flags)}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--category", default=None, help="New category.")
@click.option("--active/--inactive", "is_active", default=None, help="Offer or withdraw the product.")
@click.pass_obj
def product_update(
    container: Container,
    product_id: str,
    price: str | None,
    category: str | None,
    is_active: bool | None,
) -> None:
    """Update a product's catalog fields."""
    if price is None and category is None and is_active is None:
        raise click.UsageError("Nothing to update: pass --price, --category or --active/--inactive")

    try:
        product = container.update_product.handle(
            product_id=product_id, new_price=price, category=category, is_active=is_active
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} updated: {product.price}, category={product.category}")


@click.command("stock")
@click.option("--product", required=True, help="Product name.")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
@click.pass_obj
def product_stock(container: Container, product: str, quantity: int) -> None:
    """Set the stock level for a product."""
    try:
        container.set_stock.handle(product_name=product, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{product}' set to {quantity}")
