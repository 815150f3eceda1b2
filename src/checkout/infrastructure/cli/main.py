from pathlib import Path

import click

from checkout.domain.exceptions import DomainException
from checkout.infrastructure.bootstrap import build_container
from checkout.infrastructure.cli.analytics_commands import (
    analytics_categories,
    analytics_metrics,
    analytics_sales,
)
from checkout.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from checkout.infrastructure.cli.customer_commands import customer_add
from checkout.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_list,
    order_pay,
    order_show,
    order_status,
)
from checkout.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_stock,
    product_update,
)
from checkout.infrastructure.config import Settings
from checkout.infrastructure.logging import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=str),
    default=None,
    help="Directory holding checkout.json (overrides CHECKOUT_DATA_DIR).",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: str | None) -> None:
    """Checkout — storefront order checkout"""
    if ctx.obj is not None:
        # A container injected by the caller (tests) is used as-is.
        return
    try:
        settings = Settings.from_env(data_dir=Path(data_dir) if data_dir else None)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    configure_logging(settings.log_level, settings.log_format)

    container = build_container(settings)
    ctx.obj = container
    ctx.call_on_close(container.close)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def cart() -> None:
    """Manage a customer's cart."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def analytics() -> None:
    """Sales reporting."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_stock)
product.add_command(product_update)
customer.add_command(customer_add)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_pay)
order.add_command(order_show)
order.add_command(order_status)
analytics.add_command(analytics_categories)
analytics.add_command(analytics_metrics)
analytics.add_command(analytics_sales)
