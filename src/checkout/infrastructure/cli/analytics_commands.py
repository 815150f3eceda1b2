"""CLI commands for sales reporting."""

from __future__ import annotations

from datetime import datetime, timedelta

import click

from checkout.domain.exceptions import DomainException
from checkout.infrastructure.bootstrap import Container

_DATE = click.DateTime(formats=["%Y-%m-%d"])
_start_option = click.option("--start", type=_DATE, default=None, help="First day (YYYY-MM-DD).")
_end_option = click.option("--end", type=_DATE, default=None, help="Last day, inclusive (YYYY-MM-DD).")


def _end_of_day(day: datetime | None) -> datetime | None:
    if day is None:
        return None
    return day + timedelta(days=1) - timedelta(microseconds=1)


@click.command("sales")
@_start_option
@_end_option
@click.pass_obj
def analytics_sales(container: Container, start: datetime | None, end: datetime | None) -> None:
    """Total sales, order count and average order value."""
    try:
        summary = container.sales_analytics.summary(start, _end_of_day(end))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Total sales:         ${summary.total_sales:.2f}")
    click.echo(f"Orders:              {summary.total_orders}")
    click.echo(f"Average order value: ${summary.average_order_value:.2f}")


@click.command("categories")
@_start_option
@_end_option
@click.pass_obj
def analytics_categories(container: Container, start: datetime | None, end: datetime | None) -> None:
    """Sales per product category, best sellers first."""
    try:
        rows = container.sales_analytics.by_category(start, _end_of_day(end))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not rows:
        click.echo("No sales in this period.")
        return

    click.echo(f"{'Category':<20} {'Items':>7} {'Sales':>12}")
    click.echo("-" * 41)
    for row in rows:
        click.echo(f"{row.category:<20} {row.total_items:>7} {'$' + format(row.total_sales, '.2f'):>12}")


@click.command("metrics")
@click.pass_obj
def analytics_metrics(container: Container) -> None:
    """Daily counters per category, as recorded when orders are placed and cancelled."""
    lines = container.show_metrics.handle()

    if not lines:
        click.echo("No metrics recorded.")
        return

    click.echo(
        f"{'Day':<12} {'Category':<14} {'Orders':>7} {'Units':>6} {'Revenue':>10} "
        f"{'Cancel':>7} {'C.Units':>8} {'C.Revenue':>10}"
    )
    click.echo("-" * 80)
    for m in lines:
        click.echo(
            f"{m.day:<12} {m.category:<14} {m.orders:>7} {m.units:>6} {m.revenue:>10} "
            f"{m.cancellations:>7} {m.cancelled_units:>8} {m.cancelled_revenue:>10}"
        )
