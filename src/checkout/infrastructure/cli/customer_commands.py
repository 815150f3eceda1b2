"""CLI commands for the customer directory."""

from __future__ import annotations

import click

from checkout.domain.exceptions import DomainException
from checkout.infrastructure.bootstrap import Container


@click.command("add")
@click.option("--name", required=True, help="Customer name.")
@click.option("--email", default=None, help="Email address for order notifications.")
@click.option("--admin", "is_admin", is_flag=True, default=False, help="Grant admin rights.")
@click.pass_obj
def customer_add(container: Container, name: str, email: str | None, is_admin: bool) -> None:
    """Register a customer."""
    try:
        customer = container.add_customer.handle(name=name, email=email, is_admin=is_admin)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    role = " (admin)" if customer.is_admin else ""
    click.echo(f"Customer #{customer.id} '{customer.name}' added{role}")
