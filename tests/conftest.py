"""Shared fixtures: an in-memory checkout wired the same way as the CLI."""

from __future__ import annotations

import pytest

from checkout.application.dto import ShippingAddressSpec
from checkout.infrastructure.bootstrap import Container, build_container
from checkout.infrastructure.config import Settings
from tests.fakes import FakeEmailSender, FixedClock

ADDRESS = ShippingAddressSpec(
    street="1 Main St",
    city="Springfield",
    state="IL",
    zip_code="62701",
    country="USA",
)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture
def container(clock, email_sender):
    c = build_container(Settings(), email_sender=email_sender, clock=clock, in_memory=True)
    yield c
    c.close(timeout=5)


@pytest.fixture
def shop(container: Container) -> Container:
    """Container with a small catalog and three customers."""
    container.add_product.handle("Widget", "15.00", stock=10, category="tools")
    container.add_product.handle("Gadget", "25.00", stock=5, category="electronics")
    container.add_product.handle("Gizmo", "50.00", stock=1, category="electronics")
    container.add_customer.handle("Alice", "alice@example.com")
    container.add_customer.handle("Bob", "bob@example.com")
    container.add_customer.handle("Root", "root@example.com", is_admin=True)
    return container


@pytest.fixture
def address() -> ShippingAddressSpec:
    return ADDRESS
