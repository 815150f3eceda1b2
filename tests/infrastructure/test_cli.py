"""End-to-end tests of the click CLI against a temporary data directory."""

import logging
import re

import pytest
import structlog
from click.testing import CliRunner

from checkout.infrastructure.cli.main import cli

ADDRESS_ARGS = [
    "--street", "1 Main St",
    "--city", "Springfield",
    "--state", "IL",
    "--zip", "62701",
    "--country", "USA",
]


@pytest.fixture(autouse=True)
def _reset_logging(monkeypatch):
    monkeypatch.setenv("CHECKOUT_LOG_LEVEL", "ERROR")
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers = []


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def invoke(*args: str):
        return runner.invoke(cli, ["--data-dir", str(tmp_path), *args])

    return invoke


@pytest.fixture
def stocked(run):
    assert run("product", "add", "--name", "Widget", "--price", "15.00", "--stock", "10",
               "--category", "tools").exit_code == 0
    assert run("customer", "add", "--name", "Alice", "--email", "alice@example.com").exit_code == 0
    return run


def _create_order(run, quantity: int = 2, payment: str = "PayPal") -> str:
    assert run("cart", "add", "--customer", "1", "--product", "1", "--quantity", str(quantity)).exit_code == 0
    result = run("order", "create", "--customer", "1", "--payment", payment, *ADDRESS_ARGS)
    assert result.exit_code == 0, result.output
    return re.search(r"Order ([0-9a-f]{24}) created", result.output).group(1)


class TestCatalogCommands:

    def test_add_and_list(self, stocked):
        result = stocked("product", "list")
        assert result.exit_code == 0
        assert "Widget" in result.output
        assert "$15.00" in result.output

    def test_set_stock_and_flags(self, stocked):
        assert stocked("product", "stock", "--product", "Widget", "--quantity", "0").exit_code == 0
        assert "OUT" in stocked("product", "list").output

    def test_update_requires_a_change(self, stocked):
        result = stocked("product", "update", "--id", "1")
        assert result.exit_code != 0
        assert "Nothing to update" in result.output

    def test_domain_error_becomes_click_error(self, stocked):
        result = stocked("product", "add", "--name", "widget", "--price", "1.00")
        assert result.exit_code == 1
        assert "already exists" in result.output


class TestCartCommands:

    def test_add_show_and_clear(self, stocked):
        added = stocked("cart", "add", "--customer", "1", "--product", "1", "--quantity", "2")
        assert "$30.00" in added.output
        assert "Widget" in stocked("cart", "show", "--customer", "1").output
        stocked("cart", "clear", "--customer", "1")
        assert "is empty" in stocked("cart", "show", "--customer", "1").output

    def test_more_than_stock_rejected(self, stocked):
        result = stocked("cart", "add", "--customer", "1", "--product", "1", "--quantity", "11")
        assert result.exit_code == 1
        assert "Insufficient stock for Widget" in result.output


class TestOrderCommands:

    def test_full_lifecycle(self, stocked):
        order_id = _create_order(stocked)

        shown = stocked("order", "show", "--id", order_id)
        assert "status=pending" in shown.output
        assert "$43.00" in shown.output

        paid = stocked("order", "pay", "--id", order_id, "--payment-id", "PAY-1")
        assert paid.exit_code == 0
        assert "PAY-1" in paid.output

        shipped = stocked("order", "status", "--id", order_id, "--set", "shipped")
        assert "is now shipped" in shipped.output

        listed = stocked("order", "list", "--customer", "1")
        assert order_id in listed.output

    def test_cancel_returns_stock(self, stocked):
        order_id = _create_order(stocked, quantity=3)
        assert "   7  " in stocked("product", "list").output

        result = stocked("order", "cancel", "--id", order_id, "--reason", "changed my mind")
        assert result.exit_code == 0

        assert "  10  " in stocked("product", "list").output
        again = stocked("order", "cancel", "--id", order_id)
        assert again.exit_code == 1
        assert "already cancelled" in again.output

    def test_missing_city_rejected(self, stocked):
        stocked("cart", "add", "--customer", "1", "--product", "1")
        args = list(ADDRESS_ARGS)
        args[args.index("--city") + 1] = " "
        result = stocked("order", "create", "--customer", "1", "--payment", "PayPal", *args)
        assert result.exit_code == 1
        assert "City is required" in result.output

    def test_unknown_order(self, stocked):
        result = stocked("order", "show", "--id", "nope")
        assert result.exit_code == 1
        assert "not found" in result.output


class TestAnalyticsCommands:

    def test_sales_and_categories(self, stocked):
        _create_order(stocked)

        sales = stocked("analytics", "sales")
        assert "Total sales:         $43.00" in sales.output
        assert "Orders:              1" in sales.output

        categories = stocked("analytics", "categories")
        assert "tools" in categories.output
        assert "$30.00" in categories.output

        metrics = stocked("analytics", "metrics")
        assert "tools" in metrics.output
        assert "30.00" in metrics.output
