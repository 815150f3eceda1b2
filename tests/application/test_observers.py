"""Tests for the Notifier, AnalyticsRecorder and InventoryWatcher observers.

Observers are driven directly through ``update()`` here; the EventBus
is covered separately.
"""

from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from checkout.application.events.analytics import UNCATEGORIZED, AnalyticsRecorder
from checkout.application.events.email_sender import EmailDeliveryError
from checkout.application.events.inventory_watcher import InventoryWatcher, StockLevel
from checkout.application.events.notifier import Notifier
from checkout.domain.model.customer import Customer
from checkout.domain.model.events import OrderEvent
from checkout.domain.model.order import Order, OrderLine
from checkout.domain.model.product import Product
from checkout.domain.model.value_objects import Money, PaymentMethod, Quantity, ShippingAddress
from checkout.domain.service.pricing_policy import PricingPolicy
from checkout.infrastructure.persistence.json_customer_repository import JsonCustomerRepository
from checkout.infrastructure.persistence.json_inventory_ledger import JsonInventoryLedger
from checkout.infrastructure.persistence.json_metrics_repository import JsonMetricsRepository
from checkout.infrastructure.persistence.json_product_repository import JsonProductRepository
from checkout.infrastructure.persistence.json_store import JsonStore
from tests.fakes import FIXED_NOW, FakeEmailSender


def _order(
    customer_id: str = "1",
    method: PaymentMethod = PaymentMethod.BANK_TRANSFER,
    lines: list[tuple[str, int, str]] | None = None,
) -> Order:
    order_lines = [
        OrderLine(product_id, f"P{product_id}", Money.of(price), Quantity(qty))
        for product_id, qty, price in (lines or [("1", 3, "10.00")])
    ]
    order = Order.create(
        customer_id=customer_id,
        lines=order_lines,
        shipping_address=ShippingAddress("1 Main St", "Springfield", "IL", "62701", "USA"),
        payment_method=method,
        pricing=PricingPolicy().price(order_lines),
        created_at=FIXED_NOW,
    )
    order.id = "cd" * 12
    return order


# ── Notifier ─────────────────────────────────────────────────────────────────


def _notifier(fail: bool = False) -> tuple[Notifier, FakeEmailSender]:
    customers = JsonCustomerRepository(JsonStore())
    customers.save(Customer(id="1", name="Alice", email="alice@example.com"))
    customers.save(Customer(id="2", name="Bob", email=None))
    sender = FakeEmailSender(fail=fail)
    return Notifier(customers, sender), sender


class TestNotifier:

    def test_bank_transfer_confirmed_on_creation(self):
        notifier, sender = _notifier()
        notifier.update(OrderEvent.ORDER_CREATED, _order(method=PaymentMethod.BANK_TRANSFER))
        assert sender.templates() == ["orderConfirmation"]

    @pytest.mark.parametrize("method", [PaymentMethod.CREDIT_CARD, PaymentMethod.PAYPAL])
    def test_gateway_methods_wait_for_payment(self, method):
        notifier, sender = _notifier()
        notifier.update(OrderEvent.ORDER_CREATED, _order(method=method))
        assert sender.sent == []
        notifier.update(OrderEvent.ORDER_PAYMENT_CONFIRMED, _order(method=method))
        assert sender.templates() == ["orderConfirmation"]

    @pytest.mark.parametrize(
        "event, template",
        [
            (OrderEvent.ORDER_UPDATED, "orderUpdate"),
            (OrderEvent.ORDER_CANCELLED, "orderCancellation"),
            (OrderEvent.ORDER_SHIPPED, "orderShipped"),
        ],
    )
    def test_event_templates(self, event, template):
        notifier, sender = _notifier()
        notifier.update(event, _order())
        assert sender.templates() == [template]
        recipient, _, data = sender.sent[0]
        assert recipient == "alice@example.com"
        assert data["total_price"] == "43.00"

    def test_customer_without_email_is_skipped(self):
        notifier, sender = _notifier()
        with capture_logs() as logs:
            notifier.update(OrderEvent.ORDER_CANCELLED, _order(customer_id="2"))
        assert sender.sent == []
        assert any(entry["event"] == "email_skipped_no_address" for entry in logs)

    def test_unknown_customer_is_skipped(self):
        notifier, sender = _notifier()
        with capture_logs() as logs:
            notifier.update(OrderEvent.ORDER_CANCELLED, _order(customer_id="404"))
        assert sender.sent == []
        assert any(entry["event"] == "email_skipped_unknown_customer" for entry in logs)

    def test_delivery_failure_propagates_to_the_bus(self):
        notifier, _ = _notifier(fail=True)
        with pytest.raises(EmailDeliveryError):
            notifier.update(OrderEvent.ORDER_SHIPPED, _order())


# ── AnalyticsRecorder ────────────────────────────────────────────────────────


def _catalog(store: JsonStore) -> JsonProductRepository:
    products = JsonProductRepository(store)
    products.save(Product(id="1", name="Widget", price=Money.of("10.00"), stock=5, category="tools"))
    products.save(Product(id="2", name="Gadget", price=Money.of("20.00"), stock=20, category="toys"))
    return products


class TestAnalyticsRecorder:

    def test_created_and_cancelled_counters(self):
        store = JsonStore()
        metrics = JsonMetricsRepository(store)
        recorder = AnalyticsRecorder(metrics, _catalog(store))
        order = _order(lines=[("1", 2, "10.00"), ("2", 1, "20.00")])

        recorder.update(OrderEvent.ORDER_CREATED, order)
        order.cancel("", FIXED_NOW)
        recorder.update(OrderEvent.ORDER_CANCELLED, order)

        by_category = {m.category: m for m in metrics.list_all()}
        assert by_category["tools"].orders == 1
        assert by_category["tools"].units == 2
        assert by_category["tools"].revenue == Decimal("20.00")
        assert by_category["toys"].cancellations == 1
        assert by_category["toys"].cancelled_revenue == Decimal("20.00")

    def test_missing_product_counts_as_uncategorized(self):
        store = JsonStore()
        metrics = JsonMetricsRepository(store)
        recorder = AnalyticsRecorder(metrics, _catalog(store))

        recorder.update(OrderEvent.ORDER_CREATED, _order(lines=[("9", 1, "5.00")]))

        [line] = metrics.list_all()
        assert line.category == UNCATEGORIZED
        assert line.units == 1

    def test_other_events_ignored(self):
        store = JsonStore()
        metrics = JsonMetricsRepository(store)
        AnalyticsRecorder(metrics, _catalog(store)).update(OrderEvent.ORDER_SHIPPED, _order())
        assert metrics.list_all() == []


# ── InventoryWatcher ─────────────────────────────────────────────────────────


class TestInventoryWatcher:

    def _watcher(self):
        store = JsonStore()
        products = _catalog(store)
        alerts = []
        watcher = InventoryWatcher(
            products, JsonInventoryLedger(store), low_stock_threshold=10, alert_sink=alerts.append
        )
        return watcher, products, alerts

    def test_low_stock_alert(self):
        watcher, _, alerts = self._watcher()
        watcher.update(OrderEvent.ORDER_CREATED, _order(lines=[("1", 1, "10.00"), ("2", 1, "20.00")]))
        assert [(a.product_name, a.level) for a in alerts] == [("Widget", StockLevel.LOW)]
        assert alerts[0].stock == 5

    def test_out_of_stock_alert(self):
        watcher, products, alerts = self._watcher()
        products.set_stock("2", 0)
        watcher.update(OrderEvent.ORDER_CREATED, _order(lines=[("2", 1, "20.00")]))
        assert [a.level for a in alerts] == [StockLevel.OUT]

    def test_cancellation_restores_stock(self):
        watcher, products, alerts = self._watcher()
        watcher.update(OrderEvent.ORDER_CANCELLED, _order(lines=[("1", 3, "10.00")]))
        assert products.get_by_id("1").stock == 8
        assert alerts == []

    def test_restore_skips_unknown_product(self):
        watcher, products, _ = self._watcher()
        with capture_logs() as logs:
            watcher.update(OrderEvent.ORDER_CANCELLED, _order(lines=[("9", 1, "1.00"), ("1", 1, "10.00")]))
        assert products.get_by_id("1").stock == 6
        assert any(entry["event"] == "stock_restore_unknown_product" for entry in logs)
