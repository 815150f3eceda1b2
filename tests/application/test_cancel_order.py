"""Tests for order cancellation and stock restoration."""

import threading

import pytest

from checkout.domain.exceptions import (
    AlreadyCancelledError,
    InvalidTransitionError,
    OrderNotFoundError,
)
from checkout.domain.model.events import OrderEvent
from checkout.domain.model.value_objects import PaymentResult
from tests.fakes import RecordingObserver


def _place_order(shop, address, qty=3):
    shop.add_to_cart.handle("1", "1", qty)
    return shop.create_order.handle("1", address, "PayPal")


class TestCancelOrder:

    def test_cancel_records_reason_and_time(self, shop, address, clock):
        placed = _place_order(shop, address)
        clock.advance(minutes=10)

        dto = shop.cancel_order.handle(placed.id, "found it cheaper")

        assert dto.status == "cancelled"
        assert dto.cancellation_reason == "found it cheaper"
        assert shop.orders.get_by_id(placed.id).cancelled_at == clock.now

    def test_cancel_restores_reserved_stock(self, shop, address):
        placed = _place_order(shop, address, qty=3)
        assert shop.products.get_by_id("1").stock == 7

        shop.cancel_order.handle(placed.id, "")
        shop.event_bus.flush(timeout=5)

        assert shop.products.get_by_id("1").stock == 10

    def test_cancel_paid_order(self, shop, address):
        placed = _place_order(shop, address)
        shop.update_order_payment.handle(
            placed.id, PaymentResult(id="PAY-1", status="COMPLETED", payment_method="PayPal")
        )
        dto = shop.cancel_order.handle(placed.id, "refund requested")
        assert dto.status == "cancelled"
        assert dto.is_paid is True

    def test_cancel_twice_always_fails(self, shop, address):
        placed = _place_order(shop, address)
        shop.cancel_order.handle(placed.id, "first")
        for _ in range(2):
            with pytest.raises(AlreadyCancelledError):
                shop.cancel_order.handle(placed.id, "again")

        shop.event_bus.flush(timeout=5)
        assert shop.products.get_by_id("1").stock == 10

    def test_shipped_order_cannot_be_cancelled(self, shop, address):
        placed = _place_order(shop, address)
        shop.update_order_status.handle(placed.id, "shipped")
        with pytest.raises(InvalidTransitionError):
            shop.cancel_order.handle(placed.id, "too late")

    def test_unknown_order(self, shop):
        with pytest.raises(OrderNotFoundError, match="not found"):
            shop.cancel_order.handle("f" * 24, "")

    def test_racing_cancellations_release_stock_once(self, shop, address):
        placed = _place_order(shop, address, qty=3)
        recorder = RecordingObserver(events=(OrderEvent.ORDER_CANCELLED,))
        shop.event_bus.attach(recorder)

        barrier = threading.Barrier(4)
        errors: list[Exception] = []
        lock = threading.Lock()

        def cancel() -> None:
            barrier.wait()
            try:
                shop.cancel_order.handle(placed.id, "race")
            except AlreadyCancelledError as exc:
                with lock:
                    errors.append(exc)

        threads = [threading.Thread(target=cancel) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)
        shop.event_bus.flush(timeout=5)

        assert len(errors) == 3
        assert recorder.events == [OrderEvent.ORDER_CANCELLED]
        assert shop.products.get_by_id("1").stock == 10
