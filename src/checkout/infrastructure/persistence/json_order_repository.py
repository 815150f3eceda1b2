"""JSON-store-backed implementation of OrderRepository."""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from checkout.domain.model.order import (
    Order,
    OrderLine,
    OrderStatus,
    is_valid_order_id,
)
from checkout.domain.model.value_objects import (
    Money,
    PaymentMethod,
    PaymentResult,
    Quantity,
    ShippingAddress,
)
from checkout.domain.repository.order_repository import OrderRepository
from checkout.infrastructure.persistence.json_store import JsonStore, JsonTransaction

COLLECTION = "orders"


class JsonOrderRepository(OrderRepository):

    def __init__(self, store: JsonStore) -> None:
        self._store = store

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> str:
        return secrets.token_hex(12)

    def add(self, order: Order, txn: JsonTransaction | None = None) -> None:
        if order.id is None:
            order.id = self.next_id()
        self._store.put(COLLECTION, order.id, self._to_raw(order), txn=txn)

    def get_by_id(self, order_id: str) -> Order | None:
        if not is_valid_order_id(order_id):
            return None
        raw = self._store.get(COLLECTION, order_id.lower())
        return self._to_domain(raw) if raw is not None else None

    def list_by_customer(self, customer_id: str) -> list[Order]:
        return self._newest_first(
            o for o in self._load_all() if o.customer_id == customer_id
        )

    def list_all(self, status: OrderStatus | None = None) -> list[Order]:
        return self._newest_first(
            o for o in self._load_all() if status is None or o.status == status
        )

    def list_created_between(
        self, start: datetime | None = None, end: datetime | None = None
    ) -> list[Order]:
        return self._newest_first(
            o
            for o in self._load_all()
            if (start is None or o.created_at >= start)
            and (end is None or o.created_at <= end)
        )

    def update(
        self, order_id: str, mutate: Callable[[Order], bool | None]
    ) -> Order | None:
        if not is_valid_order_id(order_id):
            return None

        def apply(current: dict | None) -> dict | None:
            if current is None:
                return None
            order = self._to_domain(current)
            if mutate(order) is False:
                return None
            return self._to_raw(order)

        raw = self._store.modify(COLLECTION, order_id.lower(), apply)
        return self._to_domain(raw) if raw is not None else None

    # --- Internal helpers -----------------------------------------------------

    def _load_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._store.values(COLLECTION)]

    @staticmethod
    def _newest_first(orders) -> list[Order]:
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "lines": [
                {
                    "product_id": line.product_id,
                    "name": line.name,
                    "unit_price": str(line.unit_price.amount),
                    "currency": line.unit_price.currency,
                    "quantity": line.quantity.value,
                }
                for line in order.lines
            ],
            "shipping_address": order.shipping_address.as_dict(),
            "payment_method": order.payment_method.value,
            "items_price": str(order.items_price.amount),
            "shipping_price": str(order.shipping_price.amount),
            "tax_price": str(order.tax_price.amount),
            "total_price": str(order.total_price.amount),
            "status": order.status.value,
            "is_paid": order.is_paid,
            "paid_at": _iso(order.paid_at),
            "payment_result": order.payment_result.as_dict() if order.payment_result else None,
            "cancellation_reason": order.cancellation_reason,
            "cancelled_at": _iso(order.cancelled_at),
            "created_at": order.created_at.isoformat(),
            "updated_at": _iso(order.updated_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        lines = [
            OrderLine(
                product_id=line["product_id"],
                name=line["name"],
                unit_price=Money(Decimal(line["unit_price"]), line.get("currency", "USD")),
                quantity=Quantity(line["quantity"]),
            )
            for line in raw["lines"]
        ]
        payment = raw.get("payment_result")
        return Order(
            id=raw["id"],
            customer_id=raw["customer_id"],
            lines=lines,
            shipping_address=ShippingAddress(**raw["shipping_address"]),
            payment_method=PaymentMethod(raw["payment_method"]),
            items_price=Money(Decimal(raw["items_price"])),
            shipping_price=Money(Decimal(raw["shipping_price"])),
            tax_price=Money(Decimal(raw["tax_price"])),
            total_price=Money(Decimal(raw["total_price"])),
            status=OrderStatus(raw["status"]),
            is_paid=raw.get("is_paid", False),
            paid_at=_parse(raw.get("paid_at")),
            payment_result=PaymentResult(**payment) if payment else None,
            cancellation_reason=raw.get("cancellation_reason"),
            cancelled_at=_parse(raw.get("cancelled_at")),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=_parse(raw.get("updated_at")),
        )


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
