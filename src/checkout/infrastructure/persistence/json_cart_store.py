"""JSON-store-backed implementation of CartStore."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from checkout.domain.exceptions import CartChangedError
from checkout.domain.model.cart import Cart, CartLine
from checkout.domain.model.value_objects import Quantity
from checkout.domain.repository.cart_store import CartStore
from checkout.infrastructure.persistence.json_store import JsonStore, JsonTransaction

COLLECTION = "carts"


class JsonCartStore(CartStore):

    def __init__(self, store: JsonStore, clock: Callable[[], datetime]) -> None:
        self._store = store
        self._clock = clock

    # --- CartStore interface --------------------------------------------------

    def get(self, customer_id: str) -> Cart:
        def create_if_missing(current: dict | None) -> dict | None:
            if current is not None:
                return None
            return self._to_raw(Cart(customer_id=customer_id, updated_at=self._clock()))

        return self._to_domain(self._store.modify(COLLECTION, customer_id, create_if_missing))

    def add_item(self, customer_id: str, product_id: str, quantity: int) -> Cart:
        qty = Quantity(quantity)
        return self._mutate(customer_id, lambda cart: cart.add(product_id, qty))

    def set_quantity(self, customer_id: str, product_id: str, quantity: int) -> Cart:
        qty = Quantity(quantity)
        return self._mutate(customer_id, lambda cart: cart.set_quantity(product_id, qty))

    def remove_item(self, customer_id: str, product_id: str) -> Cart:
        return self._mutate(customer_id, lambda cart: cart.remove(product_id))

    def clear(
        self,
        customer_id: str,
        txn: JsonTransaction | None = None,
        expected: Cart | None = None,
    ) -> None:
        def apply(current: dict | None) -> dict | None:
            cart = self._to_domain(current) if current else Cart(customer_id=customer_id)
            if expected is not None and cart.contents() != expected.contents():
                raise CartChangedError(
                    f"Cart of customer '{customer_id}' changed during checkout"
                )
            if current is None:
                return None
            cart.clear()
            cart.updated_at = self._clock()
            return self._to_raw(cart)

        self._store.modify(COLLECTION, customer_id, apply, txn=txn)

    # --- Internal helpers -----------------------------------------------------

    def _mutate(self, customer_id: str, change: Callable[[Cart], None]) -> Cart:
        def apply(current: dict | None) -> dict:
            cart = self._to_domain(current) if current else Cart(customer_id=customer_id)
            change(cart)
            cart.updated_at = self._clock()
            return self._to_raw(cart)

        return self._to_domain(self._store.modify(COLLECTION, customer_id, apply))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "customer_id": cart.customer_id,
            "lines": [
                {"product_id": line.product_id, "quantity": line.quantity.value}
                for line in cart.lines
            ],
            "updated_at": cart.updated_at.isoformat() if cart.updated_at else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        return Cart(
            customer_id=raw["customer_id"],
            lines=[
                CartLine(product_id=line["product_id"], quantity=Quantity(line["quantity"]))
                for line in raw["lines"]
            ],
            updated_at=datetime.fromisoformat(raw["updated_at"]) if raw.get("updated_at") else None,
        )
