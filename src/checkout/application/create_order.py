"""Application service: Create Order use case (checkout).

Turns the customer's cart into a priced, persisted order:

1. validate the shipping address and payment method;
2. load the cart and resolve every line against the catalog;
3. price the lines with the *current* catalog prices (snapshot);
4. in one transaction: reserve stock per line, insert the order and
   clear the cart. The clear only applies if the cart still holds the
   lines that were priced, so a cart is turned into at most one order
   and lines added meanwhile are never dropped. Any failure aborts the
   transaction, which puts back every reservation already made;
5. after commit, re-read the order and notify observers. Notification
   happens outside the transaction and cannot undo the order.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import structlog

from checkout.application.dto import OrderDTO, ShippingAddressSpec, order_to_dto
from checkout.application.events.event_bus import EventBus
from checkout.domain.exceptions import (
    EmptyCartError,
    InsufficientStockError,
    InvalidLineError,
    ValidationError,
)
from checkout.domain.model.cart import Cart
from checkout.domain.model.events import OrderEvent
from checkout.domain.model.order import Order, OrderLine, utcnow
from checkout.domain.model.value_objects import PaymentMethod
from checkout.domain.repository.cart_store import CartStore
from checkout.domain.repository.inventory_ledger import InventoryLedger, ReservationResult
from checkout.domain.repository.order_repository import OrderRepository
from checkout.domain.repository.product_repository import ProductRepository
from checkout.domain.repository.transaction import Transaction, TransactionManager
from checkout.domain.service.pricing_policy import PricingPolicy

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        transactions: TransactionManager,
        carts: CartStore,
        products: ProductRepository,
        ledger: InventoryLedger,
        orders: OrderRepository,
        pricing: PricingPolicy,
        event_bus: EventBus,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._transactions = transactions
        self._carts = carts
        self._products = products
        self._ledger = ledger
        self._orders = orders
        self._pricing = pricing
        self._event_bus = event_bus
        self._clock = clock

    def handle(
        self,
        customer_id: str,
        shipping_address: ShippingAddressSpec,
        payment_method: str,
    ) -> OrderDTO:
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer is required")
        address = shipping_address.to_value()
        method = PaymentMethod.parse(payment_method)

        cart = self._carts.get(customer_id)
        if cart.is_empty:
            raise EmptyCartError("Cart is empty")

        lines = self._resolve_lines(cart)
        order = Order.create(
            customer_id=customer_id,
            lines=lines,
            shipping_address=address,
            payment_method=method,
            pricing=self._pricing.price(lines),
            created_at=self._clock(),
        )

        with self._transactions.begin() as txn:
            for line in lines:
                self._reserve(line, txn)
            self._orders.add(order, txn=txn)
            self._carts.clear(customer_id, txn=txn, expected=cart)
            txn.commit()

        logger.info(
            "order_created",
            order_id=order.id,
            customer_id=customer_id,
            total=str(order.total_price.amount),
            lines=len(lines),
        )

        created = self._orders.get_by_id(order.id)  # type: ignore[arg-type]
        self._event_bus.notify(OrderEvent.ORDER_CREATED, created)
        return order_to_dto(created)

    # --- Internal helpers -----------------------------------------------------

    def _resolve_lines(self, cart: Cart) -> list[OrderLine]:
        lines: list[OrderLine] = []
        for cart_line in cart.lines:
            product = self._products.get_by_id(cart_line.product_id)
            if product is None:
                raise InvalidLineError(
                    f"Product '{cart_line.product_id}' in cart no longer exists"
                )
            if not product.is_active:
                raise InvalidLineError(f"Product '{product.name}' is no longer available")

            lines.append(
                OrderLine(
                    product_id=product.id,
                    name=product.name,
                    unit_price=product.price,  # <-- price snapshot
                    quantity=cart_line.quantity,
                )
            )
        return lines

    def _reserve(self, line: OrderLine, txn: Transaction) -> None:
        result = self._ledger.reserve(line.product_id, line.quantity.value, txn=txn)
        if result is ReservationResult.INSUFFICIENT_STOCK:
            raise InsufficientStockError(line.name)
        if result is ReservationResult.NOT_FOUND:
            raise InvalidLineError(f"Product '{line.name}' no longer exists")
