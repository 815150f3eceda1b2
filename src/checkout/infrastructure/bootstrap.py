"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. There are no
module-level singletons: each call to ``build_container`` returns a
fresh, independent object graph.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

import structlog

from checkout.application.add_customer import AddCustomerHandler
from checkout.application.add_product import AddProductHandler
from checkout.application.add_to_cart import AddToCartHandler
from checkout.application.cancel_order import CancelOrderHandler
from checkout.application.create_order import CreateOrderHandler
from checkout.application.events.analytics import AnalyticsRecorder
from checkout.application.events.email_sender import EmailSender
from checkout.application.events.event_bus import EventBus
from checkout.application.events.inventory_watcher import InventoryWatcher
from checkout.application.events.notifier import Notifier
from checkout.application.list_orders import ListAllOrdersHandler, ListCustomerOrdersHandler
from checkout.application.remove_cart_item import ClearCartHandler, RemoveCartItemHandler
from checkout.application.sales_analytics import SalesAnalyticsHandler, ShowMetricsHandler
from checkout.application.set_stock import SetStockHandler
from checkout.application.show_cart import ShowCartHandler
from checkout.application.show_inventory import ShowInventoryHandler
from checkout.application.show_order import ShowOrderHandler
from checkout.application.update_cart_item import UpdateCartItemHandler
from checkout.application.update_order_payment import UpdateOrderPaymentHandler
from checkout.application.update_order_status import UpdateOrderStatusHandler
from checkout.application.update_product import UpdateProductHandler
from checkout.domain.model.order import utcnow
from checkout.infrastructure.config import Settings
from checkout.infrastructure.email.logging_email_sender import LoggingEmailSender
from checkout.infrastructure.persistence.json_cart_store import JsonCartStore
from checkout.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from checkout.infrastructure.persistence.json_inventory_ledger import JsonInventoryLedger
from checkout.infrastructure.persistence.json_metrics_repository import (
    JsonMetricsRepository,
)
from checkout.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from checkout.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from checkout.infrastructure.persistence.json_store import JsonStore

logger = structlog.get_logger(__name__)


@dataclass
class Container:
    settings: Settings
    store: JsonStore
    event_bus: EventBus
    products: JsonProductRepository
    customers: JsonCustomerRepository
    orders: JsonOrderRepository
    carts: JsonCartStore
    ledger: JsonInventoryLedger
    metrics: JsonMetricsRepository

    # Catalog & customers
    add_product: AddProductHandler
    update_product: UpdateProductHandler
    set_stock: SetStockHandler
    show_inventory: ShowInventoryHandler
    add_customer: AddCustomerHandler

    # Cart
    add_to_cart: AddToCartHandler
    update_cart_item: UpdateCartItemHandler
    remove_cart_item: RemoveCartItemHandler
    clear_cart: ClearCartHandler
    show_cart: ShowCartHandler

    # Orders
    create_order: CreateOrderHandler
    update_order_payment: UpdateOrderPaymentHandler
    cancel_order: CancelOrderHandler
    update_order_status: UpdateOrderStatusHandler
    show_order: ShowOrderHandler
    list_customer_orders: ListCustomerOrdersHandler
    list_all_orders: ListAllOrdersHandler

    # Reporting
    sales_analytics: SalesAnalyticsHandler
    show_metrics: ShowMetricsHandler

    def close(self, timeout: float | None = None) -> None:
        """Let in-flight notifications finish, then stop the event workers."""
        if not self.event_bus.flush(timeout):
            logger.warning("event_bus_flush_timed_out", timeout=timeout)
        self.event_bus.shutdown(wait=True)


def build_container(
    settings: Settings,
    email_sender: EmailSender | None = None,
    clock: Callable[[], datetime] = utcnow,
    in_memory: bool = False,
) -> Container:
    store = JsonStore(None if in_memory else settings.store_path)

    products = JsonProductRepository(store)
    customers = JsonCustomerRepository(store)
    orders = JsonOrderRepository(store)
    carts = JsonCartStore(store, clock)
    ledger = JsonInventoryLedger(store)
    metrics = JsonMetricsRepository(store)

    event_bus = EventBus(max_workers=settings.event_workers)
    event_bus.attach(Notifier(customers, email_sender or LoggingEmailSender()))
    event_bus.attach(AnalyticsRecorder(metrics, products))
    event_bus.attach(
        InventoryWatcher(products, ledger, low_stock_threshold=settings.low_stock_threshold)
    )

    return Container(
        settings=settings,
        store=store,
        event_bus=event_bus,
        products=products,
        customers=customers,
        orders=orders,
        carts=carts,
        ledger=ledger,
        metrics=metrics,
        add_product=AddProductHandler(product_repo=products),
        update_product=UpdateProductHandler(product_repo=products),
        set_stock=SetStockHandler(product_repo=products),
        show_inventory=ShowInventoryHandler(
            product_repo=products, low_stock_threshold=settings.low_stock_threshold
        ),
        add_customer=AddCustomerHandler(customer_repo=customers),
        add_to_cart=AddToCartHandler(carts, products),
        update_cart_item=UpdateCartItemHandler(carts, products),
        remove_cart_item=RemoveCartItemHandler(carts, products),
        clear_cart=ClearCartHandler(carts),
        show_cart=ShowCartHandler(carts, products),
        create_order=CreateOrderHandler(
            transactions=store,
            carts=carts,
            products=products,
            ledger=ledger,
            orders=orders,
            pricing=settings.pricing_policy(),
            event_bus=event_bus,
            clock=clock,
        ),
        update_order_payment=UpdateOrderPaymentHandler(orders, event_bus, clock),
        cancel_order=CancelOrderHandler(orders, event_bus, clock),
        update_order_status=UpdateOrderStatusHandler(orders, event_bus, clock),
        show_order=ShowOrderHandler(order_repo=orders, customer_repo=customers),
        list_customer_orders=ListCustomerOrdersHandler(order_repo=orders),
        list_all_orders=ListAllOrdersHandler(order_repo=orders),
        sales_analytics=SalesAnalyticsHandler(order_repo=orders, product_repo=products),
        show_metrics=ShowMetricsHandler(metrics_repo=metrics),
    )
