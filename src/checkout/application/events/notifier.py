"""Notifier — emails the customer about their order.

Orders paid through a gateway (card, PayPal) get their confirmation
only once the payment settles, so the customer is never told an order
is confirmed before the money has moved. Bank transfers are confirmed
as soon as the order exists.
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from checkout.application.dto import order_to_email_data
from checkout.application.events.email_sender import EmailSender, EmailTemplate
from checkout.application.events.observer import EventHandler, Observer
from checkout.domain.model.events import OrderEvent
from checkout.domain.model.order import Order
from checkout.domain.repository.customer_repository import CustomerRepository

logger = structlog.get_logger(__name__)


class Notifier(Observer):

    def __init__(self, customers: CustomerRepository, email_sender: EmailSender) -> None:
        self._customers = customers
        self._email_sender = email_sender
        self._handlers: dict[OrderEvent, EventHandler] = {
            OrderEvent.ORDER_CREATED: self._on_created,
            OrderEvent.ORDER_PAYMENT_CONFIRMED: self._templated(EmailTemplate.ORDER_CONFIRMATION),
            OrderEvent.ORDER_UPDATED: self._templated(EmailTemplate.ORDER_UPDATE),
            OrderEvent.ORDER_CANCELLED: self._templated(EmailTemplate.ORDER_CANCELLATION),
            OrderEvent.ORDER_SHIPPED: self._templated(EmailTemplate.ORDER_SHIPPED),
        }

    def handlers(self) -> Mapping[OrderEvent, EventHandler]:
        return self._handlers

    def _on_created(self, order: Order) -> None:
        if order.payment_method.settles_through_gateway:
            logger.info(
                "confirmation_deferred_until_payment",
                order_id=order.id,
                payment_method=order.payment_method.value,
            )
            return
        self._send(order, EmailTemplate.ORDER_CONFIRMATION)

    def _templated(self, template: EmailTemplate) -> EventHandler:
        return lambda order: self._send(order, template)

    def _send(self, order: Order, template: EmailTemplate) -> None:
        customer = self._customers.get_by_id(order.customer_id)
        if customer is None:
            logger.warning(
                "email_skipped_unknown_customer",
                order_id=order.id,
                customer_id=order.customer_id,
                template=template.value,
            )
            return
        if not customer.can_receive_email:
            logger.warning(
                "email_skipped_no_address",
                order_id=order.id,
                customer_id=customer.id,
                template=template.value,
            )
            return

        self._email_sender.send(customer.email, template.value, order_to_email_data(order))
        logger.info(
            "email_sent",
            order_id=order.id,
            recipient=customer.email,
            template=template.value,
        )
