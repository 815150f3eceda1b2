"""The closed set of order events fanned out after a state transition."""

from enum import Enum


class OrderEvent(Enum):
    ORDER_CREATED = "orderCreated"
    ORDER_PAYMENT_CONFIRMED = "orderPaymentConfirmed"
    ORDER_UPDATED = "orderUpdated"
    ORDER_SHIPPED = "orderShipped"
    ORDER_CANCELLED = "orderCancelled"
