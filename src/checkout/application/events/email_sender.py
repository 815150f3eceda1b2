"""Outbound email capability used by the Notifier.

Rendering and delivery belong to an external service; checkout only
names the template and hands over the data.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class EmailTemplate(Enum):
    ORDER_CONFIRMATION = "orderConfirmation"
    ORDER_UPDATE = "orderUpdate"
    ORDER_CANCELLATION = "orderCancellation"
    ORDER_SHIPPED = "orderShipped"


class EmailDeliveryError(Exception):
    """The email service refused or failed to deliver a message."""


class EmailSender(ABC):

    @abstractmethod
    def send(self, recipient: str, template_name: str, data: dict) -> None:
        """Deliver one templated email. Raises EmailDeliveryError on failure."""
