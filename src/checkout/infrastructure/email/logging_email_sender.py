"""EmailSender that only logs what it would have sent.

The CLI has no mail transport; a real deployment plugs in its own
EmailSender at the composition root.
"""

from __future__ import annotations

import structlog

from checkout.application.events.email_sender import EmailDeliveryError, EmailSender

logger = structlog.get_logger(__name__)


class LoggingEmailSender(EmailSender):

    def send(self, recipient: str, template_name: str, data: dict) -> None:
        if not recipient or "@" not in recipient:
            raise EmailDeliveryError(f"Cannot deliver to {recipient!r}")
        logger.info(
            "email_queued",
            recipient=recipient,
            template=template_name,
            order_id=data.get("order_id"),
        )
