"""Notification sink.

``notify`` renders a template and hands it to the email channel. It is
fire-and-forget: delivery problems are logged and reported through the
return value, never raised, so a broken mail server cannot fail a
registration or an order.
"""

import structlog

from marketplace.config import setting
from marketplace.notification.channel import get_email_channel
from marketplace.notification.channel.email_port import SENT
from marketplace.notification.templates import get_template
from marketplace.notification.types import NotificationType

logger = structlog.get_logger(__name__)


def notify(kind: NotificationType | str, recipient: str, context: dict) -> bool:
    """Send a ``kind`` notification to ``recipient``; True when the channel accepted it."""
    notification_type = kind.value if isinstance(kind, NotificationType) else kind
    payload = {"frontend_url": setting("FRONTEND_URL", ""), **context}

    try:
        content = get_template(notification_type).render(payload)
        result = get_email_channel().send(
            to=recipient,
            subject=content["subject"],
            body=content["body"],
            html_body=content.get("html_body"),
        )
    except Exception as exc:
        logger.error(
            "Notification dispatch failed",
            notification_type=notification_type,
            recipient=recipient,
            error=str(exc),
        )
        return False

    if result.get("status") != SENT:
        logger.warning(
            "Notification not delivered",
            notification_type=notification_type,
            recipient=recipient,
            error=result.get("error", "Unknown dispatch error"),
        )
        return False

    logger.info(
        "Notification sent",
        notification_type=notification_type,
        recipient=recipient,
        message_id=result.get("message_id"),
    )
    return True


def admin_email() -> str:
    return setting("ADMIN_EMAIL", "admin@marketplace.com")
