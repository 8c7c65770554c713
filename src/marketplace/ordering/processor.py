"""Asynchronous order processing.

Consumes ``OrderPlaced`` work items and sends the order confirmation. Stock
was reserved at placement, so a redelivered work item only repeats the
email. Failures are logged and re-raised so the engine can retry.

Also turns ``OrderStatusChanged`` into a status email for the order owner.
"""

import json

import structlog
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.account.user import User
from marketplace.domain import marketplace
from marketplace.notification.dispatch import notify
from marketplace.notification.types import NotificationType
from marketplace.ordering.events import OrderPlaced, OrderStatusChanged
from marketplace.ordering.order import Order

logger = structlog.get_logger(__name__)


@marketplace.event_handler(part_of=Order)
class OrderProcessor:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        log = logger.bind(order_id=str(event.order_id), user_id=str(event.user_id))
        try:
            user = current_domain.repository_for(User).get(event.user_id)
            items = json.loads(event.items) if isinstance(event.items, str) else event.items
        except Exception as exc:
            log.error("Order processing failed", error=str(exc))
            raise

        notify(
            NotificationType.ORDER_CONFIRMATION,
            user.email,
            {
                "name": user.name,
                "order_id": str(event.order_id),
                "total_amount": event.total_amount,
                "items": items,
            },
        )
        log.info("Order processed", total_amount=event.total_amount, lines=len(items))

    @handle(OrderStatusChanged)
    def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        try:
            user = current_domain.repository_for(User).get(event.user_id)
        except Exception as exc:
            logger.error("Order status notification failed", order_id=str(event.order_id), error=str(exc))
            raise

        notify(
            NotificationType.ORDER_STATUS,
            user.email,
            {"order_id": str(event.order_id), "status": event.status},
        )
