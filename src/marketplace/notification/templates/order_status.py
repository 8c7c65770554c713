"""Order status template — sent whenever an order changes status."""

from marketplace.notification.types import NotificationType


class OrderStatusTemplate:
    notification_type = NotificationType.ORDER_STATUS.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        status = context.get("status", "")
        return {
            "subject": f"Order Status Update - #{order_id}",
            "body": f"Your order #{order_id} status has been updated to: {status.upper()}",
        }
