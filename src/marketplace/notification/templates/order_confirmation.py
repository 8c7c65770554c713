"""Order confirmation template — sent once an order has been processed."""

from marketplace.notification.types import NotificationType


class OrderConfirmationTemplate:
    notification_type = NotificationType.ORDER_CONFIRMATION.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        total = float(context.get("total_amount", 0.0))
        lines = "\n".join(
            f"  {item['quantity']} x {item['product_name']} @ {float(item['price']):.2f}"
            for item in context.get("items", [])
        )
        return {
            "subject": f"Order Confirmation - #{order_id}",
            "body": (
                f"Thank you for your order, {context.get('name', 'there')}!\n\n"
                f"Order ID: {order_id}\n"
                f"{lines}\n\n"
                f"Total Amount: ${total:.2f}\n\n"
                "We'll notify you once your order status changes."
            ),
        }
