"""Seller application template — sent to the marketplace admin."""

from marketplace.notification.types import NotificationType


class SellerApplicationTemplate:
    notification_type = NotificationType.SELLER_APPLICATION.value

    @staticmethod
    def render(context: dict) -> dict:
        kind = "Existing shopper upgrade" if context.get("is_upgrade") else "New seller"
        return {
            "subject": f"New Seller Application - {context.get('store_name', '')}",
            "body": (
                f"Application type: {kind}\n"
                f"Email: {context['email']}\n"
                f"Store name: {context.get('store_name', '')}\n"
                f"Store description: {context.get('store_description') or '-'}\n\n"
                f"Approve with POST /api/auth/approve-seller/{context['email']}"
            ),
        }
