"""Seller upgrade template — an existing shopper became a seller."""

from marketplace.notification.types import NotificationType


class SellerUpgradeTemplate:
    notification_type = NotificationType.SELLER_UPGRADE.value

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": "Your Account Has Been Upgraded to Seller",
            "body": (
                f"Hi {context.get('name', 'there')},\n\n"
                "Your seller application was approved. Log in with your existing "
                "credentials and create your store to start selling."
            ),
        }
