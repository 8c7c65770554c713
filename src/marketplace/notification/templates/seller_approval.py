"""Seller approval template — carries the temporary password of a new seller account."""

from marketplace.notification.types import NotificationType


class SellerApprovalTemplate:
    notification_type = NotificationType.SELLER_APPROVAL.value

    @staticmethod
    def render(context: dict) -> dict:
        login_url = f"{context.get('frontend_url', '').rstrip('/')}/login"
        return {
            "subject": "Your Seller Application Has Been Approved",
            "body": (
                "Congratulations! Your seller account is ready.\n\n"
                f"Email: {context['email']}\n"
                f"Temporary password: {context['temporary_password']}\n\n"
                f"Log in at {login_url} and change your password."
            ),
        }
