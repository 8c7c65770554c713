"""Email verification template — sent right after registration."""

from marketplace.notification.types import NotificationType


class EmailVerificationTemplate:
    notification_type = NotificationType.EMAIL_VERIFICATION.value

    @staticmethod
    def render(context: dict) -> dict:
        link = f"{context.get('frontend_url', '').rstrip('/')}/verify-email/{context['token']}"
        return {
            "subject": "Verify Your Email - Marketplace",
            "body": (
                f"Welcome to Marketplace, {context.get('name', 'there')}!\n\n"
                "Please confirm your email address by opening the link below:\n\n"
                f"{link}\n\n"
                "If you did not create an account, you can ignore this message."
            ),
            "html_body": (
                "<h1>Welcome to Marketplace!</h1>"
                "<p>Please click the link below to verify your email address:</p>"
                f'<a href="{link}">Verify Email</a>'
            ),
        }
