"""Template registry — maps NotificationType to template classes."""

from marketplace.notification.templates.order_confirmation import OrderConfirmationTemplate
from marketplace.notification.templates.order_status import OrderStatusTemplate
from marketplace.notification.templates.seller_application import SellerApplicationTemplate
from marketplace.notification.templates.seller_approval import SellerApprovalTemplate
from marketplace.notification.templates.seller_upgrade import SellerUpgradeTemplate
from marketplace.notification.templates.verification import EmailVerificationTemplate
from marketplace.notification.types import NotificationType

TEMPLATE_REGISTRY: dict[str, type] = {
    NotificationType.EMAIL_VERIFICATION.value: EmailVerificationTemplate,
    NotificationType.SELLER_APPLICATION.value: SellerApplicationTemplate,
    NotificationType.SELLER_APPROVAL.value: SellerApprovalTemplate,
    NotificationType.SELLER_UPGRADE.value: SellerUpgradeTemplate,
    NotificationType.ORDER_CONFIRMATION.value: OrderConfirmationTemplate,
    NotificationType.ORDER_STATUS.value: OrderStatusTemplate,
}


def get_template(notification_type: str):
    """Look up a template class by notification type string."""
    template_cls = TEMPLATE_REGISTRY.get(notification_type)
    if template_cls is None:
        raise ValueError(f"No template registered for notification type: {notification_type}")
    return template_cls
