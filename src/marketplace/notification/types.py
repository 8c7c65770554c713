from enum import Enum


class NotificationType(Enum):
    EMAIL_VERIFICATION = "email_verification"
    SELLER_APPLICATION = "seller_application"
    SELLER_APPROVAL = "seller_approval"
    SELLER_UPGRADE = "seller_upgrade"
    ORDER_CONFIRMATION = "order_confirmation"
    ORDER_STATUS = "order_status"
