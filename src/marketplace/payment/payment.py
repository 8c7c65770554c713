"""Payment aggregate — one attempt to pay for an order.

State machine:
    pending → completed → refunded
    pending → failed

An order may collect several failed attempts; once one attempt is
completed no further attempts are accepted.
"""

from datetime import datetime
from enum import Enum

from protean.fields import DateTime, Float, Identifier, String

from marketplace.domain import marketplace
from marketplace.exceptions import InvalidState
from marketplace.payment.events import PaymentCompleted, PaymentFailed, PaymentRefunded
from marketplace.utils.query import fetch_all


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(Enum):
    CARD = "card"
    MOBILE_MONEY = "mobile_money"
    BANK_TRANSFER = "bank_transfer"


# Fields each method needs before a charge is attempted
REQUIRED_DETAILS = {
    PaymentMethod.CARD.value: ("card_number", "card_expiry", "card_cvv"),
    PaymentMethod.MOBILE_MONEY.value: ("phone_number",),
    PaymentMethod.BANK_TRANSFER.value: (),
}


@marketplace.aggregate
class Payment:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    amount = Float(required=True, min_value=0.0)
    method = String(required=True, max_length=20, choices=PaymentMethod)
    status = String(max_length=20, choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    reference = String(max_length=64)
    failure_reason = String(max_length=255)
    created_at = DateTime(default=datetime.now)
    updated_at = DateTime(default=datetime.now)

    @classmethod
    def start(cls, order_id, user_id, amount, method):
        now = datetime.now()
        return cls(
            order_id=order_id,
            user_id=user_id,
            amount=amount,
            method=method,
            status=PaymentStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

    def complete(self, reference):
        self._ensure_status(PaymentStatus.PENDING)
        self.status = PaymentStatus.COMPLETED.value
        self.reference = reference
        self.updated_at = datetime.now()
        self.raise_(
            PaymentCompleted(
                payment_id=self.id,
                order_id=self.order_id,
                amount=self.amount,
                reference=reference,
            )
        )

    def fail(self, reference, reason):
        self._ensure_status(PaymentStatus.PENDING)
        self.status = PaymentStatus.FAILED.value
        self.reference = reference
        self.failure_reason = reason
        self.updated_at = datetime.now()
        self.raise_(PaymentFailed(payment_id=self.id, order_id=self.order_id, reason=reason))

    def refund(self):
        if self.status != PaymentStatus.COMPLETED.value:
            raise InvalidState("Only completed payments can be refunded")
        self.status = PaymentStatus.REFUNDED.value
        self.updated_at = datetime.now()
        self.raise_(PaymentRefunded(payment_id=self.id, order_id=self.order_id, amount=self.amount))

    def _ensure_status(self, expected):
        if self.status != expected.value:
            raise InvalidState(f"Payment is {self.status}, expected {expected.value}")


def missing_details(method: str, details: dict) -> list[str]:
    return [field for field in REQUIRED_DETAILS.get(method, ()) if not details.get(field)]


@marketplace.repository(part_of=Payment)
class PaymentRepository:
    def for_order(self, order_id: str) -> list[Payment]:
        return fetch_all(self._dao.query.filter(order_id=str(order_id)).order_by("-created_at"))

    def has_completed(self, order_id: str) -> bool:
        return bool(
            self._dao.query.filter(order_id=str(order_id), status=PaymentStatus.COMPLETED.value).all().items
        )
