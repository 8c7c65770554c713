"""Tests for the Payment aggregate state machine."""

import pytest

from marketplace.exceptions import InvalidState
from marketplace.payment.events import PaymentCompleted, PaymentFailed, PaymentRefunded
from marketplace.payment.payment import Payment, PaymentStatus, missing_details


def _payment(**overrides):
    values = {"order_id": "order-1", "user_id": "user-1", "amount": 2999.97, "method": "card"}
    values.update(overrides)
    return Payment.start(**values)


class TestPaymentLifecycle:
    def test_starts_pending(self):
        payment = _payment()
        assert payment.status == PaymentStatus.PENDING.value
        assert payment.reference is None

    def test_complete(self):
        payment = _payment()
        payment.complete("PAY_1_abc")

        assert payment.status == PaymentStatus.COMPLETED.value
        assert payment.reference == "PAY_1_abc"
        assert isinstance(payment._events[-1], PaymentCompleted)

    def test_fail_records_reason(self):
        payment = _payment()
        payment.fail("PAY_1_abc", "Payment declined")

        assert payment.status == PaymentStatus.FAILED.value
        assert payment.failure_reason == "Payment declined"
        assert isinstance(payment._events[-1], PaymentFailed)

    def test_refund_completed_payment(self):
        payment = _payment()
        payment.complete("PAY_1_abc")
        payment.refund()

        assert payment.status == PaymentStatus.REFUNDED.value
        assert isinstance(payment._events[-1], PaymentRefunded)

    def test_cannot_refund_failed_payment(self):
        payment = _payment()
        payment.fail("PAY_1_abc", "Payment declined")

        with pytest.raises(InvalidState):
            payment.refund()

    def test_cannot_complete_twice(self):
        payment = _payment()
        payment.complete("PAY_1_abc")

        with pytest.raises(InvalidState):
            payment.complete("PAY_2_def")


class TestMissingDetails:
    def test_card_requires_all_card_fields(self):
        assert missing_details("card", {"card_number": "4242424242424242"}) == ["card_expiry", "card_cvv"]

    def test_mobile_money_requires_phone(self):
        assert missing_details("mobile_money", {}) == ["phone_number"]
        assert missing_details("mobile_money", {"phone_number": "+233200000000"}) == []

    def test_bank_transfer_needs_nothing(self):
        assert missing_details("bank_transfer", {}) == []
