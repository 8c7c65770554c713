"""Application tests for processing and refunding payments."""

import pytest
from protean.utils.globals import current_domain

from marketplace.exceptions import AlreadyPaid, Forbidden, InvalidState, NotPending
from marketplace.ordering.order import Order
from marketplace.ordering.status import UpdateOrderStatus
from marketplace.payment.payment import Payment
from marketplace.payment.processing import ProcessPayment, RefundPayment

CARD = {"card_number": "4242424242424242", "card_expiry": "12/30", "card_cvv": "123"}


@pytest.fixture()
def order_id(place_order, product_id):
    return place_order([{"product_id": product_id, "quantity": 3}])


def _pay(actor, order_id, method="card", **details):
    command = ProcessPayment(
        actor_id=actor.user_id,
        actor_role=actor.role,
        order_id=order_id,
        method=method,
        **details,
    )
    payment_id = current_domain.process(command, asynchronous=False)
    return current_domain.repository_for(Payment).get(payment_id)


class TestProcessPayment:
    def test_successful_charge_moves_order_to_processing(self, shopper, order_id, gateway):
        payment = _pay(shopper, order_id, **CARD)

        assert payment.status == "completed"
        assert payment.amount == pytest.approx(2999.97)
        assert payment.reference.startswith("PAY_")
        assert current_domain.repository_for(Order).get(order_id).status == "processing"
        assert gateway.calls[0]["method"] == "card"

    def test_charge_carries_the_pending_payment_id(self, shopper, order_id, gateway):
        payment = _pay(shopper, order_id, **CARD)

        assert gateway.calls[0]["details"]["payment_id"] == str(payment.id)

    def test_declined_charge_leaves_order_pending(self, shopper, order_id, gateway):
        gateway.configure(should_succeed=False, failure_reason="Insufficient funds")

        payment = _pay(shopper, order_id, **CARD)

        assert payment.status == "failed"
        assert payment.failure_reason == "Insufficient funds"
        assert current_domain.repository_for(Order).get(order_id).status == "pending"

    def test_missing_card_details_fail_without_charging(self, shopper, order_id, gateway):
        payment = _pay(shopper, order_id, card_number="4242424242424242")

        assert payment.status == "failed"
        assert "card_expiry" in payment.failure_reason
        assert gateway.calls == []
        assert current_domain.repository_for(Order).get(order_id).status == "pending"

    def test_mobile_money_needs_phone_number(self, shopper, order_id, gateway):
        assert _pay(shopper, order_id, method="mobile_money").status == "failed"
        assert _pay(shopper, order_id, method="mobile_money", phone_number="+233200000000").status == "completed"

    def test_retry_after_failure_is_allowed(self, shopper, order_id, gateway):
        gateway.configure(should_succeed=False)
        _pay(shopper, order_id, method="bank_transfer")

        gateway.configure(should_succeed=True)
        payment = _pay(shopper, order_id, method="bank_transfer")

        assert payment.status == "completed"
        assert len(current_domain.repository_for(Payment).for_order(order_id)) == 2

    def test_only_order_owner_can_pay(self, make_user, order_id):
        stranger = make_user(email="stranger@example.com")

        with pytest.raises(Forbidden):
            _pay(stranger, order_id, method="bank_transfer")

    def test_paid_order_is_no_longer_pending(self, shopper, order_id):
        _pay(shopper, order_id, method="bank_transfer")

        with pytest.raises(NotPending):
            _pay(shopper, order_id, method="bank_transfer")

    def test_completed_payment_blocks_another(self, shopper, order_id):
        _pay(shopper, order_id, method="bank_transfer")
        # Put the order back to pending to reach the duplicate-payment check
        order_repo = current_domain.repository_for(Order)
        order = order_repo.get(order_id)
        order.status = "pending"
        order_repo.add(order)

        with pytest.raises(AlreadyPaid):
            _pay(shopper, order_id, method="bank_transfer")

    def test_cancelled_order_cannot_be_paid(self, shopper, order_id):
        current_domain.process(
            UpdateOrderStatus(actor_id=shopper.user_id, actor_role=shopper.role, order_id=order_id, status="cancelled"),
            asynchronous=False,
        )

        with pytest.raises(NotPending):
            _pay(shopper, order_id, method="bank_transfer")


class TestRefundPayment:
    def _refund(self, actor, payment_id):
        current_domain.process(
            RefundPayment(actor_id=actor.user_id, actor_role=actor.role, payment_id=payment_id),
            asynchronous=False,
        )
        return current_domain.repository_for(Payment).get(payment_id)

    def test_admin_refunds_completed_payment(self, shopper, admin, order_id):
        payment = _pay(shopper, order_id, method="bank_transfer")

        assert self._refund(admin, str(payment.id)).status == "refunded"

    def test_shopper_cannot_refund(self, shopper, order_id):
        payment = _pay(shopper, order_id, method="bank_transfer")

        with pytest.raises(Forbidden):
            self._refund(shopper, str(payment.id))

    def test_failed_payment_cannot_be_refunded(self, shopper, admin, order_id, gateway):
        gateway.configure(should_succeed=False)
        payment = _pay(shopper, order_id, method="bank_transfer")

        with pytest.raises(InvalidState):
            self._refund(admin, str(payment.id))
