"""Payment processing and refunds — commands and handlers."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.auth.actor import Actor
from marketplace.auth.policy import Capability, ensure_order_owner, require
from marketplace.domain import marketplace
from marketplace.exceptions import AlreadyPaid, NotPending
from marketplace.ordering.order import Order, OrderStatus
from marketplace.payment.gateway import get_gateway
from marketplace.payment.gateway.port import make_reference
from marketplace.payment.payment import Payment, PaymentMethod, missing_details

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Payment")
class ProcessPayment:
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    order_id = Identifier(required=True)
    method = String(required=True, max_length=20, choices=PaymentMethod)
    card_number = String(max_length=19)
    card_expiry = String(max_length=7)
    card_cvv = String(max_length=4)
    phone_number = String(max_length=20)


@marketplace.command(part_of="Payment")
class RefundPayment:
    actor_id = Identifier(required=True)
    actor_role = String(required=True, max_length=20)
    payment_id = Identifier(required=True)


@marketplace.command_handler(part_of=Payment)
class PaymentHandler:
    @handle(ProcessPayment)
    def process_payment(self, command):
        actor = Actor.from_command(command)
        order_repo = current_domain.repository_for(Order)
        payment_repo = current_domain.repository_for(Payment)

        order = order_repo.get(command.order_id)
        ensure_order_owner(actor, order)
        if order.status != OrderStatus.PENDING.value:
            raise NotPending()
        if payment_repo.has_completed(str(order.id)):
            raise AlreadyPaid()

        payment = Payment.start(
            order_id=order.id,
            user_id=actor.user_id,
            amount=order.total_amount,
            method=command.method,
        )
        payment_repo.add(payment)

        details = {
            "payment_id": str(payment.id),
            "card_number": command.card_number,
            "card_expiry": command.card_expiry,
            "card_cvv": command.card_cvv,
            "phone_number": command.phone_number,
        }
        missing = missing_details(command.method, details)
        if missing:
            payment.fail(make_reference(), f"Missing payment details: {', '.join(missing)}")
        else:
            result = get_gateway().charge(order.total_amount, command.method, details)
            if result.success:
                payment.complete(result.reference)
                order.change_status(OrderStatus.PROCESSING.value)
                order_repo.add(order)
            else:
                payment.fail(result.reference, result.failure_reason)

        payment_repo.add(payment)
        logger.info(
            "Payment processed",
            payment_id=str(payment.id),
            order_id=str(order.id),
            status=payment.status,
            reference=payment.reference,
        )
        return str(payment.id)

    @handle(RefundPayment)
    def refund_payment(self, command):
        require(Actor.from_command(command), Capability.REFUND_PAYMENTS)

        repo = current_domain.repository_for(Payment)
        payment = repo.get(command.payment_id)
        payment.refund()
        repo.add(payment)
        logger.info("Payment refunded", payment_id=str(payment.id), order_id=str(payment.order_id))
