"""FastAPI endpoints for payments."""

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from protean.utils.globals import current_domain

from marketplace.api.schemas import PaymentResponse, ProcessPaymentRequest
from marketplace.api.security import actor_fields, current_actor
from marketplace.auth.actor import Actor
from marketplace.auth.policy import ensure_can_access_order, ensure_can_view_payment
from marketplace.domain import marketplace
from marketplace.ordering.order import Order
from marketplace.ordering.queries import seller_store_id
from marketplace.payment.payment import Payment
from marketplace.payment.processing import ProcessPayment, RefundPayment

payment_router = APIRouter(prefix="/payments", tags=["payments"])


def _process_off_loop(command) -> str:
    # Gateway charges block; worker threads need their own domain context
    with marketplace.domain_context():
        return marketplace.process(command, asynchronous=False)


def payment_response(payment: Payment) -> PaymentResponse:
    return PaymentResponse(
        id=str(payment.id),
        order_id=str(payment.order_id),
        user_id=str(payment.user_id),
        amount=payment.amount,
        method=payment.method,
        status=payment.status,
        reference=payment.reference,
        failure_reason=payment.failure_reason,
        created_at=payment.created_at,
    )


@payment_router.post("/process", status_code=201, response_model=PaymentResponse)
async def process_payment(body: ProcessPaymentRequest, actor: Actor = Depends(current_actor)) -> PaymentResponse:
    command = ProcessPayment(
        order_id=body.order_id,
        method=body.payment_method,
        card_number=body.card_number,
        card_expiry=body.card_expiry,
        card_cvv=body.card_cvv,
        phone_number=body.phone_number,
        **actor_fields(actor),
    )
    payment_id = await run_in_threadpool(_process_off_loop, command)
    return payment_response(current_domain.repository_for(Payment).get(payment_id))


@payment_router.get("/order/{order_id}", response_model=list[PaymentResponse])
async def payments_for_order(order_id: str, actor: Actor = Depends(current_actor)) -> list[PaymentResponse]:
    order = current_domain.repository_for(Order).get(order_id)
    ensure_can_access_order(actor, order, seller_store_id(actor))
    return [payment_response(p) for p in current_domain.repository_for(Payment).for_order(order_id)]


@payment_router.get("/{payment_id}", response_model=PaymentResponse)
async def get_payment(payment_id: str, actor: Actor = Depends(current_actor)) -> PaymentResponse:
    payment = current_domain.repository_for(Payment).get(payment_id)
    ensure_can_view_payment(actor, payment)
    return payment_response(payment)


@payment_router.put("/{payment_id}/refund", response_model=PaymentResponse)
async def refund_payment(payment_id: str, actor: Actor = Depends(current_actor)) -> PaymentResponse:
    current_domain.process(RefundPayment(payment_id=payment_id, **actor_fields(actor)), asynchronous=False)
    return payment_response(current_domain.repository_for(Payment).get(payment_id))
