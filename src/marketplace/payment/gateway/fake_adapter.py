"""Configurable fake payment gateway for tests.

Outcomes are decided by ``configure`` rather than by chance, and every
charge is recorded in ``calls``.
"""

from uuid import uuid4

from marketplace.payment.gateway.port import ChargeResult, PaymentGateway


class FakeGateway(PaymentGateway):
    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Payment declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Payment declined") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def charge(self, amount: float, method: str, details: dict) -> ChargeResult:
        self.calls.append({"amount": amount, "method": method, "details": dict(details)})

        reference = f"PAY_FAKE_{uuid4().hex[:12]}"
        if self.should_succeed:
            return ChargeResult(success=True, reference=reference)
        return ChargeResult(success=False, reference=reference, failure_reason=self.failure_reason)
