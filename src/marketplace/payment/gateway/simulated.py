"""Simulated gateway — stands in for a real provider.

Waits ``delay`` seconds, then approves with probability ``success_rate``.
Both the random source and the sleep function are injectable so the
outcome can be made reproducible.
"""

import random
import time
from collections.abc import Callable

import structlog

from marketplace.payment.gateway.port import ChargeResult, PaymentGateway, make_reference

logger = structlog.get_logger(__name__)

DEFAULT_SUCCESS_RATE = 0.9
DEFAULT_DELAY_SECONDS = 1.0


class SimulatedGateway(PaymentGateway):
    def __init__(
        self,
        success_rate: float = DEFAULT_SUCCESS_RATE,
        delay: float = DEFAULT_DELAY_SECONDS,
        rng: random.Random | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not 0.0 <= success_rate <= 1.0:
            raise ValueError("success_rate must be between 0 and 1")
        self.success_rate = success_rate
        self.delay = delay
        self.rng = rng or random.Random()
        self.sleep = sleep

    def charge(self, amount: float, method: str, details: dict) -> ChargeResult:
        reference = make_reference(self.rng)
        if self.delay > 0:
            self.sleep(self.delay)

        approved = self.rng.random() < self.success_rate
        logger.info("Simulated charge", reference=reference, amount=amount, method=method, approved=approved)
        if approved:
            return ChargeResult(success=True, reference=reference)
        return ChargeResult(success=False, reference=reference, failure_reason="Payment declined")
