"""Payment gateway port (abstract interface).

Handlers only ever talk to this interface, so the simulated gateway used by
default can be replaced by a deterministic one in tests or a real provider
in production without touching payment logic.
"""

import random
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ChargeResult:
    """Result of a charge attempt."""

    success: bool
    reference: str
    failure_reason: str | None = None


def make_reference(rng: random.Random | None = None) -> str:
    """Opaque payment reference: ``PAY_<epoch millis>_<9 random chars>``."""
    source = rng or random
    suffix = "".join(source.choice("abcdefghijklmnopqrstuvwxyz0123456789") for _ in range(9))
    return f"PAY_{int(time.time() * 1000)}_{suffix}"


class PaymentGateway(ABC):
    @abstractmethod
    def charge(self, amount: float, method: str, details: dict) -> ChargeResult:
        """Attempt to collect ``amount`` using ``method``.

        ``details`` holds the id of the pending payment being charged, usable
        as an idempotency key, and the method-specific fields (card number,
        expiry and cvv, or phone number). Never raises for a declined charge; the
        outcome is in the returned ChargeResult.
        """
        ...
