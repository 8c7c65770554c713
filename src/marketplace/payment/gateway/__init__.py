"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- SimulatedGateway by default (``PAYMENT_GATEWAY=simulated``)
- FakeGateway for deterministic tests (``PAYMENT_GATEWAY=fake``)
"""

from marketplace.config import float_setting, setting
from marketplace.payment.gateway.fake_adapter import FakeGateway
from marketplace.payment.gateway.port import PaymentGateway
from marketplace.payment.gateway.simulated import SimulatedGateway

_current_gateway: PaymentGateway | None = None


def _build_default() -> PaymentGateway:
    kind = setting("PAYMENT_GATEWAY", "simulated")
    if kind == "fake":
        return FakeGateway()
    if kind == "simulated":
        return SimulatedGateway(
            success_rate=float_setting("PAYMENT_SUCCESS_RATE", 0.9),
            delay=float_setting("PAYMENT_DELAY_SECONDS", 1.0),
        )
    raise ValueError(f"Unknown payment gateway: {kind}")


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, building the configured default on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _build_default()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
