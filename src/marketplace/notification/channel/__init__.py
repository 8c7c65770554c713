"""Email channel registry.

Returns a singleton adapter chosen by the ``EMAIL_ADAPTER`` environment
variable: ``fake`` (default, records messages in memory) or ``smtp``.
"""

import os

from marketplace.notification.channel.email_port import EmailPort

_email_channel: EmailPort | None = None


def get_email_channel() -> EmailPort:
    global _email_channel
    if _email_channel is None:
        adapter = os.environ.get("EMAIL_ADAPTER", "fake")
        if adapter == "fake":
            from marketplace.notification.channel.fake_email import FakeEmailAdapter

            _email_channel = FakeEmailAdapter()
        elif adapter == "smtp":
            from marketplace.notification.channel.smtp_email import SmtpEmailAdapter

            _email_channel = SmtpEmailAdapter()
        else:
            raise ValueError(f"Unknown email adapter: {adapter}")
    return _email_channel


def set_email_channel(channel: EmailPort) -> None:
    global _email_channel
    _email_channel = channel


def reset_channels() -> None:
    """Drop the singleton so the next call rebuilds it (useful for testing)."""
    global _email_channel
    _email_channel = None
