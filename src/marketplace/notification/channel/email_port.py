"""Email channel contract consumed by ``notification.dispatch.notify``."""

from abc import ABC, abstractmethod

SENT = "sent"
FAILED = "failed"


class EmailPort(ABC):
    """Delivers one rendered notification to one recipient.

    Adapters report the outcome instead of raising: ``notify`` treats any
    ``status`` other than ``SENT`` as undelivered, logs the ``error`` field
    and returns False.
    """

    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        """Hand the message to the transport.

        ``html_body``, when given, goes out as an HTML alternative to the
        plain-text ``body``. Returns ``{"message_id", "status", "error"}``
        where ``status`` is ``SENT`` or ``FAILED`` and ``message_id`` is None
        on failure.
        """
