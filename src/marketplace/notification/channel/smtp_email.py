"""SMTP email adapter.

Connection settings come from ``SMTP_HOST``, ``SMTP_PORT``, ``SMTP_USER``
and ``SMTP_PASS``; the sender address from ``MAIL_FROM``. A connection is
opened per message with STARTTLS.
"""

import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

import structlog

from marketplace.config import int_setting, setting
from marketplace.notification.channel.email_port import FAILED, SENT, EmailPort

logger = structlog.get_logger(__name__)


class SmtpEmailAdapter(EmailPort):
    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        username: str | None = None,
        password: str | None = None,
        sender: str | None = None,
        timeout: float = 10.0,
    ):
        self.host = host or setting("SMTP_HOST", "localhost")
        self.port = port or int_setting("SMTP_PORT", 587)
        self.username = username if username is not None else setting("SMTP_USER")
        self.password = password if password is not None else setting("SMTP_PASS")
        self.sender = sender or setting("MAIL_FROM", "noreply@marketplace.com")
        self.timeout = timeout

    def _build_message(self, to: str, subject: str, body: str, html_body: str | None) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid()
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")
        return message

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        message = self._build_message(to, subject, body, html_body)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as client:
                client.starttls()
                if self.username:
                    client.login(self.username, self.password or "")
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("SMTP delivery failed", to=to, subject=subject, error=str(exc))
            return {"message_id": None, "status": FAILED, "error": str(exc)}

        return {"message_id": message["Message-ID"], "status": SENT}
