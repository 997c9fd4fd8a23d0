from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.mime.text import MIMEText
from typing import Protocol

from jobboard.config import Settings
from jobboard.core.retry import retry
from jobboard.errors import SendError
from jobboard.ids import utc_now_iso

email_logger = logging.getLogger("jobboard.email")


@dataclass(frozen=True, slots=True)
class EmailMessage:
    to: str
    subject: str
    body: str
    sent_at: str


class EmailSender(Protocol):
    def send(self, to: str, subject: str, body: str) -> None:
        """Deliver one message or raise ``SendError``."""


class LogEmailSender:
    """Simulated transport: one structured log record per message, plus an outbox."""

    def __init__(self) -> None:
        self.outbox: list[EmailMessage] = []

    def send(self, to: str, subject: str, body: str) -> None:
        message = EmailMessage(to=to, subject=subject, body=body, sent_at=utc_now_iso())
        email_logger.info(
            "Email notification sent to=%s subject=%s",
            to,
            subject,
            extra={"email_to": to, "email_subject": subject, "email_body": body},
        )
        self.outbox.append(message)


@retry(attempts=3, base_delay=3.0, retryable=(smtplib.SMTPException, OSError))
def _smtp_send(host: str, port: int, user: str, password: str, from_addr: str, to_addr: str, msg: MIMEText) -> None:
    with smtplib.SMTP(host, port) as server:
        server.starttls()
        if user:
            server.login(user, password)
        server.sendmail(from_addr, [to_addr], msg.as_string())


class SmtpEmailSender:
    def __init__(self, *, host: str, port: int, user: str, password: str, from_addr: str):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.from_addr = from_addr

    def send(self, to: str, subject: str, body: str) -> None:
        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = self.from_addr
        msg["To"] = to
        try:
            _smtp_send(self.host, self.port, self.user, self.password, self.from_addr, to, msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise SendError(str(exc)[:150]) from exc
        email_logger.info("Email sent via SMTP to=%s subject=%s", to, subject)


def build_email_sender(settings: Settings) -> EmailSender:
    if settings.email_backend == "smtp":
        if not settings.smtp_host:
            raise ValueError("email_backend=smtp requires SMTP_HOST")
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            user=settings.smtp_user,
            password=settings.smtp_password,
            from_addr=settings.email_from,
        )
    return LogEmailSender()
