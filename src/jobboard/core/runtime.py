from __future__ import annotations

from jobboard.config import get_settings
from jobboard.core.mailer import EmailSender, build_email_sender

_EMAIL_SENDER: EmailSender | None = None


def get_email_sender() -> EmailSender:
    global _EMAIL_SENDER
    if _EMAIL_SENDER is None:
        _EMAIL_SENDER = build_email_sender(get_settings())
    return _EMAIL_SENDER


def set_email_sender(sender: EmailSender | None) -> None:
    global _EMAIL_SENDER
    _EMAIL_SENDER = sender
