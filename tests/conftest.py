from __future__ import annotations

import os
import tempfile
from pathlib import Path

os.environ.setdefault("DATABASE_URL", f"sqlite:///{Path(tempfile.gettempdir()) / 'jobboard_test.db'}")
os.environ.setdefault("APP_ENV", "test")

import pytest

from jobboard.core.mailer import LogEmailSender
from jobboard.core.runtime import set_email_sender
from jobboard.db.base import Base
from jobboard.db.session import engine


@pytest.fixture(autouse=True)
def reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(autouse=True)
def email_outbox() -> LogEmailSender:
    sender = LogEmailSender()
    set_email_sender(sender)
    yield sender
    set_email_sender(None)
