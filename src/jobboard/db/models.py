from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jobboard.db.base import Base, TimestampMixin


class StoreEntry(TimestampMixin, Base):
    """One key of the key-value substrate; the value is a JSON document."""

    __tablename__ = "store_entries"

    key: Mapped[str] = mapped_column(String(120), primary_key=True)
    value_json: Mapped[str] = mapped_column(Text, nullable=False)
