"""Durable key-value storage for the job board collections.

Every collection is read whole, changed in memory and written back whole.
There is no locking: the store assumes a single writer at a time. Two
processes sharing one database can lose each other's updates when their
read-modify-write cycles interleave.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from functools import lru_cache
from typing import TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from jobboard.db.models import StoreEntry
from jobboard.db.seed import demo_jobs
from jobboard.errors import StorageCorruptionError
from jobboard.types import Record

logger = logging.getLogger(__name__)

JOBS_KEY = "jobs"
APPLICATIONS_KEY = "applications"
USERS_KEY = "users"
NOTIFICATIONS_KEY = "notifications"
CURRENT_USER_KEY = "currentUser"

COLLECTION_KEYS: tuple[str, ...] = (JOBS_KEY, APPLICATIONS_KEY, USERS_KEY, NOTIFICATIONS_KEY)

RecordT = TypeVar("RecordT", bound=Record)


@lru_cache(maxsize=None)
def _list_adapter(model: type[Record]) -> TypeAdapter:
    return TypeAdapter(list[model])


class Store:
    """Shared serialization and unit-of-work logic; subclasses supply raw storage."""

    def __init__(self) -> None:
        self._staged: dict[str, str | None] | None = None

    def _load_raw(self, key: str) -> str | None:
        raise NotImplementedError

    def _save_raw(self, changes: dict[str, str | None]) -> None:
        """Apply all changes at once. ``None`` deletes the key."""
        raise NotImplementedError

    def _get_raw(self, key: str) -> str | None:
        if self._staged is not None and key in self._staged:
            return self._staged[key]
        return self._load_raw(key)

    def _put_raw(self, key: str, raw: str | None) -> None:
        if self._staged is not None:
            self._staged[key] = raw
        else:
            self._save_raw({key: raw})

    @property
    def in_transaction(self) -> bool:
        return self._staged is not None

    @contextmanager
    def transaction(self) -> Iterator[Store]:
        """Stage every write made inside the block and commit them together.

        Nested blocks join the outermost one. If the block raises, nothing is
        written.
        """
        if self._staged is not None:
            yield self
            return

        staged: dict[str, str | None] = {}
        self._staged = staged
        try:
            yield self
        finally:
            self._staged = None
        if staged:
            self._save_raw(staged)

    def has_key(self, key: str) -> bool:
        return self._get_raw(key) is not None

    def read_collection(self, key: str, model: type[RecordT]) -> list[RecordT]:
        raw = self._get_raw(key)
        if raw is None:
            return []
        try:
            return _list_adapter(model).validate_json(raw)
        except PydanticValidationError as exc:
            logger.error("Corrupt collection key=%s errors=%d", key, exc.error_count())
            raise StorageCorruptionError(key, exc.errors()[0]["msg"]) from exc

    def write_collection(self, key: str, items: Iterable[Record]) -> None:
        payload = [item.to_json_dict() for item in items]
        self._put_raw(key, json.dumps(payload))

    def read_value(self, key: str, model: type[RecordT]) -> RecordT | None:
        raw = self._get_raw(key)
        if raw is None:
            return None
        try:
            return model.model_validate_json(raw)
        except PydanticValidationError as exc:
            logger.error("Corrupt value key=%s", key)
            raise StorageCorruptionError(key, exc.errors()[0]["msg"]) from exc

    def write_value(self, key: str, item: Record) -> None:
        self._put_raw(key, json.dumps(item.to_json_dict()))

    def delete(self, key: str) -> None:
        self._put_raw(key, None)

    def initialize_defaults(self) -> list[str]:
        """Seed the demo job catalog and an empty application list if absent."""
        seeded: list[str] = []
        with self.transaction():
            if not self.has_key(JOBS_KEY):
                self.write_collection(JOBS_KEY, demo_jobs())
                seeded.append(JOBS_KEY)
            if not self.has_key(APPLICATIONS_KEY):
                self.write_collection(APPLICATIONS_KEY, [])
                seeded.append(APPLICATIONS_KEY)
        if seeded:
            logger.info("Seeded store defaults keys=%s", ",".join(seeded))
        return seeded

    def reset_to_defaults(self, keys: Sequence[str] | None = None) -> list[str]:
        """Drop the given keys (all collections by default) and re-seed."""
        targets = list(keys) if keys else list(COLLECTION_KEYS)
        with self.transaction():
            for key in targets:
                self.delete(key)
            self.initialize_defaults()
        logger.warning("Reset store keys=%s", ",".join(targets))
        return targets


class SqlStore(Store):
    def __init__(self, session: Session):
        super().__init__()
        self.session = session

    def _load_raw(self, key: str) -> str | None:
        entry = self.session.get(StoreEntry, key)
        return entry.value_json if entry else None

    def _save_raw(self, changes: dict[str, str | None]) -> None:
        try:
            for key, raw in changes.items():
                entry = self.session.get(StoreEntry, key)
                if raw is None:
                    if entry is not None:
                        self.session.delete(entry)
                    continue
                if entry is None:
                    self.session.add(StoreEntry(key=key, value_json=raw))
                else:
                    entry.value_json = raw
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise


class MemoryStore(Store):
    def __init__(self, initial: dict[str, str] | None = None):
        super().__init__()
        self._data: dict[str, str] = dict(initial or {})

    def _load_raw(self, key: str) -> str | None:
        return self._data.get(key)

    def _save_raw(self, changes: dict[str, str | None]) -> None:
        for key, raw in changes.items():
            if raw is None:
                self._data.pop(key, None)
            else:
                self._data[key] = raw
