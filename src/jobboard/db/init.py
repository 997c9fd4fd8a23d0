from __future__ import annotations

import logging
from pathlib import Path

from jobboard.config import get_settings
from jobboard.db import models  # noqa: F401
from jobboard.db.base import Base
from jobboard.db.session import SessionLocal, engine, sqlite_file
from jobboard.db.store import SqlStore

logger = logging.getLogger(__name__)


def data_directories() -> list[Path]:
    settings = get_settings()
    paths = [settings.data_dir]
    db_file = sqlite_file(settings.database_url)
    if db_file is not None and db_file.parent not in paths:
        paths.append(db_file.parent)
    return paths


def init_database() -> dict[str, list[str]]:
    """Create the schema if missing and seed the default collections."""
    for path in data_directories():
        path.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine)

    with SessionLocal() as session:
        seeded = SqlStore(session).initialize_defaults()
    logger.info("Database ready url=%s seeded=%s", engine.url.render_as_string(hide_password=True), seeded or "none")
    return {"seeded_keys": seeded}
