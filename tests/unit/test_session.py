from pathlib import Path

from jobboard.db.session import sqlite_file


def test_sqlite_file_for_file_urls() -> None:
    assert sqlite_file("sqlite:///./data/jobboard.db") == Path("./data/jobboard.db")
    assert sqlite_file("sqlite:////tmp/x/jobboard.db") == Path("/tmp/x/jobboard.db")


def test_sqlite_file_ignores_memory_and_other_backends() -> None:
    assert sqlite_file("sqlite://") is None
    assert sqlite_file("sqlite:///:memory:") is None
    assert sqlite_file("postgresql://user:pw@localhost/jobs") is None
