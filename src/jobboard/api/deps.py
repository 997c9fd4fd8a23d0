from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from jobboard.config import get_settings
from jobboard.core.auth import read_token
from jobboard.core.board import JobBoard
from jobboard.db.session import get_db_session
from jobboard.db.store import SqlStore
from jobboard.errors import AuthenticationError
from jobboard.types import User


def get_db() -> Generator[Session, None, None]:
    yield from get_db_session()


def get_board(db: Session = Depends(get_db)) -> JobBoard:
    return JobBoard(SqlStore(db))


def get_current_user(
    authorization: str | None = Header(default=None),
    board: JobBoard = Depends(get_board),
) -> User:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(status_code=401, detail="Missing bearer token")
    try:
        user_id = read_token(token, get_settings().secret_key)
    except AuthenticationError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    user = board.users.get(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user
