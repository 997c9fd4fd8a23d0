"""Signed bearer tokens for the HTTP API."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt

from jobboard.errors import AuthenticationError
from jobboard.ids import new_id

ALGORITHM = "HS256"
DEFAULT_TOKEN_TTL = timedelta(hours=12)


def issue_token(user_id: str, secret_key: str, *, ttl: timedelta = DEFAULT_TOKEN_TTL) -> str:
    now = datetime.now(UTC)
    claims = {"sub": user_id, "iat": now, "exp": now + ttl, "jti": new_id()}
    return jwt.encode(claims, secret_key, algorithm=ALGORITHM)


def read_token(token: str, secret_key: str) -> str:
    """Return the user id carried by ``token`` or raise ``AuthenticationError``."""
    try:
        claims = jwt.decode(
            token.strip(),
            secret_key,
            algorithms=[ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Bearer token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthenticationError("Invalid bearer token") from exc
    return str(claims["sub"])
