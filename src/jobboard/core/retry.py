"""Backoff for transient transport failures, used around SMTP delivery."""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


def backoff_delays(attempts: int, base_delay: float) -> list[float]:
    """Waits between consecutive attempts: ``base_delay`` doubled each time."""
    return [base_delay * 2**step for step in range(attempts - 1)]


def retry(
    *,
    attempts: int = 3,
    base_delay: float = 1.0,
    retryable: tuple[type[BaseException], ...] = (OSError,),
) -> Callable:
    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            for delay in backoff_delays(attempts, base_delay):
                try:
                    return fn(*args, **kwargs)
                except retryable as exc:
                    logger.warning("%s failed (%s); retrying in %.1fs", fn.__name__, exc, delay)
                    time.sleep(delay)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
