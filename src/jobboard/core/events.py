from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from jobboard.types import Application, Job

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ApplicationReceived:
    application: Application
    job: Job


@dataclass(frozen=True, slots=True)
class ApplicationStatusChanged:
    application: Application
    job: Job | None
    previous_status: str


@dataclass(frozen=True, slots=True)
class JobPosted:
    job: Job


DomainEvent = ApplicationReceived | ApplicationStatusChanged | JobPosted
EventHandler = Callable[[Any], None]


class EventDispatcher:
    """Synchronous fan-out of domain events to subscribed handlers.

    Repositories publish from inside the unit of work that produced the event,
    so handler writes commit together with the mutation. A handler that raises
    aborts the whole unit of work; nothing it or the mutation staged is written.
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)

    def publish(self, event: DomainEvent) -> int:
        handlers = list(self._handlers.get(type(event), []))
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.error("Event handler failed event=%s handler=%r", type(event).__name__, handler)
                raise
        return len(handlers)
