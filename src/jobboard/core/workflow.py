"""Application status state machine.

``pending`` may move to any review outcome, ``reviewing`` and ``shortlisted``
may move between each other or to a decision, and ``accepted`` / ``rejected``
are terminal.
"""

from __future__ import annotations

from jobboard.errors import IllegalTransitionError, ValidationError
from jobboard.types import APPLICATION_STATUSES

ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    "pending": frozenset({"reviewing", "shortlisted", "accepted", "rejected"}),
    "reviewing": frozenset({"shortlisted", "accepted", "rejected"}),
    "shortlisted": frozenset({"reviewing", "accepted", "rejected"}),
    "accepted": frozenset(),
    "rejected": frozenset(),
}

TERMINAL_STATUSES = frozenset(status for status, targets in ALLOWED_TRANSITIONS.items() if not targets)


def can_transition(current: str, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def allowed_targets(current: str) -> list[str]:
    targets = ALLOWED_TRANSITIONS.get(current, frozenset())
    return [status for status in APPLICATION_STATUSES if status in targets]


def ensure_transition(current: str, target: str) -> None:
    if target not in APPLICATION_STATUSES:
        raise ValidationError(["status"], f"unknown application status '{target}'")
    if not can_transition(current, target):
        raise IllegalTransitionError(current, target)
