from __future__ import annotations

from jobboard.types import ApplicationStatus, Record, User


class SignUpRequest(Record):
    email: str
    name: str
    role: str = "candidate"
    company: str | None = None
    phone: str | None = None


class SignInRequest(Record):
    email: str


class TokenResponse(Record):
    token: str
    user: User


class ApplyRequest(Record):
    job_id: str
    cover_letter: str = ""
    resume_url: str | None = None


class StatusUpdateRequest(Record):
    status: ApplicationStatus


class UnreadCountResponse(Record):
    unread: int


class ReadAllResponse(Record):
    updated: int
