"""Exception hierarchy shared by the store, repositories, API and client."""

from __future__ import annotations


class JobBoardError(Exception):
    """Base class for every error raised by the job board."""


class ValidationError(JobBoardError):
    """Required fields were missing or blank; nothing was written."""

    def __init__(self, fields: list[str], message: str | None = None):
        self.fields = list(fields)
        if message is None:
            message = "missing required fields: " + ", ".join(self.fields)
        super().__init__(message)


class DuplicateApplicationError(JobBoardError):
    def __init__(self, job_id: str, candidate_id: str):
        self.job_id = job_id
        self.candidate_id = candidate_id
        super().__init__(f"candidate {candidate_id} already applied to job {job_id}")


class DuplicateUserError(JobBoardError):
    def __init__(self, email: str):
        self.email = email
        super().__init__("User with this email already exists")


class IllegalTransitionError(JobBoardError):
    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"cannot move application from '{current}' to '{target}'")


class StorageCorruptionError(JobBoardError):
    """A persisted value could not be decoded. Use ``Store.reset_to_defaults`` to recover."""

    def __init__(self, key: str, reason: str = ""):
        self.key = key
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"stored value for '{key}' is corrupt{detail}")


class PermissionDeniedError(JobBoardError):
    pass


class AuthenticationError(JobBoardError):
    pass


class SendError(JobBoardError):
    """An email transport failed to deliver a message."""


class RemoteAPIError(JobBoardError):
    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"remote API error {status_code}: {detail}")
