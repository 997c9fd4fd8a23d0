"""HTTP client for the job board API.

``RemoteJobRepository`` and ``RemoteApplicationRepository`` satisfy the same
contracts as the local repositories, so callers can swap transports without
changing call sites. The candidate and poster identities always come from
the bearer token; identity fields on drafts are ignored by the server.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from jobboard.errors import (
    AuthenticationError,
    DuplicateApplicationError,
    DuplicateUserError,
    IllegalTransitionError,
    JobBoardError,
    PermissionDeniedError,
    RemoteAPIError,
    StorageCorruptionError,
    ValidationError,
)
from jobboard.types import (
    Application,
    ApplicationDraft,
    Job,
    JobDraft,
    JobUpdate,
    Notification,
    PlatformSummary,
    ProfileUpdate,
    User,
)

logger = logging.getLogger(__name__)


def _error_from_response(status_code: int, payload: dict[str, Any]) -> JobBoardError:
    detail = str(payload.get("detail", ""))
    context = payload.get("context") or {}
    error = payload.get("error")

    if error == "ValidationError":
        return ValidationError(context.get("fields", []), detail)
    if error == "DuplicateApplicationError":
        return DuplicateApplicationError(context.get("job_id", ""), context.get("candidate_id", ""))
    if error == "DuplicateUserError":
        return DuplicateUserError(context.get("email", ""))
    if error == "IllegalTransitionError":
        return IllegalTransitionError(context.get("current", ""), context.get("target", ""))
    if error == "StorageCorruptionError":
        return StorageCorruptionError(context.get("key", ""), context.get("reason", ""))
    if status_code == 422:
        return ValidationError(context.get("fields", []), detail)
    if status_code == 401:
        return AuthenticationError(detail)
    if status_code == 403:
        return PermissionDeniedError(detail)
    return RemoteAPIError(status_code, detail)


class RemoteJobBoardClient:
    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        session: Any | None = None,
        timeout_sec: int = 30,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout_sec = timeout_sec

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        allow_missing: bool = False,
    ) -> Any:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        response = self.session.request(
            method,
            f"{self.base_url}/api{path}",
            json=json,
            params=params,
            headers=headers,
            timeout=self.timeout_sec,
        )
        if allow_missing and response.status_code == 404:
            return None
        if response.status_code >= 400:
            try:
                payload = response.json()
            except ValueError:
                payload = {"detail": response.text}
            if not isinstance(payload, dict):
                payload = {"detail": str(payload)}
            logger.debug("API error %s %s status=%s", method, path, response.status_code)
            raise _error_from_response(response.status_code, payload)
        return response.json()

    def sign_up(self, *, email: str, name: str, role: str, company: str | None = None) -> User:
        data = self.request("POST", "/signup", json={"email": email, "name": name, "role": role, "company": company})
        self.token = data["token"]
        return User.model_validate(data["user"])

    def sign_in(self, email: str) -> User:
        data = self.request("POST", "/signin", json={"email": email})
        self.token = data["token"]
        return User.model_validate(data["user"])

    def get_profile(self) -> User:
        return User.model_validate(self.request("GET", "/profile"))

    def update_profile(self, update: ProfileUpdate) -> User:
        payload = update.model_dump(mode="json", by_alias=True, exclude_none=True)
        return User.model_validate(self.request("PATCH", "/profile", json=payload))

    def notifications(self) -> list[Notification]:
        return [Notification.model_validate(item) for item in self.request("GET", "/notifications")]

    def unread_count(self) -> int:
        return int(self.request("GET", "/notifications/unread-count")["unread"])

    def mark_all_read(self) -> int:
        return int(self.request("POST", "/notifications/read-all")["updated"])

    def analytics(self) -> PlatformSummary:
        return PlatformSummary.model_validate(self.request("GET", "/analytics"))


class RemoteJobRepository:
    def __init__(self, client: RemoteJobBoardClient):
        self.client = client

    def list_jobs(self) -> list[Job]:
        return [Job.model_validate(item) for item in self.client.request("GET", "/jobs")]

    def search_jobs(self, query: str = "", location: str | None = None, job_type: str | None = None) -> list[Job]:
        params = {"q": query, "location": location, "type": job_type}
        data = self.client.request("GET", "/jobs", params={k: v for k, v in params.items() if v})
        return [Job.model_validate(item) for item in data]

    def get_job(self, job_id: str) -> Job | None:
        data = self.client.request("GET", f"/jobs/{job_id}", allow_missing=True)
        return Job.model_validate(data) if data is not None else None

    def create_job(self, draft: JobDraft) -> Job:
        data = self.client.request("POST", "/jobs", json=draft.to_json_dict())
        return Job.model_validate(data)

    def update_job(self, job_id: str, updates: JobUpdate) -> Job | None:
        payload = updates.model_dump(mode="json", by_alias=True, exclude_none=True)
        data = self.client.request("PATCH", f"/jobs/{job_id}", json=payload, allow_missing=True)
        return Job.model_validate(data) if data is not None else None


class RemoteApplicationRepository:
    def __init__(self, client: RemoteJobBoardClient):
        self.client = client

    def _list(self, **filters: str) -> list[Application]:
        data = self.client.request("GET", "/applications", params=filters or None)
        return [Application.model_validate(item) for item in data]

    def list_applications(self) -> list[Application]:
        return self._list()

    def get_application(self, application_id: str) -> Application | None:
        data = self.client.request("GET", f"/applications/{application_id}", allow_missing=True)
        return Application.model_validate(data) if data is not None else None

    def list_applications_by_candidate(self, candidate_id: str) -> list[Application]:
        return self._list(candidateId=candidate_id)

    def list_applications_by_job(self, job_id: str) -> list[Application]:
        return self._list(jobId=job_id)

    def has_applied(self, job_id: str, candidate_id: str) -> bool:
        return bool(self._list(jobId=job_id, candidateId=candidate_id))

    def create_application(self, draft: ApplicationDraft) -> Application:
        payload = {"jobId": draft.job_id, "coverLetter": draft.cover_letter, "resumeUrl": draft.resume_url}
        return Application.model_validate(self.client.request("POST", "/applications", json=payload))

    def update_application_status(self, application_id: str, new_status: str) -> Application | None:
        data = self.client.request(
            "PATCH",
            f"/applications/{application_id}/status",
            json={"status": new_status},
            allow_missing=True,
        )
        return Application.model_validate(data) if data is not None else None
