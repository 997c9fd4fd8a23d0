"""Repository contracts shared by the local store and the remote API client."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from jobboard.types import Application, ApplicationDraft, Job, JobDraft, JobUpdate


@runtime_checkable
class JobRepositoryContract(Protocol):
    def list_jobs(self) -> list[Job]: ...

    def get_job(self, job_id: str) -> Job | None: ...

    def search_jobs(self, query: str = "", location: str | None = None, job_type: str | None = None) -> list[Job]: ...

    def create_job(self, draft: JobDraft) -> Job: ...

    def update_job(self, job_id: str, updates: JobUpdate) -> Job | None: ...


@runtime_checkable
class ApplicationRepositoryContract(Protocol):
    def list_applications(self) -> list[Application]: ...

    def get_application(self, application_id: str) -> Application | None: ...

    def list_applications_by_candidate(self, candidate_id: str) -> list[Application]: ...

    def list_applications_by_job(self, job_id: str) -> list[Application]: ...

    def has_applied(self, job_id: str, candidate_id: str) -> bool: ...

    def create_application(self, draft: ApplicationDraft) -> Application: ...

    def update_application_status(self, application_id: str, new_status: str) -> Application | None: ...
