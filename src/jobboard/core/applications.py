from __future__ import annotations

import logging
from collections.abc import Iterable

from jobboard.core.events import ApplicationReceived, ApplicationStatusChanged, EventDispatcher
from jobboard.core.jobs import JobRepository
from jobboard.core.workflow import ensure_transition
from jobboard.db.store import APPLICATIONS_KEY, Store
from jobboard.errors import DuplicateApplicationError, ValidationError
from jobboard.ids import new_id, utc_now_iso
from jobboard.types import APPLICATION_STATUSES, Application, ApplicationDraft

logger = logging.getLogger(__name__)

REQUIRED_APPLICATION_FIELDS: tuple[str, ...] = ("job_id", "candidate_id", "candidate_name", "candidate_email")


def count_by_status(applications: Iterable[Application]) -> dict[str, int]:
    counts = {status: 0 for status in APPLICATION_STATUSES}
    for application in applications:
        counts[application.status] = counts.get(application.status, 0) + 1
    return counts


class ApplicationRepository:
    def __init__(self, store: Store, jobs: JobRepository, *, dispatcher: EventDispatcher | None = None):
        self.store = store
        self.jobs = jobs
        self.dispatcher = dispatcher or EventDispatcher()

    def list_applications(self) -> list[Application]:
        return self.store.read_collection(APPLICATIONS_KEY, Application)

    def get_application(self, application_id: str) -> Application | None:
        return next((app for app in self.list_applications() if app.id == application_id), None)

    def list_applications_by_candidate(self, candidate_id: str) -> list[Application]:
        return [app for app in self.list_applications() if app.candidate_id == candidate_id]

    def list_applications_by_job(self, job_id: str) -> list[Application]:
        return [app for app in self.list_applications() if app.job_id == job_id]

    def list_applications_for_poster(self, user_id: str) -> list[Application]:
        """Applications to jobs posted by ``user_id``, newest first."""
        job_ids = {job.id for job in self.jobs.list_jobs_by_poster(user_id)}
        mine = [app for app in self.list_applications() if app.job_id in job_ids]
        return sorted(mine, key=lambda app: app.applied_date, reverse=True)

    def has_applied(self, job_id: str, candidate_id: str) -> bool:
        return any(
            app.job_id == job_id and app.candidate_id == candidate_id for app in self.list_applications()
        )

    def create_application(self, draft: ApplicationDraft) -> Application:
        missing = [name for name in REQUIRED_APPLICATION_FIELDS if not getattr(draft, name).strip()]
        if missing:
            raise ValidationError(missing)

        with self.store.transaction():
            job = self.jobs.get_job(draft.job_id)
            if job is None:
                raise ValidationError(["job_id"], f"job {draft.job_id} does not exist")
            if job.status != "open":
                raise ValidationError(["job_id"], f"job {draft.job_id} is closed")
            if self.has_applied(draft.job_id, draft.candidate_id):
                raise DuplicateApplicationError(draft.job_id, draft.candidate_id)

            application = Application(
                id=new_id(),
                job_id=draft.job_id,
                candidate_id=draft.candidate_id,
                candidate_name=draft.candidate_name.strip(),
                candidate_email=draft.candidate_email.strip(),
                resume_url=draft.resume_url,
                cover_letter=draft.cover_letter,
                status="pending",
                applied_date=utc_now_iso(),
            )
            applications = self.list_applications()
            applications.append(application)
            self.store.write_collection(APPLICATIONS_KEY, applications)
            job = self.jobs.increment_applicant_count(job.id) or job
            self.dispatcher.publish(ApplicationReceived(application=application, job=job))

        logger.info(
            "Created application id=%s job_id=%s candidate_id=%s",
            application.id,
            application.job_id,
            application.candidate_id,
        )
        return application

    def update_application_status(self, application_id: str, new_status: str) -> Application | None:
        with self.store.transaction():
            applications = self.list_applications()
            index = next((i for i, app in enumerate(applications) if app.id == application_id), None)
            if index is None:
                return None
            current = applications[index]
            ensure_transition(current.status, new_status)
            updated = current.model_copy(update={"status": new_status})
            applications[index] = updated
            self.store.write_collection(APPLICATIONS_KEY, applications)
            self.dispatcher.publish(
                ApplicationStatusChanged(
                    application=updated,
                    job=self.jobs.get_job(updated.job_id),
                    previous_status=current.status,
                )
            )

        logger.info(
            "Application status changed id=%s %s -> %s",
            application_id,
            current.status,
            new_status,
        )
        return updated
