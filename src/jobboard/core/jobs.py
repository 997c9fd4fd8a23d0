from __future__ import annotations

import logging

from jobboard.core.events import EventDispatcher, JobPosted
from jobboard.db.store import JOBS_KEY, Store
from jobboard.errors import ValidationError
from jobboard.ids import new_id, utc_now_iso
from jobboard.types import Job, JobDraft, JobUpdate

logger = logging.getLogger(__name__)

REQUIRED_JOB_FIELDS: tuple[str, ...] = ("title", "company", "location", "description")


def clean_lines(items: list[str]) -> list[str]:
    return [item.strip() for item in items if item and item.strip()]


class JobRepository:
    def __init__(self, store: Store, *, dispatcher: EventDispatcher | None = None):
        self.store = store
        self.dispatcher = dispatcher or EventDispatcher()

    def list_jobs(self) -> list[Job]:
        self.store.initialize_defaults()
        return self.store.read_collection(JOBS_KEY, Job)

    def get_job(self, job_id: str) -> Job | None:
        return next((job for job in self.list_jobs() if job.id == job_id), None)

    def list_jobs_by_poster(self, user_id: str) -> list[Job]:
        return [job for job in self.list_jobs() if job.posted_by == user_id]

    def list_locations(self) -> list[str]:
        return list(dict.fromkeys(job.location for job in self.list_jobs()))

    def search_jobs(
        self,
        query: str = "",
        location: str | None = None,
        job_type: str | None = None,
    ) -> list[Job]:
        results = self.list_jobs()
        needle = query.strip().lower()
        if needle:
            results = [
                job
                for job in results
                if needle in job.title.lower()
                or needle in job.company.lower()
                or needle in job.description.lower()
            ]
        if location and location != "all":
            results = [job for job in results if location in job.location]
        if job_type and job_type != "all":
            results = [job for job in results if job.type == job_type]
        return results

    def create_job(self, draft: JobDraft) -> Job:
        requirements = clean_lines(draft.requirements)
        responsibilities = clean_lines(draft.responsibilities)

        missing = [name for name in REQUIRED_JOB_FIELDS if not getattr(draft, name).strip()]
        if not requirements:
            missing.append("requirements")
        if not responsibilities:
            missing.append("responsibilities")
        if not draft.posted_by.strip():
            missing.append("posted_by")
        if missing:
            raise ValidationError(missing)

        job = Job(
            id=new_id(),
            title=draft.title.strip(),
            company=draft.company.strip(),
            location=draft.location.strip(),
            type=draft.type,
            salary=draft.salary.strip(),
            description=draft.description.strip(),
            requirements=requirements,
            responsibilities=responsibilities,
            posted_by=draft.posted_by,
            posted_date=utc_now_iso(),
            status="open",
            applicant_count=0,
        )
        with self.store.transaction():
            jobs = self.list_jobs()
            jobs.insert(0, job)
            self.store.write_collection(JOBS_KEY, jobs)
            self.dispatcher.publish(JobPosted(job=job))

        logger.info("Created job id=%s title=%s posted_by=%s", job.id, job.title, job.posted_by)
        return job

    def increment_applicant_count(self, job_id: str) -> Job | None:
        with self.store.transaction():
            jobs = self.list_jobs()
            index = next((i for i, job in enumerate(jobs) if job.id == job_id), None)
            if index is None:
                logger.warning("Applicant count not updated; job %s not found", job_id)
                return None
            updated = jobs[index].model_copy(update={"applicant_count": jobs[index].applicant_count + 1})
            jobs[index] = updated
            self.store.write_collection(JOBS_KEY, jobs)
        return updated

    def update_job(self, job_id: str, updates: JobUpdate) -> Job | None:
        changes = updates.model_dump(exclude_none=True)
        for name in ("requirements", "responsibilities"):
            if name in changes:
                changes[name] = clean_lines(changes[name])
        blank = [name for name in REQUIRED_JOB_FIELDS if name in changes and not changes[name].strip()]
        blank += [name for name in ("requirements", "responsibilities") if name in changes and not changes[name]]
        if blank:
            raise ValidationError(blank)

        with self.store.transaction():
            jobs = self.list_jobs()
            index = next((i for i, job in enumerate(jobs) if job.id == job_id), None)
            if index is None:
                return None
            updated = Job.model_validate(jobs[index].model_dump() | changes)
            jobs[index] = updated
            self.store.write_collection(JOBS_KEY, jobs)

        logger.info("Updated job id=%s fields=%s", job_id, ",".join(sorted(changes)))
        return updated
