from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

UserRole = Literal["admin", "recruiter", "candidate"]
JobType = Literal["Full-time", "Part-time", "Contract", "Internship"]
JobStatus = Literal["open", "closed"]
ApplicationStatus = Literal["pending", "reviewing", "shortlisted", "accepted", "rejected"]
NotificationType = Literal["application", "status_change", "new_job", "system"]

APPLICATION_STATUSES: tuple[str, ...] = ("pending", "reviewing", "shortlisted", "accepted", "rejected")
JOB_TYPES: tuple[str, ...] = ("Full-time", "Part-time", "Contract", "Internship")


class Record(BaseModel):
    """Stored and transmitted with camelCase keys, read by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class User(Record):
    id: str
    email: str
    name: str
    role: UserRole
    company: str | None = None
    phone: str | None = None
    created_at: str


class Job(Record):
    id: str
    title: str
    company: str
    location: str
    type: JobType = "Full-time"
    salary: str = ""
    description: str
    requirements: list[str] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)
    posted_by: str
    posted_date: str
    status: JobStatus = "open"
    applicant_count: int = Field(default=0, ge=0)


class Application(Record):
    id: str
    job_id: str
    candidate_id: str
    candidate_name: str
    candidate_email: str
    resume_url: str | None = None
    cover_letter: str = ""
    status: ApplicationStatus = "pending"
    applied_date: str


class Notification(Record):
    id: str
    user_id: str
    type: NotificationType
    message: str
    read: bool = False
    created_at: str


class JobDraft(Record):
    title: str = ""
    company: str = ""
    location: str = ""
    type: JobType = "Full-time"
    salary: str = ""
    description: str = ""
    requirements: list[str] = Field(default_factory=list)
    responsibilities: list[str] = Field(default_factory=list)
    posted_by: str = ""


class JobUpdate(Record):
    title: str | None = None
    company: str | None = None
    location: str | None = None
    type: JobType | None = None
    salary: str | None = None
    description: str | None = None
    requirements: list[str] | None = None
    responsibilities: list[str] | None = None
    status: JobStatus | None = None


class ApplicationDraft(Record):
    job_id: str
    candidate_id: str
    candidate_name: str = ""
    candidate_email: str = ""
    resume_url: str | None = None
    cover_letter: str = ""


class ProfileUpdate(Record):
    name: str | None = None
    phone: str | None = None
    company: str | None = None


class NamedCount(Record):
    name: str
    value: int


class PlatformSummary(Record):
    total_jobs: int
    total_applications: int
    total_users: int
    active_jobs: int
    jobs_by_type: list[NamedCount] = Field(default_factory=list)
    applications_by_status: list[NamedCount] = Field(default_factory=list)
    jobs_by_location: list[NamedCount] = Field(default_factory=list)


class RecruiterSummary(Record):
    job_count: int
    application_count: int
    pending_count: int
