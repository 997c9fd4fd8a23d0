from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from jobboard.core.applications import count_by_status
from jobboard.types import Application, Job, NamedCount, PlatformSummary, RecruiterSummary

TOP_LOCATIONS = 6


def location_bucket(location: str) -> str:
    """``Remote`` if mentioned, else the region after the first comma, else the whole value."""
    if "Remote" in location:
        return "Remote"
    parts = location.split(",")
    if len(parts) > 1 and parts[1].strip():
        return parts[1].strip()
    return location


def platform_summary(jobs: Sequence[Job], applications: Sequence[Application], user_count: int) -> PlatformSummary:
    by_type = Counter(job.type for job in jobs)
    by_location = Counter(location_bucket(job.location) for job in jobs)
    status_counts = count_by_status(applications)
    return PlatformSummary(
        total_jobs=len(jobs),
        total_applications=len(applications),
        total_users=user_count,
        active_jobs=sum(1 for job in jobs if job.status == "open"),
        jobs_by_type=[NamedCount(name=name, value=value) for name, value in by_type.items()],
        applications_by_status=[NamedCount(name=name, value=value) for name, value in status_counts.items()],
        jobs_by_location=[
            NamedCount(name=name, value=value) for name, value in by_location.most_common(TOP_LOCATIONS)
        ],
    )


def recruiter_summary(
    user_id: str,
    jobs: Sequence[Job],
    applications: Sequence[Application],
) -> RecruiterSummary:
    my_job_ids = {job.id for job in jobs if job.posted_by == user_id}
    mine = [app for app in applications if app.job_id in my_job_ids]
    return RecruiterSummary(
        job_count=len(my_job_ids),
        application_count=len(mine),
        pending_count=sum(1 for app in mine if app.status == "pending"),
    )
