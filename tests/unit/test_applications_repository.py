import pytest

from jobboard.core.applications import ApplicationRepository, count_by_status
from jobboard.core.events import ApplicationReceived, ApplicationStatusChanged, EventDispatcher
from jobboard.core.jobs import JobRepository
from jobboard.db.store import APPLICATIONS_KEY, JOBS_KEY, MemoryStore
from jobboard.errors import DuplicateApplicationError, IllegalTransitionError, ValidationError
from jobboard.types import ApplicationDraft, JobDraft, JobUpdate


@pytest.fixture
def dispatcher() -> EventDispatcher:
    return EventDispatcher()


@pytest.fixture
def repos(dispatcher):
    store = MemoryStore()
    jobs = JobRepository(store, dispatcher=dispatcher)
    return jobs, ApplicationRepository(store, jobs, dispatcher=dispatcher)


def _job(jobs: JobRepository, posted_by: str = "2"):
    return jobs.create_job(
        JobDraft(
            title="Backend Engineer",
            company="Acme",
            location="Austin, TX",
            description="Build APIs",
            requirements=["Python"],
            responsibilities=["Ship"],
            posted_by=posted_by,
        )
    )


def _draft(job_id: str, candidate_id: str = "3") -> ApplicationDraft:
    return ApplicationDraft(
        job_id=job_id,
        candidate_id=candidate_id,
        candidate_name="John Doe",
        candidate_email="john@email.com",
        cover_letter="Hi",
    )


def test_create_application_sets_pending_and_increments_count(repos) -> None:
    jobs, applications = repos
    job = _job(jobs)

    application = applications.create_application(_draft(job.id))

    assert application.status == "pending"
    assert applications.has_applied(job.id, "3")
    assert jobs.get_job(job.id).applicant_count == 1


def test_applications_are_appended_in_insertion_order(repos) -> None:
    jobs, applications = repos
    job = _job(jobs)
    first = applications.create_application(_draft(job.id, "3"))
    second = applications.create_application(_draft(job.id, "4"))

    assert [app.id for app in applications.list_applications()] == [first.id, second.id]


def test_applicant_count_matches_application_records(repos) -> None:
    jobs, applications = repos
    job_a = _job(jobs)
    job_b = _job(jobs)
    for candidate_id in ("3", "4", "5"):
        applications.create_application(_draft(job_a.id, candidate_id))
    applications.create_application(_draft(job_b.id, "3"))

    for job in jobs.list_jobs():
        assert job.applicant_count == len(applications.list_applications_by_job(job.id))


def test_duplicate_application_is_rejected(repos) -> None:
    jobs, applications = repos
    job = _job(jobs)
    applications.create_application(_draft(job.id))

    with pytest.raises(DuplicateApplicationError):
        applications.create_application(_draft(job.id))

    matching = [app for app in applications.list_applications() if app.job_id == job.id]
    assert len(matching) == 1
    assert jobs.get_job(job.id).applicant_count == 1


def test_application_to_missing_or_closed_job_is_rejected(repos) -> None:
    jobs, applications = repos
    with pytest.raises(ValidationError):
        applications.create_application(_draft("missing"))

    job = _job(jobs)
    jobs.update_job(job.id, JobUpdate(status="closed"))
    with pytest.raises(ValidationError):
        applications.create_application(_draft(job.id))
    assert applications.list_applications() == []


def test_create_application_writes_both_collections_together() -> None:
    store = MemoryStore()
    jobs = JobRepository(store)
    applications = ApplicationRepository(store, jobs)
    job = _job(jobs)
    saves: list[set[str]] = []
    original = store._save_raw

    def recording_save(changes):
        saves.append(set(changes))
        original(changes)

    store._save_raw = recording_save
    applications.create_application(_draft(job.id))

    assert saves == [{APPLICATIONS_KEY, JOBS_KEY}]


def test_create_application_publishes_event(repos, dispatcher) -> None:
    jobs, applications = repos
    seen: list[ApplicationReceived] = []
    dispatcher.subscribe(ApplicationReceived, seen.append)
    job = _job(jobs)

    application = applications.create_application(_draft(job.id))

    assert len(seen) == 1
    assert seen[0].application.id == application.id
    assert seen[0].job.applicant_count == 1


def test_update_status_persists_and_publishes(repos, dispatcher) -> None:
    jobs, applications = repos
    seen: list[ApplicationStatusChanged] = []
    dispatcher.subscribe(ApplicationStatusChanged, seen.append)
    job = _job(jobs)
    application = applications.create_application(_draft(job.id))

    updated = applications.update_application_status(application.id, "shortlisted")

    assert updated.status == "shortlisted"
    assert applications.list_applications_by_candidate("3")[0].status == "shortlisted"
    assert len(seen) == 1
    assert seen[0].previous_status == "pending"
    assert seen[0].job.id == job.id


def test_update_status_missing_application_returns_none(repos, dispatcher) -> None:
    _, applications = repos
    seen: list = []
    dispatcher.subscribe(ApplicationStatusChanged, seen.append)
    assert applications.update_application_status("missing", "reviewing") is None
    assert seen == []


def test_illegal_transition_leaves_status_unchanged(repos) -> None:
    jobs, applications = repos
    job = _job(jobs)
    application = applications.create_application(_draft(job.id))
    applications.update_application_status(application.id, "accepted")

    with pytest.raises(IllegalTransitionError):
        applications.update_application_status(application.id, "rejected")

    assert applications.get_application(application.id).status == "accepted"


def test_list_applications_for_poster_only_includes_own_jobs(repos) -> None:
    jobs, applications = repos
    mine = _job(jobs, posted_by="2")
    other = _job(jobs, posted_by="99")
    applications.create_application(_draft(mine.id))
    applications.create_application(_draft(other.id))

    rows = applications.list_applications_for_poster("2")
    assert [row.job_id for row in rows] == [mine.id]


def test_count_by_status_is_zero_filled(repos) -> None:
    jobs, applications = repos
    job = _job(jobs)
    applications.create_application(_draft(job.id))

    counts = count_by_status(applications.list_applications())
    assert counts == {"pending": 1, "reviewing": 0, "shortlisted": 0, "accepted": 0, "rejected": 0}


def test_failing_status_handler_leaves_status_unchanged(repos, dispatcher) -> None:
    jobs, applications = repos
    job = _job(jobs)
    application = applications.create_application(_draft(job.id))

    def broken(event) -> None:
        raise RuntimeError("notification store unavailable")

    dispatcher.subscribe(ApplicationStatusChanged, broken)

    with pytest.raises(RuntimeError):
        applications.update_application_status(application.id, "reviewing")

    assert applications.get_application(application.id).status == "pending"
