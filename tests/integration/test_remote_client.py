import pytest
from fastapi.testclient import TestClient

from jobboard.api.app import create_app
from jobboard.client import RemoteApplicationRepository, RemoteJobBoardClient, RemoteJobRepository
from jobboard.core.applications import ApplicationRepository
from jobboard.core.contracts import ApplicationRepositoryContract, JobRepositoryContract
from jobboard.core.jobs import JobRepository
from jobboard.db.store import MemoryStore
from jobboard.errors import (
    AuthenticationError,
    DuplicateApplicationError,
    IllegalTransitionError,
    PermissionDeniedError,
    ValidationError,
)
from jobboard.types import ApplicationDraft, JobDraft, JobUpdate


@pytest.fixture
def http() -> TestClient:
    return TestClient(create_app())


def _client(http: TestClient, email: str | None = None) -> RemoteJobBoardClient:
    client = RemoteJobBoardClient("http://testserver", session=http)
    if email:
        client.sign_in(email)
    return client


def test_local_and_remote_repositories_share_contracts(http) -> None:
    store = MemoryStore()
    local_jobs = JobRepository(store)
    remote = _client(http)

    assert isinstance(local_jobs, JobRepositoryContract)
    assert isinstance(ApplicationRepository(store, local_jobs), ApplicationRepositoryContract)
    assert isinstance(RemoteJobRepository(remote), JobRepositoryContract)
    assert isinstance(RemoteApplicationRepository(remote), ApplicationRepositoryContract)


def test_remote_job_repository(http) -> None:
    jobs = RemoteJobRepository(_client(http, "recruiter@techcorp.com"))

    created = jobs.create_job(
        JobDraft(
            title="SRE",
            company="TechCorp",
            location="Remote",
            description="Keep things up",
            requirements=["Linux"],
            responsibilities=["On-call"],
        )
    )

    assert jobs.list_jobs()[0].id == created.id
    assert jobs.get_job("missing") is None
    assert [job.id for job in jobs.search_jobs("sre")] == [created.id]
    assert jobs.update_job(created.id, JobUpdate(status="closed")).status == "closed"
    assert jobs.update_job("missing", JobUpdate(status="closed")) is None


def test_remote_errors_map_to_domain_exceptions(http) -> None:
    with pytest.raises(AuthenticationError):
        _client(http, "nobody@email.com")

    jobs = RemoteJobRepository(_client(http, "john@email.com"))
    with pytest.raises(PermissionDeniedError):
        jobs.create_job(JobDraft(title="x"))

    recruiter_jobs = RemoteJobRepository(_client(http, "recruiter@techcorp.com"))
    with pytest.raises(ValidationError) as exc_info:
        recruiter_jobs.create_job(JobDraft(title="Only a title"))
    assert "description" in exc_info.value.fields


def test_remote_application_flow(http, email_outbox) -> None:
    candidate = _client(http, "john@email.com")
    recruiter = _client(http, "recruiter@techcorp.com")
    apps = RemoteApplicationRepository(candidate)
    recruiter_apps = RemoteApplicationRepository(recruiter)

    application = apps.create_application(ApplicationDraft(job_id="5", candidate_id="3", cover_letter="Hi"))

    assert apps.has_applied("5", "3")
    assert not apps.has_applied("6", "3")
    with pytest.raises(DuplicateApplicationError) as exc_info:
        apps.create_application(ApplicationDraft(job_id="5", candidate_id="3"))
    assert exc_info.value.job_id == "5"

    updated = recruiter_apps.update_application_status(application.id, "reviewing")
    assert updated.status == "reviewing"
    assert recruiter_apps.list_applications_by_job("5") == [updated]
    assert recruiter_apps.update_application_status("missing", "reviewing") is None

    assert candidate.unread_count() == 1
    assert candidate.notifications()[0].message == "Application status updated for Data Scientist: reviewing"
    assert candidate.mark_all_read() == 1
    assert [m.to for m in email_outbox.outbox] == ["recruiter@techcorp.com", "john@email.com"]

    recruiter_apps.update_application_status(application.id, "rejected")
    with pytest.raises(IllegalTransitionError):
        recruiter_apps.update_application_status(application.id, "accepted")


def test_remote_profile_and_analytics(http) -> None:
    user_client = _client(http)
    user = user_client.sign_up(email="kai@email.com", name="Kai", role="candidate")
    assert user_client.get_profile() == user

    admin = _client(http, "admin@jobportal.com")
    assert admin.analytics().total_users == 4
