from __future__ import annotations

import logging
import time

from jobboard.config import Settings, get_settings
from jobboard.core import analytics
from jobboard.core.applications import ApplicationRepository
from jobboard.core.events import EventDispatcher
from jobboard.core.jobs import JobRepository
from jobboard.core.mailer import EmailSender
from jobboard.core.notifications import NotificationEngine, register_notification_handlers
from jobboard.core.runtime import get_email_sender
from jobboard.core.users import SessionState, UserDirectory
from jobboard.db.store import CURRENT_USER_KEY, Store
from jobboard.errors import DuplicateApplicationError, PermissionDeniedError
from jobboard.types import (
    Application,
    ApplicationDraft,
    Job,
    JobDraft,
    JobUpdate,
    Notification,
    PlatformSummary,
    ProfileUpdate,
    RecruiterSummary,
    User,
)

logger = logging.getLogger(__name__)


class JobBoard:
    """Role-aware entry point over the repositories and the notification engine."""

    def __init__(
        self,
        store: Store,
        *,
        settings: Settings | None = None,
        email_sender: EmailSender | None = None,
        dispatcher: EventDispatcher | None = None,
    ):
        self.store = store
        self.settings = settings or get_settings()
        self.dispatcher = dispatcher or EventDispatcher()
        self.users = UserDirectory(store)
        self.session_state = SessionState(store, self.users)
        self.jobs = JobRepository(store, dispatcher=self.dispatcher)
        self.applications = ApplicationRepository(store, self.jobs, dispatcher=self.dispatcher)
        self.notifications = NotificationEngine(store, email_sender or get_email_sender())
        register_notification_handlers(
            self.dispatcher,
            self.notifications,
            users=self.users,
            settings=self.settings,
        )

    def _simulate_latency(self) -> None:
        if self.settings.simulated_latency_ms > 0:
            time.sleep(self.settings.simulated_latency_ms / 1000)

    @staticmethod
    def _require_role(actor: User, *roles: str) -> None:
        if actor.role not in roles:
            raise PermissionDeniedError(f"role '{actor.role}' cannot perform this action")

    def _can_manage_job(self, actor: User, job: Job | None) -> bool:
        if actor.role == "admin":
            return True
        return actor.role == "recruiter" and job is not None and job.posted_by == actor.id

    def sign_up(
        self,
        *,
        email: str,
        name: str,
        role: str,
        company: str | None = None,
        phone: str | None = None,
    ) -> User:
        self._simulate_latency()
        user = self.users.sign_up(email=email, name=name, role=role, company=company, phone=phone)
        self.store.write_value(CURRENT_USER_KEY, user)
        return user

    def sign_in(self, email: str) -> User:
        self._simulate_latency()
        return self.session_state.sign_in(email)

    def sign_out(self) -> None:
        self.session_state.sign_out()

    def current_user(self) -> User | None:
        return self.session_state.current_user()

    def update_profile(self, actor: User, update: ProfileUpdate) -> User | None:
        self._simulate_latency()
        user = self.users.update_profile(actor.id, update)
        if user is None:
            return None
        self.session_state.refresh(user)
        self.notifications.record_notification(user.id, "system", "Your profile has been updated")
        return user

    def post_job(self, actor: User, draft: JobDraft) -> Job:
        self._require_role(actor, "recruiter", "admin")
        self._simulate_latency()
        return self.jobs.create_job(draft.model_copy(update={"posted_by": actor.id}))

    def update_job(self, actor: User, job_id: str, updates: JobUpdate) -> Job | None:
        self._require_role(actor, "recruiter", "admin")
        job = self.jobs.get_job(job_id)
        if job is None:
            return None
        if not self._can_manage_job(actor, job):
            raise PermissionDeniedError(f"job {job_id} belongs to another recruiter")
        return self.jobs.update_job(job_id, updates)

    def apply(
        self,
        actor: User,
        job_id: str,
        cover_letter: str,
        resume_url: str | None = None,
    ) -> Application:
        self._require_role(actor, "candidate")
        if self.applications.has_applied(job_id, actor.id):
            raise DuplicateApplicationError(job_id, actor.id)
        self._simulate_latency()
        return self.applications.create_application(
            ApplicationDraft(
                job_id=job_id,
                candidate_id=actor.id,
                candidate_name=actor.name,
                candidate_email=actor.email,
                resume_url=resume_url,
                cover_letter=cover_letter,
            )
        )

    def get_application(self, actor: User, application_id: str) -> Application | None:
        application = self.applications.get_application(application_id)
        if application is None:
            return None
        if actor.role == "candidate" and application.candidate_id != actor.id:
            raise PermissionDeniedError(f"application {application_id} belongs to another candidate")
        if actor.role == "recruiter" and not self._can_manage_job(actor, self.jobs.get_job(application.job_id)):
            raise PermissionDeniedError(f"application {application_id} is for another recruiter's job")
        return application

    def change_status(self, actor: User, application_id: str, status: str) -> Application | None:
        self._require_role(actor, "recruiter", "admin")
        application = self.applications.get_application(application_id)
        if application is None:
            return None
        if not self._can_manage_job(actor, self.jobs.get_job(application.job_id)):
            raise PermissionDeniedError(f"application {application_id} is for another recruiter's job")
        return self.applications.update_application_status(application_id, status)

    def applications_for(self, actor: User) -> list[Application]:
        if actor.role == "candidate":
            return self.applications.list_applications_by_candidate(actor.id)
        if actor.role == "recruiter":
            return self.applications.list_applications_for_poster(actor.id)
        return self.applications.list_applications()

    def notifications_for(self, actor: User) -> list[Notification]:
        return self.notifications.list_for_user(actor.id)

    def unread_count(self, actor: User) -> int:
        return self.notifications.unread_count(actor.id)

    def open_notifications(self, actor: User) -> list[Notification]:
        """List the actor's notifications as they were, then mark them all read."""
        items = self.notifications.list_for_user(actor.id)
        self.notifications.mark_all_read_for_user(actor.id)
        return items

    def platform_summary(self, actor: User) -> PlatformSummary:
        self._require_role(actor, "admin")
        return analytics.platform_summary(
            self.jobs.list_jobs(),
            self.applications.list_applications(),
            self.users.count(),
        )

    def recruiter_summary(self, actor: User) -> RecruiterSummary:
        self._require_role(actor, "recruiter", "admin")
        return analytics.recruiter_summary(
            actor.id,
            self.jobs.list_jobs(),
            self.applications.list_applications(),
        )
