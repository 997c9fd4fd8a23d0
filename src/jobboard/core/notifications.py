"""In-app notifications and simulated email dispatch.

Every user-facing domain event produces one email and one in-app
notification for the affected user:

* an application is received: the recruiter who posted the job
* an application status changes: the candidate
* a job is posted: candidates, only when new-job alerts are enabled

Handlers run inside the unit of work of the triggering mutation. The
notification is recorded before the email is sent, so a storage failure
aborts the mutation without mailing anyone.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from jobboard.config import Settings
from jobboard.core.events import ApplicationReceived, ApplicationStatusChanged, EventDispatcher, JobPosted
from jobboard.core.mailer import EmailSender
from jobboard.core.users import UserDirectory
from jobboard.db.store import NOTIFICATIONS_KEY, Store
from jobboard.errors import SendError
from jobboard.ids import new_id, utc_now_iso
from jobboard.types import Application, Job, Notification, User

logger = logging.getLogger(__name__)

STATUS_MESSAGES: dict[str, str] = {
    "reviewing": "Your application for {job_title} at {company} is now being reviewed.",
    "shortlisted": "Great news! You've been shortlisted for {job_title} at {company}.",
    "accepted": "Congratulations! Your application for {job_title} at {company} has been accepted.",
    "rejected": (
        "Thank you for your interest in {job_title} at {company}. "
        "Unfortunately, we've decided to move forward with other candidates."
    ),
}
GENERIC_STATUS_MESSAGE = "Your application status has been updated to: {status}"


class Contact(NamedTuple):
    id: str
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> Contact:
        return cls(id=user.id, name=user.name, email=user.email)

    @classmethod
    def from_application(cls, application: Application) -> Contact:
        return cls(id=application.candidate_id, name=application.candidate_name, email=application.candidate_email)


def status_change_message(status: str, job_title: str, company: str) -> str:
    template = STATUS_MESSAGES.get(status)
    if template is None:
        return GENERIC_STATUS_MESSAGE.format(status=status)
    return template.format(job_title=job_title, company=company)


class NotificationEngine:
    def __init__(self, store: Store, email_sender: EmailSender):
        self.store = store
        self.email_sender = email_sender

    def dispatch_email(self, to: str, subject: str, body: str) -> bool:
        try:
            self.email_sender.send(to, subject, body)
        except SendError as exc:
            logger.warning("Email dispatch failed to=%s subject=%s: %s", to, subject, exc)
            return False
        return True

    def list_notifications(self) -> list[Notification]:
        return self.store.read_collection(NOTIFICATIONS_KEY, Notification)

    def list_for_user(self, user_id: str) -> list[Notification]:
        return [item for item in self.list_notifications() if item.user_id == user_id]

    def unread_count(self, user_id: str) -> int:
        return sum(1 for item in self.list_for_user(user_id) if not item.read)

    def record_notification(self, user_id: str, type: str, message: str) -> Notification:
        notification = Notification(
            id=new_id(),
            user_id=user_id,
            type=type,
            message=message,
            read=False,
            created_at=utc_now_iso(),
        )
        with self.store.transaction():
            items = self.list_notifications()
            items.insert(0, notification)
            self.store.write_collection(NOTIFICATIONS_KEY, items)
        logger.debug("Recorded notification id=%s user_id=%s type=%s", notification.id, user_id, type)
        return notification

    def mark_read(self, notification_id: str) -> Notification | None:
        with self.store.transaction():
            items = self.list_notifications()
            index = next((i for i, item in enumerate(items) if item.id == notification_id), None)
            if index is None:
                return None
            items[index] = items[index].model_copy(update={"read": True})
            self.store.write_collection(NOTIFICATIONS_KEY, items)
        return items[index]

    def mark_all_read_for_user(self, user_id: str) -> int:
        with self.store.transaction():
            items = self.list_notifications()
            changed = 0
            for index, item in enumerate(items):
                if item.user_id == user_id and not item.read:
                    items[index] = item.model_copy(update={"read": True})
                    changed += 1
            if changed:
                self.store.write_collection(NOTIFICATIONS_KEY, items)
        return changed

    def notify_application_received(
        self,
        candidate: Contact,
        job: Job,
        recruiter_email: str,
        recruiter_id: str,
    ) -> Notification:
        notification = self.record_notification(
            recruiter_id,
            "application",
            f"{candidate.name} applied for {job.title}",
        )
        self.dispatch_email(
            recruiter_email,
            f"New Application for {job.title}",
            f"{candidate.name} has applied for the position of {job.title}. "
            "Please review the application in your dashboard.",
        )
        return notification

    def notify_application_status_change(
        self,
        candidate: Contact,
        job: Job,
        new_status: str,
        company_name: str,
    ) -> Notification:
        notification = self.record_notification(
            candidate.id,
            "status_change",
            f"Application status updated for {job.title}: {new_status}",
        )
        self.dispatch_email(
            candidate.email,
            f"Application Update: {job.title}",
            status_change_message(new_status, job.title, company_name),
        )
        return notification

    def notify_new_job(self, candidate: Contact, job: Job) -> Notification:
        notification = self.record_notification(
            candidate.id,
            "new_job",
            f"New job posted: {job.title} at {job.company}",
        )
        self.dispatch_email(
            candidate.email,
            f"New Job Posted: {job.title}",
            f"A new position matching your interests has been posted: {job.title} at {job.company}. "
            "Check it out on our platform!",
        )
        return notification


def register_notification_handlers(
    dispatcher: EventDispatcher,
    engine: NotificationEngine,
    *,
    users: UserDirectory,
    settings: Settings,
) -> None:
    def on_application_received(event: ApplicationReceived) -> None:
        recruiter = users.get(event.job.posted_by)
        recruiter_email = recruiter.email if recruiter else settings.fallback_recruiter_email
        engine.notify_application_received(
            Contact.from_application(event.application),
            event.job,
            recruiter_email,
            event.job.posted_by,
        )

    def on_status_changed(event: ApplicationStatusChanged) -> None:
        if event.job is None:
            logger.warning(
                "Status change for application %s references missing job %s",
                event.application.id,
                event.application.job_id,
            )
            return
        engine.notify_application_status_change(
            Contact.from_application(event.application),
            event.job,
            event.application.status,
            event.job.company,
        )

    def on_job_posted(event: JobPosted) -> None:
        if not settings.new_job_alerts_enabled:
            return
        for candidate in users.list_by_role("candidate"):
            engine.notify_new_job(Contact.from_user(candidate), event.job)

    dispatcher.subscribe(ApplicationReceived, on_application_received)
    dispatcher.subscribe(ApplicationStatusChanged, on_status_changed)
    dispatcher.subscribe(JobPosted, on_job_posted)
