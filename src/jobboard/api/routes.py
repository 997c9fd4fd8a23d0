from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Query

from jobboard.api.deps import get_board, get_current_user
from jobboard.api.schemas import (
    ApplyRequest,
    ReadAllResponse,
    SignInRequest,
    SignUpRequest,
    StatusUpdateRequest,
    TokenResponse,
    UnreadCountResponse,
)
from jobboard.config import get_settings
from jobboard.core.auth import issue_token
from jobboard.core.board import JobBoard
from jobboard.types import (
    Application,
    Job,
    JobDraft,
    JobUpdate,
    Notification,
    PlatformSummary,
    ProfileUpdate,
    RecruiterSummary,
    User,
)

router = APIRouter(prefix="/api", tags=["api"])


def _token_response(user: User) -> TokenResponse:
    settings = get_settings()
    token = issue_token(user.id, settings.secret_key, ttl=timedelta(minutes=settings.token_ttl_minutes))
    return TokenResponse(token=token, user=user)


@router.post("/signup", response_model=TokenResponse)
def signup(payload: SignUpRequest, board: JobBoard = Depends(get_board)) -> TokenResponse:
    user = board.users.sign_up(
        email=payload.email,
        name=payload.name,
        role=payload.role,
        company=payload.company,
        phone=payload.phone,
    )
    return _token_response(user)


@router.post("/signin", response_model=TokenResponse)
def signin(payload: SignInRequest, board: JobBoard = Depends(get_board)) -> TokenResponse:
    return _token_response(board.users.authenticate(payload.email))


@router.get("/profile", response_model=User)
def get_profile(user: User = Depends(get_current_user)) -> User:
    return user


@router.patch("/profile", response_model=User)
def update_profile(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    board: JobBoard = Depends(get_board),
) -> User:
    updated = board.update_profile(user, payload)
    if updated is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return updated


@router.get("/jobs", response_model=list[Job])
def list_jobs(
    q: str = "",
    location: str | None = None,
    job_type: str | None = Query(default=None, alias="type"),
    board: JobBoard = Depends(get_board),
) -> list[Job]:
    return board.jobs.search_jobs(q, location=location, job_type=job_type)


@router.post("/jobs", response_model=Job)
def create_job(
    payload: JobDraft,
    user: User = Depends(get_current_user),
    board: JobBoard = Depends(get_board),
) -> Job:
    return board.post_job(user, payload)


@router.get("/jobs/{job_id}", response_model=Job)
def get_job(job_id: str, board: JobBoard = Depends(get_board)) -> Job:
    job = board.jobs.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.patch("/jobs/{job_id}", response_model=Job)
def update_job(
    job_id: str,
    payload: JobUpdate,
    user: User = Depends(get_current_user),
    board: JobBoard = Depends(get_board),
) -> Job:
    job = board.update_job(user, job_id, payload)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.get("/applications", response_model=list[Application])
def list_applications(
    job_id: str | None = Query(default=None, alias="jobId"),
    candidate_id: str | None = Query(default=None, alias="candidateId"),
    user: User = Depends(get_current_user),
    board: JobBoard = Depends(get_board),
) -> list[Application]:
    rows = board.applications_for(user)
    if job_id is not None:
        rows = [row for row in rows if row.job_id == job_id]
    if candidate_id is not None:
        rows = [row for row in rows if row.candidate_id == candidate_id]
    return rows


@router.post("/applications", response_model=Application)
def create_application(
    payload: ApplyRequest,
    user: User = Depends(get_current_user),
    board: JobBoard = Depends(get_board),
) -> Application:
    return board.apply(user, payload.job_id, payload.cover_letter, resume_url=payload.resume_url)


@router.get("/applications/{application_id}", response_model=Application)
def get_application(
    application_id: str,
    user: User = Depends(get_current_user),
    board: JobBoard = Depends(get_board),
) -> Application:
    application = board.get_application(user, application_id)
    if application is None:
        raise HTTPException(status_code=404, detail="Application not found")
    return application


@router.patch("/applications/{application_id}/status", response_model=Application)
def update_application_status(
    application_id: str,
    payload: StatusUpdateRequest,
    user: User = Depends(get_current_user),
    board: JobBoard = Depends(get_board),
) -> Application:
    application = board.change_status(user, application_id, payload.status)
    if application is None:
        raise HTTPException(status_code=404, detail="Application not found")
    return application


@router.get("/notifications", response_model=list[Notification])
def list_notifications(
    user: User = Depends(get_current_user),
    board: JobBoard = Depends(get_board),
) -> list[Notification]:
    return board.notifications_for(user)


@router.get("/notifications/unread-count", response_model=UnreadCountResponse)
def unread_count(
    user: User = Depends(get_current_user),
    board: JobBoard = Depends(get_board),
) -> UnreadCountResponse:
    return UnreadCountResponse(unread=board.unread_count(user))


@router.post("/notifications/read-all", response_model=ReadAllResponse)
def read_all_notifications(
    user: User = Depends(get_current_user),
    board: JobBoard = Depends(get_board),
) -> ReadAllResponse:
    return ReadAllResponse(updated=board.notifications.mark_all_read_for_user(user.id))


@router.get("/analytics", response_model=PlatformSummary)
def platform_analytics(
    user: User = Depends(get_current_user),
    board: JobBoard = Depends(get_board),
) -> PlatformSummary:
    return board.platform_summary(user)


@router.get("/analytics/recruiter", response_model=RecruiterSummary)
def recruiter_analytics(
    user: User = Depends(get_current_user),
    board: JobBoard = Depends(get_board),
) -> RecruiterSummary:
    return board.recruiter_summary(user)
