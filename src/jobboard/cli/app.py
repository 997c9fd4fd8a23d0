from __future__ import annotations

import json

import typer
import uvicorn

from jobboard.api.app import create_app
from jobboard.config import get_settings
from jobboard.core.board import JobBoard
from jobboard.db.init import init_database
from jobboard.db.session import SessionLocal
from jobboard.db.store import COLLECTION_KEYS, CURRENT_USER_KEY, SqlStore
from jobboard.logging_config import configure_logging

app = typer.Typer(help="Job board CLI")
jobs_app = typer.Typer(help="Job catalog commands")

app.add_typer(jobs_app, name="jobs")

_INITIALIZED = False


def ensure_initialized() -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return
    init_database()
    _INITIALIZED = True


@app.command("init")
def init_cmd() -> None:
    """Create the database schema and seed the demo job catalog."""
    configure_logging()
    result = init_database()
    typer.echo(json.dumps({"ok": True, **result}, indent=2))


@app.command("reset-store")
def reset_store(
    key: list[str] = typer.Option([], "--key", help="Collection to reset; repeat for several. Default: all."),
) -> None:
    """Drop stored collections and restore the seeded defaults."""
    configure_logging()
    allowed = set(COLLECTION_KEYS) | {CURRENT_USER_KEY}
    unknown = [item for item in key if item not in allowed]
    if unknown:
        raise typer.BadParameter(f"unknown keys: {', '.join(unknown)}")
    ensure_initialized()
    with SessionLocal() as db:
        reset = SqlStore(db).reset_to_defaults(key or None)
    typer.echo(json.dumps({"reset": reset}, indent=2))


@jobs_app.command("list")
def jobs_list(
    query: str = typer.Option("", "--query"),
    location: str | None = typer.Option(None, "--location"),
    job_type: str | None = typer.Option(None, "--type"),
) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        board = JobBoard(SqlStore(db))
        jobs = board.jobs.search_jobs(query, location=location, job_type=job_type)
        typer.echo(
            json.dumps(
                [
                    {
                        "id": job.id,
                        "title": job.title,
                        "company": job.company,
                        "location": job.location,
                        "type": job.type,
                        "status": job.status,
                        "applicantCount": job.applicant_count,
                    }
                    for job in jobs
                ],
                indent=2,
            )
        )


@app.command("analytics")
def analytics_cmd() -> None:
    """Print platform totals as seen on the admin dashboard."""
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        board = JobBoard(SqlStore(db))
        admin = board.users.list_by_role("admin")[0]
        summary = board.platform_summary(admin)
        typer.echo(json.dumps(summary.to_json_dict(), indent=2))


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
    log_level: str | None = typer.Option(None, "--log-level"),
) -> None:
    """Run the JSON API."""
    configure_logging(log_level)
    ensure_initialized()
    settings = get_settings()
    app_instance = create_app()
    uvicorn.run(
        app_instance,
        host=host or settings.app_host,
        port=port or settings.app_port,
        log_level=(log_level or settings.log_level).lower(),
    )
