import json

from typer.testing import CliRunner

from jobboard.cli.app import app

runner = CliRunner()


def test_init_seeds_and_reports_keys() -> None:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["ok"] is True
    assert payload["seeded_keys"] == ["jobs", "applications"]

    again = runner.invoke(app, ["init"])
    assert json.loads(again.stdout)["seeded_keys"] == []


def test_jobs_list_filters() -> None:
    result = runner.invoke(app, ["jobs", "list", "--location", "Remote"])
    assert result.exit_code == 0
    rows = json.loads(result.stdout)
    assert [row["title"] for row in rows] == ["Product Manager"]
    assert rows[0]["applicantCount"] == 0


def test_reset_store_rejects_unknown_key() -> None:
    result = runner.invoke(app, ["reset-store", "--key", "bogus"])
    assert result.exit_code != 0


def test_reset_store_single_key() -> None:
    result = runner.invoke(app, ["reset-store", "--key", "applications"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"reset": ["applications"]}


def test_analytics_prints_platform_summary() -> None:
    result = runner.invoke(app, ["analytics"])
    assert result.exit_code == 0
    summary = json.loads(result.stdout)
    assert summary["totalJobs"] == 6
    assert summary["totalUsers"] == 3
