from __future__ import annotations

import pytest
from structlog.testing import capture_logs
from typer.testing import CliRunner

import cli.main as cli_main
from core.errors import FatalError
from core.services.record_reconciler import ReconcileSummary

runner = CliRunner()

ENV = {
    "LOG_LEVEL": "info",
    "INTERVAL": "5m",
    "ZONE_NAME": "example.com",
    "CLOUDFLARE_API_TOKEN": "test-token",
}


@pytest.fixture
def captured(monkeypatch):
    """Keep structlog in capture mode while the CLI runs."""

    monkeypatch.setattr(cli_main, "configure_logging", lambda *args, **kwargs: None)
    with capture_logs() as logs:
        yield logs


def _critical(logs):
    return [(entry["event"], entry.get("error")) for entry in logs if entry["log_level"] == "critical"]


def _fake_job_builder(result):
    def build(settings, *, logger=None):
        async def job():
            if isinstance(result, Exception):
                raise result
            return result

        return job

    return build


def test_once_prints_summary(monkeypatch):
    summary = ReconcileSummary(zone_id="z1", updated=["r1"], up_to_date=["r2"])
    monkeypatch.setattr(cli_main, "build_update_job", _fake_job_builder(summary))

    result = runner.invoke(cli_main.app, ["once"], env=ENV)

    assert result.exit_code == 0, result.output
    assert "example.com" in result.output
    assert "r1" in result.output
    assert "r2" in result.output


def test_once_reports_missing_zone(monkeypatch):
    monkeypatch.setattr(cli_main, "build_update_job", _fake_job_builder(ReconcileSummary()))

    result = runner.invoke(cli_main.app, ["once"], env=ENV)

    assert result.exit_code == 0, result.output
    assert "not found" in result.output


def test_fatal_cycle_logs_critical_then_exits(monkeypatch, captured):
    monkeypatch.setattr(cli_main, "build_update_job", _fake_job_builder(FatalError("unable to fetch ip")))

    result = runner.invoke(cli_main.app, ["once"], env=ENV)

    assert result.exit_code == 1
    assert _critical(captured) == [("fatal", "unable to fetch ip")]


def test_invalid_log_level_is_fatal_at_startup(captured):
    result = runner.invoke(cli_main.app, ["once"], env={**ENV, "LOG_LEVEL": "loud"})

    assert result.exit_code == 1
    [(event, error)] = _critical(captured)
    assert event == "invalid configuration"
    assert "unknown level string" in error


def test_invalid_interval_is_fatal_at_startup(monkeypatch, captured):
    monkeypatch.setattr(cli_main, "build_update_job", _fake_job_builder(ReconcileSummary()))

    result = runner.invoke(cli_main.app, ["start"], env={**ENV, "INTERVAL": "soon"})

    assert result.exit_code == 1
    [(event, error)] = _critical(captured)
    assert event == "invalid interval"
    assert "soon" in error


def test_start_runs_the_scheduler_until_fatal(monkeypatch, captured):
    monkeypatch.setattr(cli_main, "build_update_job", _fake_job_builder(FatalError("unable to list DNS records")))

    result = runner.invoke(cli_main.app, [], env={**ENV, "INTERVAL": "1ms", "RUN_ON_START": "true"})

    assert result.exit_code == 1
    events = [entry["event"] for entry in captured]
    assert events[0] == "Started"
    assert events[-1] == "fatal"
    assert _critical(captured) == [("fatal", "unable to list DNS records")]
