"""cfddns command line.

With no sub-command the updater starts its scheduler and runs until the
process is killed. Fatal errors are logged at critical level before the
process exits with status 1.
"""

from __future__ import annotations

import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console

from cli import doctor
from cli.ui_components import build_summary_table
from core.config import AppSettings
from core.errors import FatalError, IntervalError
from core.logging_setup import configure_logging, get_logger
from core.scheduler import IntervalScheduler, parse_interval
from core.services.update_job import build_update_job

app = typer.Typer(help="Keep Cloudflare A/AAAA records in sync with this host's public IPs.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_log = get_logger("cfddns")


def _fatal(message: str, exc: BaseException) -> typer.Exit:
    _log.critical(message, error=str(exc))
    return typer.Exit(code=1)


def _bootstrap() -> AppSettings:
    """Read settings and configure logging; invalid settings are fatal."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        raise _fatal("invalid configuration", exc) from exc
    configure_logging(settings.log_level_number, settings.log_format)
    return settings


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        start()


@app.command()
def start() -> None:
    """Run the update cycle on the configured interval, forever.

    INTERVAL is parsed before the scheduler starts, so an unparseable or
    non-positive value is a fatal startup error rather than a silent no-op.
    """

    settings = _bootstrap()

    _log.info("Started")
    _log.info("schedule", interval=settings.interval, run_on_start=settings.run_on_start)

    try:
        interval = parse_interval(settings.interval)
    except IntervalError as exc:
        raise _fatal("invalid interval", exc) from exc

    scheduler = IntervalScheduler(
        interval,
        build_update_job(settings, logger=_log),
        run_on_start=settings.run_on_start,
        logger=_log,
    )
    try:
        asyncio.run(scheduler.run())
    except FatalError as exc:
        raise _fatal("fatal", exc) from exc
    except KeyboardInterrupt:
        pass
    _log.info("Finished")


@app.command()
def once() -> None:
    """Run a single update cycle now and print its outcome."""

    settings = _bootstrap()
    try:
        summary = asyncio.run(build_update_job(settings, logger=_log)())
    except FatalError as exc:
        raise _fatal("fatal", exc) from exc

    _console.print(build_summary_table(settings.zone_name, summary))


def run() -> None:
    app()
