"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.cloudflare_client import CloudflareClient
from adapters.ip_echo import IPEchoClient
from cli.ui_components import build_checks_table
from core.config import AppSettings, write_user_env_vars
from core.domain.address_family import AddressFamily
from core.errors import DDNSError
from core.scheduler import parse_interval

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_echo(settings: AppSettings, url: str, family: AddressFamily) -> tuple[bool, str]:
    try:
        content = await IPEchoClient(settings).fetch_content(url, family)
    except DDNSError as exc:
        return False, str(exc)
    return True, content.strip() or "(empty body)"


async def _check_zone(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with CloudflareClient(settings) as client:
            zones = await client.list_zones()
            match = next((zone for zone in zones if zone.name == settings.zone_name), None)
            if match is None:
                return False, f"zone {settings.zone_name!r} not among {len(zones)} visible zone(s)"
            page = await client.list_dns_records(match.id)
    except DDNSError as exc:
        return False, str(exc)

    managed = sum(1 for record in page.records if record.type in ("A", "AAAA"))
    detail = f"id {match.id}, {managed} A/AAAA record(s)"
    if page.has_more_pages:
        detail += f", {page.result_info.total_pages} pages (only the first is used)"
    return True, detail


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        _console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    table = build_checks_table("cfddns Doctor")

    # Config
    table.add_row("Log level", "OK", settings.log_level)
    try:
        table.add_row("Interval", "OK", f"{settings.interval} ({parse_interval(settings.interval)})")
    except DDNSError as exc:
        table.add_row("Interval", "FAIL", str(exc))
    table.add_row("Zone name", "OK" if settings.zone_name else "FAIL", settings.zone_name or "ZONE_NAME is not set")
    table.add_row(
        "API token",
        "OK" if settings.cloudflare_api_token.strip() else "FAIL",
        "set" if settings.cloudflare_api_token.strip() else "CLOUDFLARE_API_TOKEN is not set",
    )

    # Echo endpoints (best-effort)
    for url in (settings.primary_echo_url, settings.secondary_echo_url):
        for family in AddressFamily:
            ok, detail = asyncio.run(_check_echo(settings, url, family))
            table.add_row(f"{url} ({family.label()})", "OK" if ok else "FAIL", detail)

    # Cloudflare
    ok_zone, detail_zone = asyncio.run(_check_zone(settings))
    table.add_row("Cloudflare zone", "OK" if ok_zone else "FAIL", detail_zone)

    _console.print(table)

    if not ok_zone:
        _console.print(
            "\n[yellow]Note:[/yellow] The token needs Zone:Read and DNS:Edit permissions on the zone."
        )


@app.command(name="setup-token")
def setup_token() -> None:
    """Interactive setup (stores token and zone in the user config .env)."""

    zone_name = typer.prompt("Zone name (e.g. example.com)").strip()
    api_token = typer.prompt("Cloudflare API token", hide_input=True, confirmation_prompt=False).strip()
    interval = typer.prompt("Interval", default="5m", show_default=True).strip()

    if not zone_name or not api_token:
        raise typer.BadParameter("zone name and API token are required")
    try:
        parse_interval(interval)
    except DDNSError as exc:
        raise typer.BadParameter(str(exc)) from exc

    env_path = write_user_env_vars(
        {
            "ZONE_NAME": zone_name,
            "CLOUDFLARE_API_TOKEN": api_token,
            "INTERVAL": interval,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
