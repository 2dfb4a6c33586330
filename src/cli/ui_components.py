"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from presentation details.
- Tables are shared by `once` and `doctor`.
"""

from __future__ import annotations

from rich.table import Table

from core.services.record_reconciler import ReconcileSummary


def build_summary_table(zone_name: str, summary: ReconcileSummary) -> Table:
    """Table for the outcome of a single reconciliation cycle."""

    table = Table(title=f"Zone {zone_name or '(unset)'}")
    table.add_column("Outcome", style="cyan", no_wrap=True)
    table.add_column("Records", style="white")

    if not summary.zone_found:
        table.add_row("zone", "[yellow]not found (nothing updated)[/yellow]")
        return table

    table.add_row("updated", ", ".join(summary.updated) or "-")
    table.add_row("up to date", ", ".join(summary.up_to_date) or "-")
    table.add_row("failed", "[red]" + ", ".join(summary.failed) + "[/red]" if summary.failed else "-")
    table.add_row("ignored", str(summary.ignored))
    return table


def build_checks_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table

