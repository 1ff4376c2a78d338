"""Console rendering of suite reports."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .models import SuiteReport


def build_table(report: SuiteReport) -> Table:
    table = Table(title=f"Storefront smoke: {escape(report.base_url)}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Scenario", no_wrap=True)
    table.add_column("Result", no_wrap=True)
    table.add_column("Kind", style="dim")
    table.add_column("Details", overflow="fold")
    for index, result in enumerate(report.results, start=1):
        outcome = "[green]PASS[/green]" if result.passed else "[red]FAIL[/red]"
        kind = result.failure_kind.value if result.failure_kind else ""
        details = result.diagnostics if result.passed else (result.message or "")
        table.add_row(str(index), Text(result.identifier), outcome, kind, Text(details))
    return table


def render_report(report: SuiteReport, console: Optional[Console] = None) -> None:
    """Print the per-scenario table and a one-line summary."""

    console = console or Console()
    console.print(build_table(report))
    summary = f"{report.passed_count} passed, {report.failed_count} failed"
    if report.passed:
        console.print(f"Suite green: {summary}", style="bold green", markup=False)
    else:
        console.print(f"Suite failed: {summary}", style="bold red", markup=False)
