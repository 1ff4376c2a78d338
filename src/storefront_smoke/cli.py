"""Command line interface for storefront-smoke."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from .catalog import select_scenarios, storefront_scenarios
from .config import load_config
from .errors import SessionStartError, UnknownScenarioError
from .factory import build_notifier, build_runner, build_session_manager
from .report import render_report

app = typer.Typer(help="Browser smoke tests for a deployed storefront")

EXIT_ABORTED = 2


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure logging before executing any command."""

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@app.command()
def version() -> None:
    """Print the package version."""

    try:
        typer.echo(get_version("storefront-smoke"))
    except PackageNotFoundError:  # pragma: no cover - when running from source tree
        typer.echo("0.0.0")


@app.command()
def scenarios() -> None:
    """List the available scenarios in execution order."""

    for scenario in storefront_scenarios():
        typer.echo(f"{scenario.identifier:<20} {scenario.path:<36} {scenario.description}")


@app.command()
def run(
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to YAML configuration."),
    ] = None,
    env_file: Annotated[
        Optional[Path],
        typer.Option(
            "--env-file",
            help="Path to an .env file with default configuration values.",
        ),
    ] = None,
    base_url: Annotated[
        Optional[str],
        typer.Option("--base-url", "-u", help="Storefront base URL."),
    ] = None,
    only: Annotated[
        Optional[list[str]],
        typer.Option("--scenario", "-s", help="Run only this scenario (repeatable)."),
    ] = None,
    headless: Annotated[
        Optional[bool],
        typer.Option("--headless/--headed", help="Run the browser in headless mode (or headed)."),
    ] = None,
    browser_type: Annotated[
        Optional[str],
        typer.Option("--browser", help="Browser engine: chromium, firefox or webkit."),
    ] = None,
    window_size: Annotated[
        Optional[str],
        typer.Option("--window-size", help="Browser window size as WIDTHxHEIGHT."),
    ] = None,
    wait_timeout: Annotated[
        Optional[float],
        typer.Option("--wait-timeout", help="Seconds to wait for page readiness."),
    ] = None,
    implicit_timeout: Annotated[
        Optional[float],
        typer.Option("--implicit-timeout", help="Default element lookup timeout in seconds."),
    ] = None,
) -> None:
    """Run the storefront scenarios against a deployed site."""

    overrides: dict[str, Any] = {}
    if base_url:
        overrides["base_url"] = base_url
    if only:
        overrides["scenarios"] = list(only)
    browser_overrides: dict[str, Any] = {}
    if headless is not None:
        browser_overrides["headless"] = headless
    if browser_type:
        browser_overrides["browser_type"] = browser_type
    if window_size:
        browser_overrides["window_size"] = window_size
    if wait_timeout is not None:
        browser_overrides["wait_timeout"] = wait_timeout
    if implicit_timeout is not None:
        browser_overrides["implicit_timeout"] = implicit_timeout
    if browser_overrides:
        overrides["browser"] = browser_overrides

    config = load_config(config_path, env_file=env_file, **overrides)
    try:
        selected = select_scenarios(config.scenarios)
    except UnknownScenarioError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_ABORTED) from exc
    typer.echo(f"Running {len(selected)} scenario(s) against {config.base_url}")

    notifier = build_notifier(config.notifications)
    runner = build_runner(config.browser, notifier)
    manager = build_session_manager()
    try:
        with manager.session(config.browser) as session:
            report = runner.run(session, selected, config.base_url)
    except SessionStartError as exc:
        typer.echo(f"Could not start browser: {exc}", err=True)
        raise typer.Exit(code=EXIT_ABORTED) from exc

    render_report(report)
    if not report.passed:
        raise typer.Exit(code=1)
    typer.echo("All scenarios passed.")


if __name__ == "__main__":
    app()
