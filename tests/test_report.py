from io import StringIO

import pytest
from rich.console import Console

from storefront_smoke.config import NotificationConfig
from storefront_smoke.factory import build_notifier
from storefront_smoke.models import FailureKind, NotificationEvent, NotificationLevel, ScenarioResult, SuiteReport
from storefront_smoke.notifications.base import ConsoleNotifier, NullNotifier
from storefront_smoke.report import render_report


def _console() -> tuple[Console, StringIO]:
    buffer = StringIO()
    return Console(file=buffer, width=140, color_system=None), buffer


def test_render_report_lists_each_scenario_and_summary():
    report = SuiteReport(
        base_url="http://shop.test",
        results=[
            ScenarioResult.success("hero_heading", diagnostics="Hero heading: 'Hi'"),
            ScenarioResult.failure(
                "footer_present",
                FailureKind.ASSERTION,
                "Footer should be present on the page",
            ),
        ],
    )
    console, buffer = _console()

    render_report(report, console)

    output = buffer.getvalue()
    assert "hero_heading" in output
    assert "PASS" in output
    assert "footer_present" in output
    assert "assertion" in output
    assert "Suite failed: 1 passed, 1 failed" in output


def test_render_report_green_suite():
    report = SuiteReport(base_url="http://shop.test", results=[ScenarioResult.success("a")])
    console, buffer = _console()

    render_report(report, console)

    assert "Suite green: 1 passed, 0 failed" in buffer.getvalue()


def test_scenario_results_are_immutable():
    result = ScenarioResult.success("a")

    with pytest.raises(Exception):
        result.passed = False  # type: ignore[misc]


def test_console_notifier_prints_level_and_message():
    console, buffer = _console()

    ConsoleNotifier(console).notify(
        NotificationEvent(type="scenario_failed", message="a: [boom]", level=NotificationLevel.ERROR)
    )

    assert "[ERROR] a: [boom]" in buffer.getvalue()


def test_build_notifier_channels():
    assert isinstance(build_notifier(NotificationConfig(channel="console")), ConsoleNotifier)
    assert isinstance(build_notifier(NotificationConfig(channel="silent")), NullNotifier)
    with pytest.raises(ValueError):
        build_notifier(NotificationConfig(channel="slack"))


def test_render_report_prints_page_text_verbatim():
    report = SuiteReport(
        base_url="http://shop.test",
        results=[
            ScenarioResult.success("hero_heading", diagnostics="Hero heading: '[bold]Sale[/x]'"),
            ScenarioResult.failure("footer_present", FailureKind.ERROR, "KeyError: '[red]'"),
        ],
    )
    console, buffer = _console()

    render_report(report, console)

    output = buffer.getvalue()
    assert "[bold]Sale[/x]" in output
    assert "KeyError: '[red]'" in output
