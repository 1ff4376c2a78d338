"""Sequential runner that executes scenarios against one session."""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Optional, Sequence

from ..browser.base import BrowserSession
from ..models import NotificationEvent, NotificationLevel, ScenarioResult, SuiteReport
from ..notifications.base import NullNotifier, Notifier
from .scenario import Scenario
from .wait import ConditionWaiter

LOGGER = logging.getLogger(__name__)


class ScenarioRunner:
    """Execute scenarios in declared order and collect their results."""

    def __init__(
        self,
        waiter: Optional[ConditionWaiter] = None,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self._waiter = waiter or ConditionWaiter()
        self._notifier = notifier or NullNotifier()

    def run(
        self,
        session: BrowserSession,
        scenarios: Sequence[Scenario],
        base_url: str,
    ) -> SuiteReport:
        """Run every scenario, never stopping early on failures."""

        duplicates = [
            identifier
            for identifier, count in Counter(s.identifier for s in scenarios).items()
            if count > 1
        ]
        if duplicates:
            raise ValueError(f"Duplicate scenario identifiers: {', '.join(duplicates)}")
        session.require_active()

        report = SuiteReport(base_url=base_url)
        LOGGER.info("Running %d scenario(s) against %s", len(scenarios), base_url)
        self._notifier.notify(
            NotificationEvent(
                type="suite_started",
                message=f"Running {len(scenarios)} scenario(s) against {base_url}",
                data={"scenarios": [s.identifier for s in scenarios]},
            )
        )
        for scenario in scenarios:
            result = scenario.execute(session, base_url, self._waiter)
            report.results.append(result)
            self._notify_result(result)

        report.finished_at = datetime.now(timezone.utc)
        LOGGER.info(
            "Suite finished: %d passed, %d failed",
            report.passed_count,
            report.failed_count,
        )
        self._notifier.notify(
            NotificationEvent(
                type="suite_finished",
                message=f"{report.passed_count} passed, {report.failed_count} failed",
                level=NotificationLevel.SUCCESS if report.passed else NotificationLevel.ERROR,
                data={"passed": report.passed},
            )
        )
        return report

    def _notify_result(self, result: ScenarioResult) -> None:
        if result.passed:
            LOGGER.info("PASS %s", result.identifier)
            self._notifier.notify(
                NotificationEvent(
                    type="scenario_passed",
                    message=f"{result.identifier}: {result.diagnostics or 'ok'}",
                    level=NotificationLevel.SUCCESS,
                    data={"identifier": result.identifier},
                )
            )
            return
        kind = result.failure_kind.value if result.failure_kind else "unknown"
        LOGGER.warning("FAIL %s [%s] %s", result.identifier, kind, result.message)
        self._notifier.notify(
            NotificationEvent(
                type="scenario_failed",
                message=f"{result.identifier}: {result.message}",
                level=NotificationLevel.ERROR,
                data={"identifier": result.identifier, "failure_kind": kind},
            )
        )
