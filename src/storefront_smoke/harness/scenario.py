"""Scenario definition: navigate, wait, assert, and report a result."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..browser.base import BrowserSession, DocumentSnapshot
from ..errors import (
    AssertionFailure,
    BrowserActionError,
    ConditionTimeoutError,
    NavigationError,
)
from ..models import FailureKind, ScenarioResult
from .wait import ConditionWaiter, WaitCondition

LOGGER = logging.getLogger(__name__)


@dataclass
class ScenarioContext:
    """Everything a scenario check may use while inspecting a page."""

    session: BrowserSession
    snapshot: DocumentSnapshot
    base_url: str
    waiter: ConditionWaiter

    def wait_for(self, condition: WaitCondition, timeout: Optional[float] = None) -> DocumentSnapshot:
        """Re-synchronise after the check changed page state."""

        self.waiter.wait_until(self.session, condition, timeout)
        self.snapshot = self.session.snapshot()
        return self.snapshot


ScenarioCheck = Callable[[ScenarioContext], Optional[str]]


def ensure(condition: object, message: str, *, expected: object = None, actual: object = None) -> None:
    if not condition:
        raise AssertionFailure(message, expected=expected, actual=actual)


def join_url(base_url: str, path: str) -> str:
    if not path:
        return base_url
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


@dataclass(frozen=True)
class Scenario:
    """One independent navigate-wait-assert unit of verification."""

    identifier: str
    path: str
    readiness: WaitCondition
    check: ScenarioCheck
    description: str = ""

    def execute(
        self,
        session: BrowserSession,
        base_url: str,
        waiter: ConditionWaiter,
    ) -> ScenarioResult:
        """Run the scenario and fold its outcome into a result.

        Every failure becomes a failed result so later scenarios still run.
        Errors outside the harness taxonomy are reported as ``ERROR`` with
        their traceback logged.
        """

        url = join_url(base_url, self.path)
        started = time.perf_counter()

        def elapsed() -> float:
            return time.perf_counter() - started

        try:
            session.navigate(url)
            waiter.wait_until(session, self.readiness)
            context = ScenarioContext(
                session=session,
                snapshot=session.snapshot(),
                base_url=base_url,
                waiter=waiter,
            )
            diagnostics = self.check(context) or ""
        except NavigationError as exc:
            return self._failed(FailureKind.NAVIGATION, exc, url, elapsed())
        except ConditionTimeoutError as exc:
            return self._failed(FailureKind.TIMEOUT, exc, session.current_url or url, elapsed())
        except AssertionFailure as exc:
            return self._failed(FailureKind.ASSERTION, exc, session.current_url or url, elapsed())
        except BrowserActionError as exc:
            return self._failed(FailureKind.BROWSER, exc, session.current_url or url, elapsed())
        except Exception as exc:
            LOGGER.exception("Scenario %s raised an unexpected error", self.identifier)
            return self._failed(
                FailureKind.ERROR,
                exc,
                session.current_url or url,
                elapsed(),
                message=f"{type(exc).__name__}: {exc}",
            )
        return ScenarioResult.success(
            self.identifier,
            diagnostics=diagnostics,
            url=session.current_url or url,
            duration=elapsed(),
        )

    def _failed(
        self,
        kind: FailureKind,
        exc: Exception,
        url: str,
        duration: float,
        message: Optional[str] = None,
    ) -> ScenarioResult:
        LOGGER.debug("Scenario %s failed (%s): %s", self.identifier, kind.value, exc)
        return ScenarioResult.failure(
            self.identifier,
            kind,
            message or str(exc),
            url=url,
            duration=duration,
        )
