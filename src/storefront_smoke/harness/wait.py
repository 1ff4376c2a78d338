"""Readiness conditions and the polling waiter that evaluates them."""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..browser.base import BrowserSession, DocumentSnapshot
from ..errors import BrowserActionError, ConditionTimeoutError

LOGGER = logging.getLogger(__name__)

_TAG_NAME = re.compile(r"^[a-zA-Z][a-zA-Z0-9-]*$")


@dataclass(frozen=True)
class WaitCondition:
    """A named predicate over a document snapshot."""

    description: str
    predicate: Callable[[DocumentSnapshot], bool]

    def __call__(self, snapshot: DocumentSnapshot) -> bool:
        return bool(self.predicate(snapshot))


def tag_present(tag: str) -> WaitCondition:
    if not _TAG_NAME.match(tag):
        raise ValueError(f"Invalid tag name: {tag!r}")
    return WaitCondition(f"<{tag}> present", lambda snapshot: snapshot.exists(tag))


def element_present(selector: str) -> WaitCondition:
    return WaitCondition(f"{selector!r} present", lambda snapshot: snapshot.exists(selector))


def element_visible(selector: str) -> WaitCondition:
    return WaitCondition(f"{selector!r} visible", lambda snapshot: snapshot.is_visible(selector))


def body_present() -> WaitCondition:
    return tag_present("body")


def text_contains(*needles: str) -> WaitCondition:
    if not needles:
        raise ValueError("text_contains requires at least one needle")
    return WaitCondition(
        f"text contains one of {list(needles)!r}",
        lambda snapshot: snapshot.contains_text(*needles, source="text"),
    )


def any_of(*conditions: WaitCondition) -> WaitCondition:
    if not conditions:
        raise ValueError("any_of requires at least one condition")
    return WaitCondition(
        " or ".join(condition.description for condition in conditions),
        lambda snapshot: any(condition(snapshot) for condition in conditions),
    )


class ConditionWaiter:
    """Poll a session's document until a condition holds or time runs out."""

    def __init__(
        self,
        *,
        default_timeout: float = 15.0,
        poll_interval: float = 0.25,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self._default_timeout = default_timeout
        self._poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

    def wait_until(
        self,
        session: BrowserSession,
        condition: WaitCondition,
        timeout: Optional[float] = None,
    ) -> DocumentSnapshot:
        """Return the first snapshot satisfying ``condition``.

        The condition is checked immediately, then every ``poll_interval``
        seconds. One last check happens at the deadline before
        :class:`ConditionTimeoutError` is raised. Backend errors raised while
        polling count as an unsatisfied check. Polls read the document without
        implicit lookup waits so the deadline is kept.
        """

        session.require_active()
        budget = self._default_timeout if timeout is None else timeout
        deadline = self._clock() + budget
        last_error: Optional[BrowserActionError] = None
        attempts = 0
        while True:
            attempts += 1
            try:
                snapshot = session.snapshot(implicit_wait=False)
                if condition(snapshot):
                    LOGGER.debug("%s satisfied after %d check(s)", condition.description, attempts)
                    return snapshot
            except BrowserActionError as exc:
                last_error = exc
                LOGGER.debug("Check for %s failed: %s", condition.description, exc)
            remaining = deadline - self._clock()
            if remaining <= 0:
                LOGGER.info("Timed out waiting for %s after %ss", condition.description, budget)
                raise ConditionTimeoutError(condition.description, budget, last_error)
            self._sleep(min(self._poll_interval, remaining))
