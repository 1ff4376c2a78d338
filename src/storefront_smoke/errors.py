"""Exception hierarchy for the smoke harness."""

from __future__ import annotations

from typing import Optional


class HarnessError(Exception):
    """Base class for harness failures."""


class SessionStartError(HarnessError):
    """Raised when the browser cannot be located or launched."""


class SessionStateError(HarnessError):
    """Raised when a session is used outside of its active lifetime."""


class BrowserActionError(HarnessError):
    """Raised when the browser backend fails to carry out a request."""


class NavigationError(BrowserActionError):
    """Raised when a URL cannot be loaded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to load {url}: {reason}")
        self.url = url
        self.reason = reason


class ConditionTimeoutError(HarnessError, TimeoutError):
    """Raised when a readiness condition does not hold within its timeout."""

    def __init__(
        self,
        description: str,
        timeout: float,
        last_error: Optional[BaseException] = None,
    ) -> None:
        message = f"condition not met within timeout: {description} ({timeout:g}s)"
        if last_error is not None:
            message = f"{message}; last error: {last_error}"
        super().__init__(message)
        self.description = description
        self.timeout = timeout
        self.last_error = last_error


class AssertionFailure(HarnessError, AssertionError):
    """Raised when a page does not satisfy an expected property."""

    def __init__(self, message: str, *, expected: object = None, actual: object = None) -> None:
        detail = message
        if expected is not None or actual is not None:
            detail = f"{message} (expected: {expected!r}, actual: {actual!r})"
        super().__init__(detail)
        self.expected = expected
        self.actual = actual


class UnknownScenarioError(HarnessError, KeyError):
    """Raised when a scenario identifier is not part of the catalogue."""

    def __init__(self, identifiers: list[str]) -> None:
        super().__init__(f"Unknown scenario(s): {', '.join(identifiers)}")
        self.identifiers = identifiers

    def __str__(self) -> str:
        return str(self.args[0])
