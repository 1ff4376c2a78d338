"""Shared models used across the smoke harness."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class SessionState(str, enum.Enum):
    """Lifecycle of a browser session."""

    UNSTARTED = "unstarted"
    ACTIVE = "active"
    CLOSED = "closed"


class FailureKind(str, enum.Enum):
    """Why a scenario failed."""

    ASSERTION = "assertion"
    TIMEOUT = "timeout"
    NAVIGATION = "navigation"
    BROWSER = "browser"
    ERROR = "error"


class ScenarioResult(BaseModel):
    """Outcome of a single scenario."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    passed: bool
    failure_kind: Optional[FailureKind] = None
    message: Optional[str] = Field(default=None, description="Failure description.")
    diagnostics: str = ""
    url: Optional[str] = None
    duration: float = 0.0

    @classmethod
    def success(cls, identifier: str, **kwargs: Any) -> "ScenarioResult":
        return cls(identifier=identifier, passed=True, **kwargs)

    @classmethod
    def failure(
        cls,
        identifier: str,
        kind: FailureKind,
        message: str,
        **kwargs: Any,
    ) -> "ScenarioResult":
        return cls(
            identifier=identifier,
            passed=False,
            failure_kind=kind,
            message=message,
            **kwargs,
        )


class SuiteReport(BaseModel):
    """Ordered results of one suite run."""

    base_url: str
    results: list[ScenarioResult] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = None

    @property
    def passed(self) -> bool:
        return all(result.passed for result in self.results)

    @property
    def failures(self) -> list[ScenarioResult]:
        return [result for result in self.results if not result.passed]

    @property
    def passed_count(self) -> int:
        return sum(1 for result in self.results if result.passed)

    @property
    def failed_count(self) -> int:
        return len(self.results) - self.passed_count


class NotificationLevel(str, enum.Enum):
    """Severity of notification events."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


class NotificationEvent(BaseModel):
    """Event emitted while a suite runs."""

    type: str
    message: str
    level: NotificationLevel = NotificationLevel.INFO
    data: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
