"""Browser session abstractions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from ..config import BrowserConfig
from ..errors import SessionStateError
from ..models import SessionState


@dataclass(frozen=True)
class ElementInfo:
    """Read-only description of one element matched by a selector."""

    tag: str
    text: str = ""
    visible: bool = False
    attributes: dict[str, str] = field(default_factory=dict)


class DocumentSnapshot(ABC):
    """Queryable view of the page currently loaded in a session.

    Backends may return a live view: every call reads the document as it is
    at that moment, so two calls can observe different DOM states. When the
    view was taken with implicit waiting, ``query`` blocks up to the
    configured lookup timeout for a first match before returning.
    """

    @property
    @abstractmethod
    def url(self) -> Optional[str]:
        """URL of the loaded document."""

    @property
    @abstractmethod
    def title(self) -> Optional[str]:
        """Document title."""

    @abstractmethod
    def markup(self) -> str:
        """Return the raw HTML of the document."""

    @abstractmethod
    def text(self) -> str:
        """Return the rendered text of the document body."""

    @abstractmethod
    def query(self, selector: str) -> list[ElementInfo]:
        """Return every element matching ``selector`` in document order."""

    def count(self, selector: str) -> int:
        return len(self.query(selector))

    def exists(self, selector: str) -> bool:
        return self.count(selector) > 0

    def is_visible(self, selector: str) -> bool:
        """True when the first element matching ``selector`` is visible."""

        elements = self.query(selector)
        return bool(elements) and elements[0].visible

    def contains_text(self, *needles: str, source: str = "markup") -> bool:
        """Case-insensitive check that any of ``needles`` occurs in the page."""

        haystack = (self.markup() if source == "markup" else self.text()).lower()
        return any(needle.lower() in haystack for needle in needles)


class BrowserSession(ABC):
    """Interface for an automation-capable browser session."""

    def __init__(self, config: Optional[BrowserConfig] = None) -> None:
        self.config = config or BrowserConfig()
        self._state = SessionState.UNSTARTED

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is SessionState.ACTIVE

    def require_active(self) -> None:
        if self._state is not SessionState.ACTIVE:
            raise SessionStateError(f"Browser session is {self._state.value}, expected active")

    @property
    @abstractmethod
    def current_url(self) -> Optional[str]:
        """URL the session last navigated to."""

    @abstractmethod
    def start(self) -> None:
        """Launch the browser session."""

    @abstractmethod
    def stop(self) -> None:
        """Terminate the browser session and release its resources."""

    @abstractmethod
    def navigate(self, url: str) -> None:
        """Load ``url`` in the session's page."""

    @abstractmethod
    def set_viewport(self, width: int, height: int) -> None:
        """Resize the page viewport."""

    @abstractmethod
    def snapshot(self, *, implicit_wait: bool = True) -> DocumentSnapshot:
        """Return a view of the currently loaded document.

        With ``implicit_wait`` element lookups wait for a first match; without
        it they return immediately.
        """
