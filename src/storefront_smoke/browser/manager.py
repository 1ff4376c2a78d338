"""Lifecycle management for the suite's browser session."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from ..config import BrowserConfig
from ..errors import SessionStartError
from .base import BrowserSession

LOGGER = logging.getLogger(__name__)

SessionFactory = Callable[[BrowserConfig], BrowserSession]


def _default_factory(config: BrowserConfig) -> BrowserSession:
    from .playwright_session import PlaywrightBrowserSession

    return PlaywrightBrowserSession(config)


class SessionManager:
    """Create, hand out and reliably shut down browser sessions."""

    def __init__(self, factory: Optional[SessionFactory] = None) -> None:
        self._factory = factory or _default_factory

    def start(self, config: BrowserConfig) -> BrowserSession:
        """Launch a session, stopping any partially started resources on failure."""

        session = self._factory(config)
        try:
            session.start()
        except SessionStartError:
            self.stop(session)
            raise
        except Exception as exc:
            self.stop(session)
            raise SessionStartError(str(exc)) from exc
        return session

    def stop(self, session: BrowserSession) -> None:
        try:
            session.stop()
        except Exception:
            LOGGER.exception("Failed to stop browser session cleanly")

    @contextmanager
    def session(self, config: BrowserConfig) -> Iterator[BrowserSession]:
        """Yield an active session and stop it on every exit path."""

        session = self.start(config)
        try:
            yield session
        finally:
            self.stop(session)
