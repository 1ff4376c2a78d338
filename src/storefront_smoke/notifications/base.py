"""Notification channels for suite progress."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console

from ..models import NotificationEvent


class Notifier(ABC):
    """Interface for sending notifications about suite events."""

    @abstractmethod
    def notify(self, event: NotificationEvent) -> None:
        """Send a notification event."""


class NullNotifier(Notifier):
    """Discard every event."""

    def notify(self, event: NotificationEvent) -> None:
        return None


class ConsoleNotifier(Notifier):
    """Simple notifier that prints to the console using Rich."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console or Console()

    def notify(self, event: NotificationEvent) -> None:
        style = {
            "info": "cyan",
            "warning": "yellow",
            "error": "red",
            "success": "green",
        }.get(event.level.value, "white")
        self._console.print(f"[{event.level.value.upper()}] {event.message}", style=style, markup=False)

