"""Factories for constructing components from configuration."""

from __future__ import annotations

from .browser.manager import SessionManager
from .browser.playwright_session import PlaywrightBrowserSession
from .config import BrowserConfig, NotificationConfig
from .harness.runner import ScenarioRunner
from .harness.wait import ConditionWaiter
from .notifications.base import ConsoleNotifier, Notifier, NullNotifier


def build_browser(config: BrowserConfig) -> PlaywrightBrowserSession:
    return PlaywrightBrowserSession(config)


def build_session_manager() -> SessionManager:
    return SessionManager(factory=build_browser)


def build_waiter(config: BrowserConfig) -> ConditionWaiter:
    return ConditionWaiter(
        default_timeout=config.wait_timeout,
        poll_interval=config.poll_interval,
    )


def build_notifier(config: NotificationConfig) -> Notifier:
    channel = config.channel.lower()
    if channel == "console":
        return ConsoleNotifier()
    if channel in {"silent", "none"}:
        return NullNotifier()
    raise ValueError(f"Unsupported notification channel: {config.channel}")


def build_runner(config: BrowserConfig, notifier: Notifier) -> ScenarioRunner:
    return ScenarioRunner(waiter=build_waiter(config), notifier=notifier)
