"""Playwright-powered browser session implementation."""

from __future__ import annotations

import logging
from typing import Any, Optional

from playwright.sync_api import Error, Page, sync_playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..config import BrowserConfig
from ..errors import BrowserActionError, NavigationError, SessionStartError, SessionStateError
from ..models import SessionState
from .base import BrowserSession, DocumentSnapshot, ElementInfo

LOGGER = logging.getLogger(__name__)

_DESCRIBE_ELEMENTS = """
(elements) => elements.map((el) => {
    const style = window.getComputedStyle(el);
    const visible = !!(el.offsetWidth || el.offsetHeight || el.getClientRects().length)
        && style.visibility !== "hidden";
    const attributes = {};
    for (const attr of Array.from(el.attributes)) {
        attributes[attr.name] = attr.value;
    }
    return {
        tag: el.tagName.toLowerCase(),
        text: (el.innerText || el.textContent || "").trim(),
        visible: visible,
        attributes: attributes,
    };
})
"""

_BODY_TEXT = "() => document.body ? document.body.innerText : ''"


class PlaywrightDocument(DocumentSnapshot):
    """Live document view over a Playwright page."""

    def __init__(self, page: Page, lookup_timeout: float = 0.0) -> None:
        self._page = page
        self._lookup_timeout = lookup_timeout

    @property
    def url(self) -> Optional[str]:
        return self._page.url

    @property
    def title(self) -> Optional[str]:
        return _call(self._page.title)

    def markup(self) -> str:
        return _call(self._page.content)

    def text(self) -> str:
        return _call(self._page.evaluate, _BODY_TEXT) or ""

    def query(self, selector: str) -> list[ElementInfo]:
        locator = self._page.locator(selector)
        if self._lookup_timeout > 0:
            try:
                locator.first.wait_for(state="attached", timeout=self._lookup_timeout * 1000)
            except PlaywrightTimeoutError:
                LOGGER.debug("No match for %r within %ss", selector, self._lookup_timeout)
            except Error as exc:
                raise BrowserActionError(exc.message) from exc
        raw = _call(locator.evaluate_all, _DESCRIBE_ELEMENTS)
        return [
            ElementInfo(
                tag=item["tag"],
                text=item.get("text", ""),
                visible=bool(item.get("visible")),
                attributes=dict(item.get("attributes") or {}),
            )
            for item in raw
        ]


class PlaywrightBrowserSession(BrowserSession):
    """Browser session backed by Playwright."""

    def __init__(self, config: Optional[BrowserConfig] = None) -> None:
        super().__init__(config)
        self._playwright = None
        self._browser = None
        self._context = None
        self._page: Optional[Page] = None

    @property
    def current_url(self) -> Optional[str]:
        if not self._page:
            return None
        return self._page.url

    def start(self) -> None:
        if self._state is not SessionState.UNSTARTED:
            raise SessionStartError(f"Cannot start a session that is {self._state.value}")
        LOGGER.debug("Starting Playwright %s session", self.config.browser_type)
        try:
            self._playwright = sync_playwright().start()
            launcher = getattr(self._playwright, self.config.browser_type)
            self._browser = launcher.launch(
                headless=self.config.headless,
                args=self.config.launch_args(),
            )
            width, height = self.config.window_size
            self._context = self._browser.new_context(
                viewport={"width": width, "height": height},
            )
            self._context.set_default_timeout(self.config.implicit_timeout * 1000)
            self._page = self._context.new_page()
        except Error as exc:
            raise SessionStartError(f"Unable to launch {self.config.browser_type}: {exc}") from exc
        self._state = SessionState.ACTIVE
        LOGGER.info("Browser session started (headless=%s)", self.config.headless)

    def stop(self) -> None:
        if self._state is SessionState.CLOSED:
            return
        LOGGER.debug("Stopping Playwright browser session")
        try:
            if self._context:
                self._context.close()
        finally:
            try:
                if self._browser:
                    self._browser.close()
            finally:
                if self._playwright:
                    self._playwright.stop()
                self._context = None
                self._browser = None
                self._playwright = None
                self._page = None
                self._state = SessionState.CLOSED
        LOGGER.info("Browser session closed")

    def navigate(self, url: str) -> None:
        page = self._require_page()
        LOGGER.debug("Navigating to %s", url)
        try:
            page.goto(url, wait_until="load")
        except Error as exc:
            raise NavigationError(url, exc.message) from exc

    def set_viewport(self, width: int, height: int) -> None:
        page = self._require_page()
        LOGGER.debug("Resizing viewport to %sx%s", width, height)
        _call(page.set_viewport_size, {"width": width, "height": height})

    def snapshot(self, *, implicit_wait: bool = True) -> DocumentSnapshot:
        lookup_timeout = self.config.implicit_timeout if implicit_wait else 0.0
        return PlaywrightDocument(self._require_page(), lookup_timeout)

    def _require_page(self) -> Page:
        self.require_active()
        if self._page is None:
            raise SessionStateError("Browser session has no open page")
        return self._page


def _call(func: Any, *args: Any) -> Any:
    try:
        return func(*args)
    except Error as exc:
        raise BrowserActionError(exc.message) from exc
