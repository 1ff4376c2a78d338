"""In-memory browser doubles shared by the test modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from storefront_smoke.browser.base import BrowserSession, DocumentSnapshot, ElementInfo
from storefront_smoke.config import BrowserConfig
from storefront_smoke.errors import BrowserActionError, NavigationError, SessionStartError
from storefront_smoke.models import SessionState


@dataclass
class StaticDocument(DocumentSnapshot):
    page_url: Optional[str] = None
    page_title: Optional[str] = "Retro Paws"
    html: str = "<html><body></body></html>"
    body_text: str = ""
    elements: dict[str, list[ElementInfo]] = field(default_factory=dict)
    hidden_at_widths: set[int] = field(default_factory=set)
    viewport_width: int = 1920

    @property
    def url(self) -> Optional[str]:
        return self.page_url

    @property
    def title(self) -> Optional[str]:
        return self.page_title

    def markup(self) -> str:
        return self.html

    def text(self) -> str:
        return self.body_text

    def query(self, selector: str) -> list[ElementInfo]:
        found = self.elements.get(selector, [])
        if self.viewport_width in self.hidden_at_widths:
            return [ElementInfo(tag=e.tag, text=e.text, visible=False) for e in found]
        return list(found)


def element(tag: str, text: str = "", visible: bool = True) -> ElementInfo:
    return ElementInfo(tag=tag, text=text, visible=visible)


def storefront_home() -> StaticDocument:
    return StaticDocument(
        html=(
            "<html><body><nav>Shop</nav><h1>Retro Paws Emporium</h1>"
            "<section>Pet care services</section><div class='product-card'>Collar</div>"
            "<img src='dog.png'><form><input name='email'></form>"
            "<button>Cart</button><footer>Contact</footer></body></html>"
        ),
        body_text="Retro Paws Emporium Pet care services Collar Cart Contact",
        elements={
            "body": [element("body")],
            "nav": [element("nav", "Shop")],
            "h1": [element("h1", "Retro Paws Emporium")],
            "section": [element("section")],
            "[class*='card'], [class*='product']": [element("div", "Collar")],
            "img": [element("img")],
            "form": [element("form")],
            "input": [element("input")],
            "footer": [element("footer", "Contact")],
        },
    )


def simple_page(text: str, html: Optional[str] = None) -> StaticDocument:
    return StaticDocument(
        html=html or f"<html><body>{text}</body></html>",
        body_text=text,
        elements={"body": [element("body")]},
    )


class StubBrowserSession(BrowserSession):
    """Session whose pages are looked up by URL from a dictionary."""

    def __init__(
        self,
        pages: Optional[dict[str, StaticDocument]] = None,
        config: Optional[BrowserConfig] = None,
        *,
        unreachable: tuple[str, ...] = (),
        fail_start: bool = False,
    ) -> None:
        super().__init__(config)
        self.pages = pages or {}
        self.unreachable = set(unreachable)
        self.fail_start = fail_start
        self.visited: list[str] = []
        self.viewports: list[tuple[int, int]] = []
        self.start_calls = 0
        self.stop_calls = 0
        self.snapshot_error: Optional[BrowserActionError] = None
        self.snapshot_modes: list[bool] = []
        self._url: Optional[str] = None

    @property
    def current_url(self) -> Optional[str]:
        return self._url

    def start(self) -> None:
        self.start_calls += 1
        if self.fail_start:
            raise SessionStartError("chromium executable not found")
        self._state = SessionState.ACTIVE

    def stop(self) -> None:
        self.stop_calls += 1
        self._state = SessionState.CLOSED

    def navigate(self, url: str) -> None:
        self.require_active()
        if url in self.unreachable:
            raise NavigationError(url, "net::ERR_NAME_NOT_RESOLVED")
        self.visited.append(url)
        self._url = url

    def set_viewport(self, width: int, height: int) -> None:
        self.viewports.append((width, height))
        for page in self.pages.values():
            page.viewport_width = width

    def snapshot(self, *, implicit_wait: bool = True) -> DocumentSnapshot:
        self.snapshot_modes.append(implicit_wait)
        if self.snapshot_error is not None:
            raise self.snapshot_error
        page = self.pages.get(self._url or "")
        if page is None:
            return StaticDocument(page_url=self._url)
        page.page_url = self._url
        return page


class FakeClock:
    """Monotonic clock that only advances when ``sleep`` is called."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
