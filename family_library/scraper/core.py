from __future__ import annotations

import logging
from typing import Optional

from family_library.driver import ConvergenceDriver
from family_library.models import LibraryReport
from family_library.parser import LibraryPageParser, LibrarySnapshot
from family_library.thresholds import (
    DEFAULT_ACCOUNT_NAME,
    INITIAL_WAIT_MS,
    LIBRARY_URL,
    SHOW_ALL_WAIT_MS,
    ScrollSettings,
)
from .session import close_browser, create_browser_context, save_storage_state
from .validation import apply_coverage_checks

logger = logging.getLogger(__name__)

# Clicks every leaf element whose exact text is "Show All" and returns how many.
_EXPAND_SHOW_ALL_JS = """
() => {
    let clicked = 0;
    for (const el of document.querySelectorAll('*')) {
        if (el.children.length === 0 && el.textContent.trim() === 'Show All') {
            el.click();
            clicked++;
        }
    }
    return clicked;
}
"""


def account_from_title(title: Optional[str]) -> str:
    """Turn a page title like "Gabe's Account" into an account label."""
    label = (title or "").replace("'s Account", "").replace("Steam Family", "").strip()
    return label or DEFAULT_ACCOUNT_NAME


class PlaywrightSurface:
    """RenderSurface backed by a live Playwright page."""

    def __init__(self, page):
        self.page = page

    def snapshot(self) -> LibrarySnapshot:
        return LibrarySnapshot(self.page.content())

    def scroll_by(self, amount: int) -> None:
        self.page.evaluate("(dy) => window.scrollBy(0, dy)", amount)

    def scroll_to_top(self) -> None:
        self.page.evaluate("() => window.scrollTo(0, 0)")

    def scroll_to_end(self) -> None:
        self.page.evaluate("() => window.scrollTo(0, document.body.scrollHeight)")

    def wait(self, ms: int) -> None:
        self.page.wait_for_timeout(ms)

    def expand_show_all(self) -> int:
        return int(self.page.evaluate(_EXPAND_SHOW_ALL_JS) or 0)

    def title(self) -> str:
        return self.page.title()

    def copy_to_clipboard(self, text: str) -> None:
        self.page.evaluate("(text) => navigator.clipboard.writeText(text)", text)


class LibraryScraper:
    """Steam Family library extractor using Playwright."""

    def __init__(
        self,
        headless: bool = False,
        storage_state_path: Optional[str] = "storage_state.json",
        settings: Optional[ScrollSettings] = None,
        parser: Optional[LibraryPageParser] = None,
    ):
        self.headless = headless
        self.storage_state_path = storage_state_path
        self.settings = settings or ScrollSettings()
        self.parser = parser or LibraryPageParser()
        self._playwright = None
        self.browser = None
        self.context = None
        self.page = None
        self.surface: Optional[PlaywrightSurface] = None

    # --- Main entry points ---

    def extract(self, url: str = LIBRARY_URL, keep_open: bool = False) -> LibraryReport:
        """
        Open the family library page and collect every listed game.

        Args:
            url: Library page URL
            keep_open: Leave the browser running afterwards (call close() later),
                       e.g. to copy the export to the page clipboard

        Returns:
            LibraryReport with coverage warnings attached

        Raises:
            WrongSurfaceError: If no library groups render on the page
            RuntimeError: If the browser cannot be started
        """
        self._launch_browser()
        try:
            self._navigate(url)
            surface = self.surface
            surface.scroll_to_top()
            surface.wait(INITIAL_WAIT_MS)
            self._expand_lists(surface)

            account = account_from_title(surface.title())
            logger.info("Scrolling through the library for %s", account)

            driver = ConvergenceDriver(surface, parser=self.parser, settings=self.settings)
            report = driver.run(account=account)
            apply_coverage_checks(report)

            if self.storage_state_path:
                save_storage_state(self.context, self.storage_state_path)

            return report
        finally:
            if not keep_open:
                self.close()

    def close(self) -> None:
        """Clean up browser resources."""
        close_browser(self._playwright, self.browser)
        self._playwright = None
        self.browser = None
        self.context = None
        self.page = None
        self.surface = None

    # --- Internal helpers ---

    def _launch_browser(self) -> None:
        if self.browser:
            return
        self._playwright, self.browser, self.context = create_browser_context(
            headed=not self.headless,
            storage_state_path=self.storage_state_path,
        )
        self.page = self.context.new_page()
        self.surface = PlaywrightSurface(self.page)

    def _navigate(self, url: str) -> None:
        logger.info("Loading %s", url)
        self.page.goto(url, wait_until="domcontentloaded")
        self.page.wait_for_timeout(INITIAL_WAIT_MS)

    def _expand_lists(self, surface: PlaywrightSurface) -> int:
        """Click every "Show All" toggle so collapsed groups render their tiles."""
        clicked = surface.expand_show_all()
        if clicked:
            logger.info("Clicked %s 'Show All' buttons, waiting for the lists to load", clicked)
            surface.wait(SHOW_ALL_WAIT_MS)
        else:
            logger.info("No 'Show All' buttons found, lists may already be expanded")
        return clicked
