# family_library/scraper/session.py
"""
Browser session management for the library scraper.

Handles browser lifecycle and storage state persistence, so a Steam login
done once in a headed window can be reused on later runs.
"""

import logging
import os
from typing import Optional, Tuple

try:
    from playwright.sync_api import sync_playwright, Browser, BrowserContext, Playwright
    PLAYWRIGHT_AVAILABLE = True
except ImportError:
    PLAYWRIGHT_AVAILABLE = False
    Browser = None
    BrowserContext = None
    Playwright = None

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)
VIEWPORT = {"width": 1280, "height": 900}
CLIPBOARD_ORIGIN = "https://store.steampowered.com"


def create_browser_context(
    headed: bool = True,
    storage_state_path: Optional[str] = None
) -> Tuple['Playwright', 'Browser', 'BrowserContext']:
    """
    Start Playwright and open a Chromium browser context.

    Args:
        headed: If True, run browser in headed mode (visible window)
        storage_state_path: Path to storage state JSON file. If the file
                           exists, its cookies are loaded into the context.

    Returns:
        (playwright, browser, context) tuple

    Raises:
        ImportError: If Playwright is not installed
        RuntimeError: If browser launch fails
    """
    if not PLAYWRIGHT_AVAILABLE:
        raise ImportError(
            "Playwright is not installed.\n"
            "Install with: pip install playwright\n"
            "Then run: python -m playwright install chromium"
        )

    playwright = None
    try:
        playwright = sync_playwright().start()
        browser = playwright.chromium.launch(headless=not headed)

        context_kwargs = {
            "user_agent": USER_AGENT,
            "viewport": VIEWPORT,
            "locale": "en-US",
        }
        if storage_state_path and os.path.exists(storage_state_path):
            context_kwargs["storage_state"] = storage_state_path
            logger.debug("Loading storage state from %s", storage_state_path)

        context = browser.new_context(**context_kwargs)
        try:
            context.grant_permissions(["clipboard-read", "clipboard-write"], origin=CLIPBOARD_ORIGIN)
        except Exception as exc:
            logger.debug("Clipboard permissions not granted: %s", exc)

        return playwright, browser, context

    except Exception as e:
        if playwright is not None:
            playwright.stop()
        raise RuntimeError(f"Failed to create browser context: {e}")


def save_storage_state(context: 'BrowserContext', path: str) -> None:
    """
    Save browser storage state (cookies, localStorage, etc.) to JSON file.

    Raises:
        RuntimeError: If save fails
    """
    try:
        context.storage_state(path=path)
    except Exception as e:
        raise RuntimeError(f"Failed to save storage state to {path}: {e}")


def close_browser(playwright: Optional['Playwright'], browser: Optional['Browser']) -> None:
    """Close browser and stop Playwright; best effort."""
    if browser is not None:
        try:
            browser.close()
        except Exception as exc:
            logger.debug("Browser close failed: %s", exc)
    if playwright is not None:
        try:
            playwright.stop()
        except Exception as exc:
            logger.debug("Playwright stop failed: %s", exc)
