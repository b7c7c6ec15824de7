# family_library/scraper/__init__.py
"""
Playwright-backed scraping of the Steam Family library page.
"""

from .session import create_browser_context, save_storage_state, close_browser
from .validation import coverage_warnings, apply_coverage_checks
from .core import LibraryScraper, PlaywrightSurface, account_from_title

__all__ = [
    'create_browser_context',
    'save_storage_state',
    'close_browser',
    'coverage_warnings',
    'apply_coverage_checks',
    'LibraryScraper',
    'PlaywrightSurface',
    'account_from_title',
]
