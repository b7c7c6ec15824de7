# family_library/driver.py
"""
Scroll-and-parse loop for lazily rendered library pages.

The driver keeps scrolling the page, re-parsing whatever is rendered and
merging it into one accumulator, until the item total has stopped growing
for a fixed number of passes.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Protocol

from family_library.models import LibraryAccumulator, LibraryReport
from family_library.parser import LibraryPageParser, LibrarySnapshot
from family_library.thresholds import DEFAULT_ACCOUNT_NAME, ScrollSettings

logger = logging.getLogger(__name__)


class WrongSurfaceError(Exception):
    """Raised when the page shows no library groups at all on the first pass."""


class RenderSurface(Protocol):
    """What the driver needs from a live page."""

    def snapshot(self) -> LibrarySnapshot:
        ...

    def scroll_by(self, amount: int) -> None:
        ...

    def scroll_to_end(self) -> None:
        ...

    def wait(self, ms: int) -> None:
        ...


class ConvergenceDriver:
    """Drive a render surface until the parsed library stops growing."""

    def __init__(
        self,
        surface: RenderSurface,
        parser: Optional[LibraryPageParser] = None,
        settings: Optional[ScrollSettings] = None,
    ):
        self.surface = surface
        self.parser = parser or LibraryPageParser()
        self.settings = settings or ScrollSettings()
        self.settings.validate()
        self.iterations = 0

    def run(self, account: str = DEFAULT_ACCOUNT_NAME) -> LibraryReport:
        """
        Scroll, parse and merge until the library total converges.

        Args:
            account: Account label stored on the report

        Returns:
            LibraryReport with items sorted by name inside each group

        Raises:
            WrongSurfaceError: If the first pass finds no groups and nothing
                has been collected
        """
        accumulator = LibraryAccumulator()
        settings = self.settings
        previous_total = 0
        unchanged_streak = 0
        self.iterations = 0

        while unchanged_streak < settings.max_unchanged:
            found = self._parse_into(accumulator)
            self.iterations += 1

            if self.iterations == 1 and not found and accumulator.is_empty():
                raise WrongSurfaceError(
                    "Couldn't find any games. Are you sure you're on the family library page?"
                )

            current_total = accumulator.total_items()
            if current_total > previous_total:
                logger.info("Found %s games so far, still scrolling...", current_total)
                previous_total = current_total
                unchanged_streak = 0
            else:
                unchanged_streak += 1

            if unchanged_streak >= settings.max_unchanged:
                break

            self.surface.scroll_by(settings.step_px)
            self.surface.wait(settings.step_wait_ms)

            if unchanged_streak > settings.nudge_after:
                logger.debug("No growth for %s passes, nudging the page", unchanged_streak)
                self.surface.scroll_by(-settings.nudge_px)
                self.surface.wait(settings.nudge_wait_ms)
                self.surface.scroll_by(settings.nudge_px)

        logger.info("Hit the bottom after %s passes, running a final pass", self.iterations)
        self.surface.scroll_to_end()
        self.surface.wait(settings.settle_wait_ms)
        self._parse_into(accumulator)

        return accumulator.to_report(account=account, extracted_at=datetime.now())

    def _parse_into(self, accumulator: LibraryAccumulator) -> bool:
        found, records = self.parser.parse(self.surface.snapshot())
        added = accumulator.merge(records)
        if added:
            logger.debug("Merged %s new games from %s records", added, len(records))
        return found
