# family_library/parser.py

import re
from typing import List, Optional, Tuple, Union

from bs4 import BeautifulSoup

from family_library.models import LibraryItem, LibraryRecord

STORE_APP_URL = "https://store.steampowered.com/app/{app_id}/"


class LibrarySnapshot:
    """
    Rendered markup of the family library page at one moment in time.

    Wraps the structural queries the parser needs so the selectors live in
    one place. Steam ships generated class names, so expect these to need
    updating whenever the store frontend is rebuilt.
    """

    GROUP_SELECTOR = "._1o7lKXffOJjZ_CpH1bHfY-"
    HEADER_SELECTOR = ".LP9H7bBiPB8N8jFzCQumL"
    LABEL_SELECTOR = "._1M5eDPxFjv1ByJEK38h5Tu"
    COUNT_SELECTOR = "._3x604kYqXRJbqWmeLWAHrj"
    TILE_SELECTOR = '[data-key="hover div"]'
    UNAVAILABLE_SELECTOR = "._1tVCPhzTgmUpMpErm-4mHX"
    OWNERS_BADGE_SELECTOR = ".OchtG0jyJQXcr2o0t34q7"

    def __init__(self, html: str):
        self.soup = BeautifulSoup(html or "", "html.parser")

    def query_groups(self) -> list:
        return self.soup.select(self.GROUP_SELECTOR)

    def query_item_tiles(self, group) -> list:
        return group.select(self.TILE_SELECTOR)

    def query_header(self, group):
        return group.select_one(self.HEADER_SELECTOR)


class LibraryPageParser:
    """
    Parse grouped game tiles out of a library page snapshot.

    Missing sub-elements never raise: labels fall back to "Unknown", counts
    to 0, and tiles without a usable name are skipped because the page may
    simply not have finished rendering them yet.
    """

    UNKNOWN_LABEL = "Unknown"
    PLACEHOLDER_IMAGE_MARKER = "defaultappimage"

    _COUNT_RE = re.compile(r"\d{1,3}(?:[,.\u00a0\u202f ]\d{3})+(?!\d)|\d+")
    _LEADING_INT_RE = re.compile(r"^\s*(\d+)")
    _APP_LINK_RE = re.compile(r"/app/(\d+)")
    _APP_IMAGE_RE = re.compile(r"/apps/(\d+)/")

    def parse(self, snapshot: Union[LibrarySnapshot, str]) -> Tuple[bool, List[LibraryRecord]]:
        """
        Extract (group, item) records from the current render state.

        Args:
            snapshot: LibrarySnapshot or raw page HTML

        Returns:
            (found, records) tuple:
            - found: False when no group containers are rendered at all
            - records: one LibraryRecord per named tile, in page order; a
              group with no named tiles yields a single record with item=None
        """
        if isinstance(snapshot, str):
            snapshot = LibrarySnapshot(snapshot)

        groups = snapshot.query_groups()
        if not groups:
            return (False, [])

        records: List[LibraryRecord] = []
        for group in groups:
            label, declared_count = self._parse_header(snapshot, group)
            group_records = []
            for tile in snapshot.query_item_tiles(group):
                item = self._parse_tile(snapshot, tile)
                if item is None:
                    continue
                group_records.append(LibraryRecord(group_label=label, declared_count=declared_count, item=item))

            if not group_records:
                group_records.append(LibraryRecord(group_label=label, declared_count=declared_count))
            records.extend(group_records)

        return (True, records)

    def _parse_header(self, snapshot: LibrarySnapshot, group) -> Tuple[str, int]:
        header = snapshot.query_header(group)
        if header is None:
            return (self.UNKNOWN_LABEL, 0)

        label_el = header.select_one(snapshot.LABEL_SELECTOR)
        label = label_el.get_text(strip=True) if label_el else ""

        count_el = header.select_one(snapshot.COUNT_SELECTOR)
        count_text = count_el.get_text(" ", strip=True) if count_el else ""

        return (label or self.UNKNOWN_LABEL, self._parse_count(count_text))

    def _parse_tile(self, snapshot: LibrarySnapshot, tile) -> Optional[LibraryItem]:
        img = tile.select_one("img")
        if img is None:
            return None

        name = (img.get("alt") or "").strip()
        if not name:
            return None

        src = img.get("src") or ""
        unavailable = (
            self.PLACEHOLDER_IMAGE_MARKER in src
            or tile.select_one(snapshot.UNAVAILABLE_SELECTOR) is not None
        )

        badge = tile.select_one(snapshot.OWNERS_BADGE_SELECTOR)
        owners = self._parse_owner_count(badge.get_text(strip=True)) if badge else None

        return LibraryItem(
            name=name,
            unavailable=unavailable,
            family_owners=owners,
            store_url=self._resolve_store_url(tile, src),
        )

    def _parse_count(self, text: str) -> int:
        """Parse '1,234 Titles' -> 1234; anything unreadable -> 0."""
        match = self._COUNT_RE.search(text or "")
        if not match:
            return 0
        digits = re.sub(r"\D", "", match.group(0))
        try:
            return int(digits)
        except ValueError:
            return 0

    def _parse_owner_count(self, text: str) -> Optional[int]:
        match = self._LEADING_INT_RE.match(text or "")
        if not match:
            return None
        owners = int(match.group(1))
        return owners if owners > 0 else None

    def _resolve_store_url(self, tile, image_src: str) -> Optional[str]:
        for link in tile.select("a[href]"):
            href = link.get("href") or ""
            match = self._APP_LINK_RE.search(href)
            if match:
                return STORE_APP_URL.format(app_id=match.group(1))

        match = self._APP_IMAGE_RE.search(image_src)
        if match:
            return STORE_APP_URL.format(app_id=match.group(1))
        return None
