# tests/helpers.py

import os
from html import escape
from typing import Dict, List, Optional, Sequence, Tuple

from family_library.parser import LibrarySnapshot


def fixture_path(filename: str) -> str:
    path = os.path.join(os.path.dirname(__file__), "fixtures", filename)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Fixture not found: {filename}")
    return path


def read_fixture(filename: str) -> str:
    with open(fixture_path(filename), "r", encoding="utf-8") as f:
        return f.read()


def build_tile(name: str, app_id: Optional[int] = None, owners: Optional[str] = None,
               unavailable: bool = False) -> str:
    src = (
        f"https://shared.cloudflare.steamstatic.com/store_item_assets/steam/apps/{app_id}/header.jpg"
        if app_id else
        "https://store.cloudflare.steamstatic.com/public/images/applications/store/defaultappimage.jpg"
    )
    parts = [f'<div data-key="hover div"><img alt="{escape(name)}" src="{src}">']
    if owners is not None:
        parts.append(f'<div class="OchtG0jyJQXcr2o0t34q7">{escape(owners)}</div>')
    if unavailable:
        parts.append('<div class="_1tVCPhzTgmUpMpErm-4mHX">Unavailable</div>')
    parts.append("</div>")
    return "".join(parts)


def build_page(groups: Dict[str, Tuple[int, List[str]]]) -> str:
    """Render a minimal library page: {label: (declared_count, [game names])}."""
    sections = []
    for label, (declared, names) in groups.items():
        tiles = "".join(build_tile(name, app_id=1000 + i) for i, name in enumerate(names))
        sections.append(
            '<div class="_1o7lKXffOJjZ_CpH1bHfY-">'
            '<div class="LP9H7bBiPB8N8jFzCQumL">'
            f'<div class="_1M5eDPxFjv1ByJEK38h5Tu">{escape(label)}</div>'
            f'<div class="_3x604kYqXRJbqWmeLWAHrj">{declared} Titles</div>'
            '</div>'
            f'{tiles}</div>'
        )
    return f"<html><body>{''.join(sections)}</body></html>"


class ScriptedSurface:
    """
    RenderSurface stand-in that serves one page per snapshot() call.

    Once the scripted pages run out, the last page keeps being served.
    Every call is recorded in `calls` so tests can assert on ordering.
    """

    def __init__(self, pages: Sequence[str]):
        self.pages = list(pages)
        self.snapshots_taken = 0
        self.calls: List[tuple] = []
        self.copied: List[str] = []

    def snapshot(self) -> LibrarySnapshot:
        index = min(self.snapshots_taken, len(self.pages) - 1)
        self.snapshots_taken += 1
        self.calls.append(("snapshot",))
        return LibrarySnapshot(self.pages[index])

    def scroll_by(self, amount: int) -> None:
        self.calls.append(("scroll_by", amount))

    def scroll_to_end(self) -> None:
        self.calls.append(("scroll_to_end",))

    def wait(self, ms: int) -> None:
        self.calls.append(("wait", ms))

    def copy_to_clipboard(self, text: str) -> None:
        self.copied.append(text)

    def triggers(self) -> List[tuple]:
        return [call for call in self.calls if call[0] != "snapshot"]


def growing_pages(batches: int, per_batch: int, label: str = "Shared Library",
                  declared: int = 0) -> List[str]:
    """Pages that reveal per_batch more games on each of the first `batches` snapshots."""
    pages = []
    for batch in range(1, batches + 1):
        names = [f"Game {i:03d}" for i in range(batch * per_batch)]
        pages.append(build_page({label: (declared, names)}))
    return pages
