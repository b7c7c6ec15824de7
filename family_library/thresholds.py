# family_library/thresholds.py

from dataclasses import dataclass

LIBRARY_URL = "https://store.steampowered.com/account/familymanagement?tab=library"

# Consecutive passes without growth before the scroll loop stops.
MAX_UNCHANGED_SCROLLS = 12
# Past this many unchanged passes, each pass also nudges the page up and back down.
NUDGE_AFTER_UNCHANGED = 5

SCROLL_STEP_PX = 1000
SCROLL_WAIT_MS = 600
NUDGE_STEP_PX = 300
NUDGE_WAIT_MS = 150
SETTLE_WAIT_MS = 2000

INITIAL_WAIT_MS = 1000
SHOW_ALL_WAIT_MS = 3000

DEFAULT_ACCOUNT_NAME = "SteamFamily"


@dataclass
class ScrollSettings:
    """Tunables for the scroll-and-parse loop."""

    max_unchanged: int = MAX_UNCHANGED_SCROLLS
    nudge_after: int = NUDGE_AFTER_UNCHANGED
    step_px: int = SCROLL_STEP_PX
    step_wait_ms: int = SCROLL_WAIT_MS
    nudge_px: int = NUDGE_STEP_PX
    nudge_wait_ms: int = NUDGE_WAIT_MS
    settle_wait_ms: int = SETTLE_WAIT_MS

    def validate(self) -> None:
        if self.max_unchanged < 1:
            raise ValueError(f"max_unchanged must be >= 1 (got {self.max_unchanged})")
        if self.nudge_after < 0:
            raise ValueError(f"nudge_after must be >= 0 (got {self.nudge_after})")
        for name in ("step_px", "nudge_px", "step_wait_ms", "nudge_wait_ms", "settle_wait_ms"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0 (got {value})")
