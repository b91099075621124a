# screengrab/capture/geometry.py
from __future__ import annotations

"""Display and capture-rectangle geometry
---------------------------------------
Rectangles live in the global virtual-screen coordinate space reported by
the OS. A trimmed capture drops a fixed strip from the bottom of the display
where the taskbar clock sits.
"""

from dataclasses import dataclass
from typing import Optional

from screengrab.errors import InvalidRegionError
from screengrab.utils.config import ShortDisplayPolicy


@dataclass(frozen=True)
class Rect:
    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    @property
    def empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def as_monitor(self) -> dict:
        """mss-style region dict."""
        return {"left": self.left, "top": self.top, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class Display:
    """OS-reported display: index plus bounds."""
    index: int
    bounds: Rect


def capture_rect(
    display: Display,
    *,
    full: bool = False,
    margin: int = 50,
    policy: ShortDisplayPolicy = ShortDisplayPolicy.reject,
    at_display_origin: bool = False,
) -> Optional[Rect]:
    """
    Region to request from the capture backend for `display`.

    full=True returns the display bounds unchanged. Otherwise the rectangle
    is W x (H - margin), anchored at (0, 0) or at the display origin.
    When H <= margin the policy decides: reject raises InvalidRegionError,
    full returns the untrimmed height, skip returns None.
    """
    b = display.bounds
    if full:
        return b

    left, top = (b.left, b.top) if at_display_origin else (0, 0)
    height = b.height - margin
    if height <= 0:
        if policy is ShortDisplayPolicy.full:
            return Rect(left, top, b.width, b.height)
        if policy is ShortDisplayPolicy.skip:
            return None
        raise InvalidRegionError(
            display.index, f"height {b.height}px leaves nothing after trimming {margin}px"
        )
    return Rect(left, top, b.width, height)
