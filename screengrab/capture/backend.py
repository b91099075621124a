# screengrab/capture/backend.py
from __future__ import annotations

"""Screen-capture backends
------------------------
`ScreenBackend` is the seam between the orchestrator and the OS capture
primitive. `MssBackend` implements it on top of mss; tests use an in-memory
fake with the same three methods.
"""

from typing import Optional, Protocol

import mss
from mss.exception import ScreenShotError
from PIL import Image

from screengrab.capture.encoder import Bitmap
from screengrab.capture.geometry import Display, Rect
from screengrab.errors import CaptureError
from screengrab.utils.logger import get_logger
from screengrab.utils.timing import measure


class ScreenBackend(Protocol):
    def display_count(self) -> int: ...

    def display(self, index: int) -> Display: ...

    def grab(self, rect: Rect, index: Optional[int] = None) -> Bitmap: ...


class MssBackend:
    """
    mss-backed capture. Use as a context manager so the native handle
    (X11 display, GDI DC, ...) is released at the end of the run.

    mss reports the combined virtual screen as monitors[0]; display i is
    monitors[i + 1].
    """

    def __init__(self):
        self.log = get_logger(__name__)
        self._sct: Optional[mss.base.MSSBase] = None

    def __enter__(self) -> "MssBackend":
        try:
            self._sct = mss.mss()
        except ScreenShotError as e:
            raise CaptureError(None, f"screen capture unavailable: {e}") from e
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._sct is not None:
            self._sct.close()
            self._sct = None

    @property
    def sct(self) -> mss.base.MSSBase:
        if self._sct is None:
            raise RuntimeError("MssBackend used outside of its context manager")
        return self._sct

    # ----------- ScreenBackend -----------

    def _monitors(self, index: Optional[int] = None) -> list[dict]:
        # mss enumerates lazily, so XRandR / EnumDisplayMonitors errors surface here
        try:
            return self.sct.monitors
        except ScreenShotError as e:
            raise CaptureError(index, f"could not enumerate displays: {e}") from e

    def display_count(self) -> int:
        return max(0, len(self._monitors()) - 1)

    def display(self, index: int) -> Display:
        mon = self._monitors(index)[index + 1]
        return Display(
            index=index,
            bounds=Rect(mon["left"], mon["top"], mon["width"], mon["height"]),
        )

    @measure("grab")
    def grab(self, rect: Rect, index: Optional[int] = None) -> Bitmap:
        if rect.empty:
            raise CaptureError(index, f"empty capture rectangle {rect}")
        try:
            shot = self.sct.grab(rect.as_monitor())
        except ScreenShotError as e:
            raise CaptureError(index, str(e)) from e

        # mss hands back BGRA rows; drop its alpha and go to opaque RGBA
        img = Image.frombytes("RGB", shot.size, shot.bgra, "raw", "BGRX").convert("RGBA")
        self.log.debug(f"Grabbed {shot.width}x{shot.height} at ({rect.left}, {rect.top})")
        return Bitmap(width=img.width, height=img.height, pixels=img.tobytes())
