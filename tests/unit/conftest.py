from pathlib import Path
from typing import List, Optional, Sequence

import pytest

from screengrab.capture.encoder import Bitmap
from screengrab.capture.geometry import Display, Rect
from screengrab.errors import CaptureError
from screengrab.utils.config import get_settings


class FakeBackend:
    """In-memory ScreenBackend: solid-colour bitmaps sized to the requested rect."""

    def __init__(self, bounds: Sequence[Rect], fail_on: Sequence[int] = ()):
        self.bounds = list(bounds)
        self.fail_on = set(fail_on)
        self.grabbed: List[Rect] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return None

    def display_count(self) -> int:
        return len(self.bounds)

    def display(self, index: int) -> Display:
        return Display(index=index, bounds=self.bounds[index])

    def grab(self, rect: Rect, index: Optional[int] = None) -> Bitmap:
        if index in self.fail_on:
            raise CaptureError(index, "permission denied")
        self.grabbed.append(rect)
        pixel = bytes([10 * (index or 0), 120, 200, 255])
        return Bitmap(rect.width, rect.height, pixel * (rect.width * rect.height))


TWO_DISPLAYS = [Rect(0, 0, 1920, 1080), Rect(1920, 0, 1920, 1080)]


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch):
    for key in ("OUTPUT_DIR", "TRIM_MARGIN", "TIMESTAMP_MODE", "SHORT_DISPLAY_POLICY", "TRIM_AT_DISPLAY_ORIGIN"):
        monkeypatch.delenv(f"SCREENGRAB_{key}", raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def two_displays() -> FakeBackend:
    return FakeBackend(TWO_DISPLAYS)
