# screengrab/capture/orchestrator.py
from __future__ import annotations

"""Capture orchestrator
----------------------
Enumerates displays, makes sure the output folder exists, then for each
display: derive a timestamped name, grab the (trimmed) region, encode it as
PNG and write it. The first failure stops the run; files already written
are left in place.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from screengrab.capture.backend import ScreenBackend
from screengrab.capture.encoder import encode_png
from screengrab.capture.geometry import Rect, capture_rect
from screengrab.capture.naming import build_path, timestamp
from screengrab.errors import OutputDirError, WriteError
from screengrab.utils.config import Settings, get_settings
from screengrab.utils.logger import get_logger


@dataclass
class CaptureResult:
    index: int
    path: Path
    width: int
    height: int
    rect: Rect
    ts: str


@dataclass
class RunReport:
    displays: int = 0
    captures: List[CaptureResult] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)


def ensure_output_dir(path: Path, mode: int = 0o755) -> bool:
    """
    Create `path` if it is missing. Returns True when it was created.
    Raises OutputDirError if it cannot be created or is not a directory.
    """
    if path.is_dir():
        return False
    try:
        path.mkdir(mode=mode, parents=True)
    except OSError as e:
        raise OutputDirError(path, e.strerror or str(e)) from e
    return True


def write_png(path: Path, data: bytes) -> None:
    """Create/truncate `path` and write `data`; the handle is closed on return."""
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise WriteError(path, e.strerror or str(e)) from e


class Orchestrator:
    """Runs one capture pass over every active display."""

    def __init__(
        self,
        backend: ScreenBackend,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.backend = backend
        self.settings = settings or get_settings()
        self.clock = clock
        self.log = get_logger(__name__)

    @property
    def output_dir(self) -> Path:
        return self.settings.OUTPUT_DIR

    def run(self) -> RunReport:
        report = RunReport(displays=self.backend.display_count())
        if report.displays == 0:
            self.log.info("No active displays; nothing to capture.")
            return report

        if ensure_output_dir(self.output_dir, self.settings.DIR_MODE):
            self.log.info(f"Created output folder {self.output_dir}")

        for index in range(report.displays):
            result = self.capture_one(index)
            if result is None:
                report.skipped.append(index)
            else:
                report.captures.append(result)

        return report

    def capture_one(self, index: int) -> Optional[CaptureResult]:
        s = self.settings
        now = self.clock()  # sampled per display
        path = build_path(self.output_dir, index, now)

        display = self.backend.display(index)
        rect = capture_rect(
            display,
            full=s.TIMESTAMP_MODE,
            margin=s.TRIM_MARGIN,
            policy=s.SHORT_DISPLAY_POLICY,
            at_display_origin=s.TRIM_AT_DISPLAY_ORIGIN,
        )
        if rect is None:
            self.log.warning(
                f"Skipping display {index}: height {display.bounds.height}px <= trim margin {s.TRIM_MARGIN}px"
            )
            return None

        bitmap = self.backend.grab(rect, index)
        data = encode_png(bitmap)
        write_png(path, data)

        self.log.info(f"Saved display {index} ({bitmap.width}x{bitmap.height}) -> {path}")
        return CaptureResult(
            index=index,
            path=path,
            width=bitmap.width,
            height=bitmap.height,
            rect=rect,
            ts=timestamp(now),
        )
