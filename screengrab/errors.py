# screengrab/errors.py
from __future__ import annotations

"""Error taxonomy
----------------
Every failure that stops a run derives from ScreengrabError so the CLI can
turn it into a logged message and a non-zero exit status.
"""

from pathlib import Path
from typing import Optional


class ScreengrabError(Exception):
    """Base class for run-stopping failures."""


class OutputDirError(ScreengrabError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Could not create output folder {path}: {reason}")


class CaptureError(ScreengrabError):
    def __init__(self, index: Optional[int], reason: str):
        self.index = index
        where = f"display {index}" if index is not None else "display"
        super().__init__(f"Could not take a screenshot of {where}: {reason}")


class InvalidRegionError(CaptureError):
    """Trimmed capture rectangle has no area."""


class EncodeError(ScreengrabError):
    pass


class WriteError(ScreengrabError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Could not write {path}: {reason}")
