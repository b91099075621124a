# screengrab/capture/naming.py
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional


def timestamp(now: Optional[datetime] = None) -> str:
    """
    Local wall-clock time at second resolution, e.g. 2024-03-05_14H07M22S.
    Built field by field so the year is always four digits.
    """
    t = now or datetime.now()
    return (
        f"{t.year:04d}-{t.month:02d}-{t.day:02d}"
        f"_{t.hour:02d}H{t.minute:02d}M{t.second:02d}S"
    )


def build_filename(index: int, now: Optional[datetime] = None) -> str:
    return f"{index}_{timestamp(now)}.png"


def build_path(folder: Path, index: int, now: Optional[datetime] = None) -> Path:
    return Path(folder) / build_filename(index, now)
