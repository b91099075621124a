"""
Capture package for screengrab.
Display geometry, the mss backend, PNG encoding and the per-run orchestrator.
"""

from .backend import MssBackend, ScreenBackend
from .encoder import Bitmap, encode_png
from .geometry import Display, Rect, capture_rect
from .orchestrator import CaptureResult, Orchestrator, RunReport

__all__ = [
    "Bitmap",
    "CaptureResult",
    "Display",
    "MssBackend",
    "Orchestrator",
    "Rect",
    "RunReport",
    "ScreenBackend",
    "capture_rect",
    "encode_png",
]
