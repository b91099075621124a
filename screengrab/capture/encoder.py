# screengrab/capture/encoder.py
from __future__ import annotations

"""Bitmap container and PNG encoding (Pillow)."""

import io
from dataclasses import dataclass

from PIL import Image

from screengrab.errors import EncodeError
from screengrab.utils.timing import measure


@dataclass
class Bitmap:
    """RGBA pixel grid, row-major, 4 bytes per pixel."""
    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * 4
        if len(self.pixels) != expected:
            raise ValueError(
                f"bitmap {self.width}x{self.height} needs {expected} bytes, got {len(self.pixels)}"
            )

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def to_image(self) -> Image.Image:
        return Image.frombytes("RGBA", self.size, self.pixels)


@measure("encode_png")
def encode_png(bitmap: Bitmap) -> bytes:
    """Serialize `bitmap` to a PNG byte stream."""
    try:
        buf = io.BytesIO()
        bitmap.to_image().save(buf, format="PNG")
    except (OSError, ValueError) as e:
        raise EncodeError(f"PNG encoding failed for {bitmap.width}x{bitmap.height} bitmap: {e}") from e
    return buf.getvalue()
