import io

import pytest
from PIL import Image

from screengrab.capture import encoder
from screengrab.capture.encoder import Bitmap, encode_png
from screengrab.errors import EncodeError


def test_bitmap_rejects_wrong_buffer_size():
    with pytest.raises(ValueError):
        Bitmap(2, 2, b"\x00" * 15)


def test_encode_png_is_decodable():
    pixels = bytes([255, 0, 0, 255, 0, 255, 0, 255, 0, 0, 255, 255, 1, 2, 3, 255])
    data = encode_png(Bitmap(2, 2, pixels))

    assert data.startswith(b"\x89PNG\r\n\x1a\n")
    with Image.open(io.BytesIO(data)) as im:
        assert im.size == (2, 2)
        assert im.convert("RGBA").getpixel((1, 1)) == (1, 2, 3, 255)


def test_encode_failure_is_wrapped(monkeypatch):
    def broken(self):
        raise OSError("encoder exploded")

    monkeypatch.setattr(encoder.Bitmap, "to_image", broken)
    with pytest.raises(EncodeError, match="encoder exploded"):
        encode_png(Bitmap(1, 1, b"\x00\x00\x00\xff"))
