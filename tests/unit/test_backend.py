import pytest
from click.testing import CliRunner
from mss.exception import ScreenShotError
from mss.screenshot import ScreenShot

from screengrab.capture import backend as backend_mod
from screengrab.capture.backend import MssBackend
from screengrab.capture.geometry import Rect
from screengrab.cli import cli
from screengrab.errors import CaptureError


MONITORS = [
    {"left": 0, "top": 0, "width": 3840, "height": 1080},  # combined virtual screen
    {"left": 0, "top": 0, "width": 1920, "height": 1080},
    {"left": 1920, "top": 0, "width": 1920, "height": 1080},
]


class FakeSession:
    """Stands in for an mss session; grab() returns real ScreenShot objects."""

    def __init__(self, monitors=MONITORS, fail_grab=False, fail_enumerate=False):
        self._monitors = monitors
        self.fail_grab = fail_grab
        self.fail_enumerate = fail_enumerate
        self.requested = []
        self.closed = False

    @property
    def monitors(self):
        if self.fail_enumerate:
            raise ScreenShotError("XRRGetScreenResources() failed")
        return self._monitors

    def grab(self, monitor):
        if self.fail_grab:
            raise ScreenShotError("XGetImage() failed")
        self.requested.append(monitor)
        w, h = monitor["width"], monitor["height"]
        # BGRX: blue=1 green=2 red=3, alpha byte unused
        return ScreenShot.from_size(bytearray([1, 2, 3, 0] * (w * h)), w, h)

    def close(self):
        self.closed = True


def use_session(monkeypatch, session: FakeSession) -> FakeSession:
    monkeypatch.setattr(backend_mod.mss, "mss", lambda: session)
    return session


def test_display_index_maps_past_combined_monitor(monkeypatch):
    use_session(monkeypatch, FakeSession())
    with MssBackend() as backend:
        assert backend.display_count() == 2
        assert backend.display(0).bounds == Rect(0, 0, 1920, 1080)
        assert backend.display(1).bounds == Rect(1920, 0, 1920, 1080)


def test_grab_converts_bgra_to_opaque_rgba(monkeypatch):
    session = use_session(monkeypatch, FakeSession())
    with MssBackend() as backend:
        bitmap = backend.grab(Rect(0, 0, 4, 3), 0)

    assert session.requested == [{"left": 0, "top": 0, "width": 4, "height": 3}]
    assert (bitmap.width, bitmap.height) == (4, 3)
    assert bitmap.pixels[:4] == bytes([3, 2, 1, 255])
    assert len(bitmap.pixels) == 4 * 3 * 4


def test_session_closed_on_exit(monkeypatch):
    session = use_session(monkeypatch, FakeSession())
    with MssBackend():
        pass
    assert session.closed


def test_grab_failure_becomes_capture_error(monkeypatch):
    use_session(monkeypatch, FakeSession(fail_grab=True))
    with MssBackend() as backend:
        with pytest.raises(CaptureError, match="XGetImage") as exc_info:
            backend.grab(Rect(0, 0, 10, 10), 1)
    assert exc_info.value.index == 1
    assert isinstance(exc_info.value.__cause__, ScreenShotError)


def test_empty_rect_is_refused_without_calling_mss(monkeypatch):
    session = use_session(monkeypatch, FakeSession())
    with MssBackend() as backend:
        with pytest.raises(CaptureError):
            backend.grab(Rect(0, 0, 100, 0), 0)
    assert session.requested == []


def test_enumeration_failure_becomes_capture_error(monkeypatch):
    use_session(monkeypatch, FakeSession(fail_enumerate=True))
    with MssBackend() as backend:
        with pytest.raises(CaptureError, match="enumerate"):
            backend.display_count()
        with pytest.raises(CaptureError) as exc_info:
            backend.display(1)
    assert exc_info.value.index == 1


def test_cli_enumeration_failure_exits_cleanly(monkeypatch):
    use_session(monkeypatch, FakeSession(fail_enumerate=True))
    for args in ([], ["displays"]):
        result = CliRunner().invoke(cli, args)
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
