# capture.py – screen pixel sampling behind a small capability interface
#   - ScreenCapture: sample_pixel(x, y) and pointer_position()
#   - PyAutoGuiCapture is the default backend (optional "capture" extra)
#   - calls are serialized; the platform device context is not reentrant

from __future__ import annotations

import logging
import threading
from typing import Optional, Protocol

from .color import Color, Point
from .errors import CaptureUnavailable

log = logging.getLogger(__name__)

_capture_lock = threading.Lock()


class ScreenCapture(Protocol):
    def sample_pixel(self, x: int, y: int) -> Color: ...

    def pointer_position(self) -> Point: ...


class PyAutoGuiCapture:
    """Reads pixels and the pointer position through pyautogui.

    pyautogui needs a display at import time, so it is imported on first use.
    """

    def _backend(self):
        try:
            import pyautogui
        except Exception as exc:  # ImportError, or a display error raised on import
            raise CaptureUnavailable(f"pyautogui unavailable: {exc}") from exc
        return pyautogui

    def sample_pixel(self, x: int, y: int) -> Color:
        px = self._backend().pixel(int(x), int(y))
        r, g, b = (int(c) for c in px[:3])
        return Color(r, g, b)

    def pointer_position(self) -> Point:
        x, y = self._backend().position()
        return Point(int(x), int(y))


_default_capture: ScreenCapture = PyAutoGuiCapture()


def set_default_capture(capture: ScreenCapture) -> ScreenCapture:
    """Install ``capture`` as the module default and return the previous one."""
    global _default_capture
    previous, _default_capture = _default_capture, capture
    return previous


def _resolve(capture: Optional[ScreenCapture]) -> ScreenCapture:
    return capture if capture is not None else _default_capture


def color_from_position(point: Point, capture: Optional[ScreenCapture] = None) -> Color:
    """Color of the screen pixel at ``point``.

    Raises CaptureUnavailable if the backend cannot read the pixel.
    """
    backend = _resolve(capture)
    x, y = point
    with _capture_lock:
        log.debug("sampling pixel at (%d, %d)", x, y)
        try:
            return backend.sample_pixel(x, y)
        except CaptureUnavailable:
            raise
        except Exception as exc:
            raise CaptureUnavailable(f"cannot sample pixel at ({x}, {y}): {exc}") from exc


def cursor_pointer_color(capture: Optional[ScreenCapture] = None) -> Color:
    """Color of the screen pixel under the pointer."""
    backend = _resolve(capture)
    with _capture_lock:
        try:
            point = backend.pointer_position()
        except CaptureUnavailable:
            raise
        except Exception as exc:
            raise CaptureUnavailable(f"cannot read pointer position: {exc}") from exc
    return color_from_position(point, backend)


__all__ = [
    "PyAutoGuiCapture",
    "ScreenCapture",
    "color_from_position",
    "cursor_pointer_color",
    "set_default_capture",
]
