"""Error taxonomy for colorutil.

Every error is a ``ColorError``; the value errors also subclass ``ValueError``
so callers that only care about bad input can catch that.
"""

from __future__ import annotations


class ColorError(Exception):
    """Base class for colorutil errors."""


class InvalidFormat(ColorError, ValueError):
    """A hex string or color name could not be parsed."""


class InvalidArgument(ColorError, ValueError):
    """A value is outside its domain (channel range, tint direction, ...)."""


class CaptureUnavailable(ColorError, RuntimeError):
    """Screen pixel readback failed or no capture backend is available."""


__all__ = ["ColorError", "InvalidFormat", "InvalidArgument", "CaptureUnavailable"]
