# color.py – 8-bit RGBA value type, constructors and named-color lookup
#   - Color is immutable; every operation returns a new one
#   - hex / name parsing goes through ColorAide, names gated by Pillow's CSS table
#   - random colors keep the exclusive 255 upper bound

from __future__ import annotations

import enum
import random
import string
from dataclasses import dataclass, replace
from typing import List, NamedTuple, Optional, Tuple

from coloraide import Color as CAColor
from PIL import ImageColor

from .errors import InvalidArgument, InvalidFormat

MAX_CHANNEL = 255

Hex = str


class Brightness(enum.Enum):
    DARKER = "darker"
    LIGHTER = "lighter"


class Point(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class Color:
    """An 8-bit-per-channel RGBA color. Alpha defaults to opaque."""

    r: int
    g: int
    b: int
    a: int = MAX_CHANNEL

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int):
                raise InvalidArgument(f"channel {name} must be an int, got {v!r}")
            if not 0 <= v <= MAX_CHANNEL:
                raise InvalidArgument(f"channel {name}={v} outside [0, {MAX_CHANNEL}]")

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def argb(self) -> Tuple[int, int, int, int]:
        return (self.a, self.r, self.g, self.b)

    def with_alpha(self, a: int) -> "Color":
        return replace(self, a=a)


def _clamp(v: int) -> int:
    return MAX_CHANNEL if v > MAX_CHANNEL else 0 if v < 0 else v


def color_from_rgb(r: float, g: float, b: float) -> Color:
    """Opaque color with each channel truncated and clamped to [0, 255]."""
    return Color(_clamp(int(r)), _clamp(int(g)), _clamp(int(b)))


def canon_hex(s: str) -> Hex:
    """Normalize to '#rrggbb'; accept 3- or 6-digit hex with a leading '#'."""
    raw = s[1:]
    if len(raw) == 3 and all(c in string.hexdigits for c in raw):
        raw = "".join(ch * 2 for ch in raw)
    if len(raw) != 6 or not all(c in string.hexdigits for c in raw):
        raise InvalidFormat(f"invalid hex: {s!r}")
    return "#" + raw.lower()


def known_color_names() -> List[str]:
    """All color names accepted by :func:`color_from_hex`, sorted."""
    return sorted(ImageColor.colormap)


def color_from_hex(value: str, alpha: Optional[int] = None) -> Color:
    """Parse '#RRGGBB', '#RGB' or a known color name.

    ``alpha`` overrides the parsed alpha channel. Unrecognized input raises
    InvalidFormat rather than falling back to a default color.
    """
    if not isinstance(value, str):
        raise InvalidFormat(f"expected a string, got {type(value).__name__}")
    token = value.strip()
    if token.startswith("#"):
        token = canon_hex(token)
    else:
        token = token.lower()
        if token not in ImageColor.colormap:
            raise InvalidFormat(f"unknown color name: {value!r}")

    try:
        parsed = CAColor(token).convert("srgb")
    except ValueError as exc:
        raise InvalidFormat(f"cannot parse color {value!r}") from exc

    r, g, b = (round(c * MAX_CHANNEL) for c in parsed.coords())
    a = round(parsed["alpha"] * MAX_CHANNEL)
    color = Color(_clamp(r), _clamp(g), _clamp(b), _clamp(a))
    if alpha is not None:
        color = color.with_alpha(alpha)
    return color


def to_hex(color: Color) -> Hex:
    return f"#{color.r:02x}{color.g:02x}{color.b:02x}"


def random_color(rng: Optional[random.Random] = None) -> Color:
    """Opaque color with R, G and B drawn from [0, 254].

    The upper bound is exclusive, so 255 is never produced.
    """
    src = rng or random
    return Color(
        src.randrange(MAX_CHANNEL), src.randrange(MAX_CHANNEL), src.randrange(MAX_CHANNEL)
    )


__all__ = [
    "Brightness",
    "Color",
    "MAX_CHANNEL",
    "Point",
    "canon_hex",
    "color_from_hex",
    "color_from_rgb",
    "known_color_names",
    "random_color",
    "to_hex",
]
