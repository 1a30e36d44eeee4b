# blend.py – per-channel color mixing on 8-bit RGB
#   - linear blend / opacity mix / midpoint insert
#   - overlay and soft-light compositing, folded back through opacity_mix
#   - step (scale toward black or up to saturation), tint, transitions
# Results are truncated toward zero and clamped to [0, 255] before a Color is
# built. Output alpha is opaque unless noted otherwise.

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from .color import MAX_CHANNEL, Brightness, Color, color_from_rgb
from .errors import InvalidArgument

log = logging.getLogger(__name__)

MAX_STEPS = 512


def _rgb(color: Color) -> np.ndarray:
    return np.array(color.rgb, dtype=np.float64)


def _from_array(rgb: np.ndarray) -> Color:
    # truncate toward zero like an integer cast, then clamp
    r, g, b = np.trunc(rgb).tolist()
    return color_from_rgb(r, g, b)


# --- linear mixes ------------------------------------------------------------
def blend_color(back: Color, fore: Color, alpha: Optional[float] = None) -> Color:
    """Linear blend of ``fore`` over ``back`` with ratio ``alpha / 255``.

    Without ``alpha`` the ratio comes from ``fore.a``. That alpha only drives
    the ratio; the result is always opaque.
    """
    if alpha is None:
        alpha = fore.a
    ratio = alpha / MAX_CHANNEL
    b = _rgb(back)
    rgb = np.clip(b + (_rgb(fore) - b) * ratio, 0.0, MAX_CHANNEL)
    return _from_array(rgb)


def insert_color(base: Color, insert: Color) -> Color:
    """Unweighted midpoint of two colors, opaque."""
    return Color(*((x + y) // 2 for x, y in zip(base.rgb, insert.rgb)))


def opacity_mix(base: Color, blend: Color, opacity: float) -> Color:
    """Mix ``blend`` into ``base`` at ``opacity`` percent (0 = base, 100 = blend)."""
    w = opacity / 100
    return _from_array(_rgb(blend) * w + _rgb(base) * (1 - w))


# --- compositing -------------------------------------------------------------
def _overlay(base: np.ndarray, blend: np.ndarray) -> np.ndarray:
    b = base / MAX_CHANNEL
    a = blend / MAX_CHANNEL
    out = np.where(b < 0.5, 2 * b * a, 1 - 2 * (1 - b) * (1 - a))
    return np.trunc(out * MAX_CHANNEL)


def _soft_light(base: np.ndarray, blend: np.ndarray) -> np.ndarray:
    # branches on the blend channel, not the base
    b = base / MAX_CHANNEL
    a = blend / MAX_CHANNEL
    out = np.where(
        a < 0.5,
        2 * b * a + b**2 * (1 - 2 * a),
        np.sqrt(b) * (2 * a - 1) + 2 * b * (1 - a),
    )
    return np.trunc(out * MAX_CHANNEL)


def overlay_mix(base: Color, blend: Color, opacity: float) -> Color:
    overlaid = _from_array(_overlay(_rgb(base), _rgb(blend)))
    return opacity_mix(base, overlaid, opacity)


def soft_light_mix(base: Color, blend: Color, opacity: float) -> Color:
    """Soft-light composite, then mixed with ``base`` at ``opacity``.

    Argument order into opacity_mix is the reverse of overlay_mix: the
    composited color is the base and the unmodified ``base`` is mixed in, so
    opacity=100 gives back ``base`` and opacity=0 the pure soft-light result.
    """
    softlit = _from_array(_soft_light(_rgb(base), _rgb(blend)))
    return opacity_mix(softlit, base, opacity)


# --- steps and tints ---------------------------------------------------------
def step_color(color: Color, percent: int) -> Color:
    """Scale the RGB channels by ``percent`` / 100, keeping alpha.

    ``percent`` is clamped to [0, 200]: below 100 darkens toward black, above
    100 scales channels up until they saturate at 255. Exactly 100 returns
    ``color`` itself.
    """
    if percent == 100:
        return color

    clamped = max(0, min(percent, 200))
    factor = 1.0 + (clamped - 100.0) / 100.0
    rgb = np.clip(_rgb(color) * factor, 0.0, MAX_CHANNEL)
    r, g, b = (int(v) for v in np.trunc(rgb).tolist())
    return Color(r, g, b, color.a)


def tint_color(direction: Brightness, color: Color, amount: int) -> Color:
    """Shift every channel by ``amount`` toward black or white. Alpha is reset to opaque."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidArgument(f"tint amount must be an int, got {amount!r}")
    if not 0 <= amount <= MAX_CHANNEL:
        raise InvalidArgument(f"tint amount {amount} outside [0, {MAX_CHANNEL}]")
    if direction is Brightness.DARKER:
        return Color(*(c - amount if c > amount else 0 for c in color.rgb))
    if direction is Brightness.LIGHTER:
        return Color(*(c + amount if c + amount < MAX_CHANNEL else MAX_CHANNEL for c in color.rgb))
    raise InvalidArgument(f"unknown tint direction: {direction!r}")


# --- transitions -------------------------------------------------------------
def transition_color(progress: float, begin: Color, end: Color) -> Color:
    """Color ``progress`` percent of the way from ``begin`` to ``end``, opaque.

    Never raises: if the interpolated channels cannot form a color (for example
    progress outside [0, 100]) ``begin`` is returned unchanged.
    """
    try:
        channels = [
            int(round(b + (e - b) * progress * 0.01))
            for b, e in zip(begin.rgb, end.rgb)
        ]
        return Color(*channels)
    except (ValueError, TypeError, OverflowError) as exc:
        log.debug("transition at %r fell back to begin color: %s", progress, exc)
        return begin


def transition_steps(
    begin: Color, end: Color, n: int, max_steps: int = MAX_STEPS
) -> List[Color]:
    """``n`` evenly spaced transition colors from ``begin`` to ``end`` inclusive.

    ``n`` is clamped to [2, max_steps].
    """
    n = max(2, min(int(n), int(max_steps)))
    return [transition_color(p, begin, end) for p in np.linspace(0.0, 100.0, n).tolist()]


__all__ = [
    "MAX_STEPS",
    "blend_color",
    "insert_color",
    "opacity_mix",
    "overlay_mix",
    "soft_light_mix",
    "step_color",
    "tint_color",
    "transition_color",
    "transition_steps",
]
