"""Angle normalization and clamping helpers shared by all modules.

Non-finite inputs yield NaN instead of raising, so a bad sample never stops
a render loop.
"""

from __future__ import annotations

import math

from sky_orientation.constants import DEGREES_PER_CIRCLE, HALF_CIRCLE_DEGREES


def norm_360(angle_deg: float) -> float:
    """Normalize an angle to [0, 360).

    Parameters:
        angle_deg: Angle in degrees.

    Returns:
        Equivalent angle in [0, 360), or NaN for non-finite input.
    """
    if not math.isfinite(angle_deg):
        return math.nan
    y = math.fmod(angle_deg, DEGREES_PER_CIRCLE)
    if y < 0.0:
        y += DEGREES_PER_CIRCLE
    # fmod of a tiny negative value can round up to exactly 360
    if y >= DEGREES_PER_CIRCLE:
        y = 0.0
    return y


def wrap_180(angle_deg: float) -> float:
    """Wrap an angle to (-180, 180].

    Values already in range are returned unchanged (bit for bit).

    Parameters:
        angle_deg: Angle in degrees.

    Returns:
        Equivalent angle in (-180, 180], or NaN for non-finite input.
    """
    if -HALF_CIRCLE_DEGREES < angle_deg <= HALF_CIRCLE_DEGREES:
        return angle_deg
    if not math.isfinite(angle_deg):
        return math.nan
    y = math.fmod(angle_deg + HALF_CIRCLE_DEGREES, DEGREES_PER_CIRCLE)
    if y <= 0.0:
        y += DEGREES_PER_CIRCLE
    return y - HALF_CIRCLE_DEGREES


def fold_0_90(angle_deg: float) -> float:
    """Fold an undirected line angle into [0, 90].

    Angles that differ by 180 degrees describe the same line, and a tilt of
    x and 180 - x are the same tilt.

    Parameters:
        angle_deg: Angle between two lines, in degrees.

    Returns:
        Acute angle in [0, 90], or NaN for non-finite input.
    """
    if not math.isfinite(angle_deg):
        return math.nan
    y = math.fmod(abs(angle_deg), HALF_CIRCLE_DEGREES)
    if y > 90.0:
        y = HALF_CIRCLE_DEGREES - y
    return y


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp x to [lo, hi]; NaN passes through."""
    if math.isnan(x):
        return x
    return max(lo, min(hi, x))


def safe_asin_deg(x: float) -> float:
    """asin in degrees with the argument clamped to [-1, 1]."""
    return math.degrees(math.asin(clamp(x, -1.0, 1.0)))


def finite_or_nan(x: float) -> float:
    """x if it is finite, else NaN."""
    return x if math.isfinite(x) else math.nan


def radians(angle_deg: float) -> float:
    """Degrees to radians; infinities become NaN so trig functions never raise."""
    return math.radians(finite_or_nan(angle_deg))
