"""Apparent disk helpers: angular sizes, lunar parallax, limb angles, local eclipse type."""

from __future__ import annotations

import math
from enum import Enum

from sky_orientation.angle_utils import clamp, norm_360, radians, safe_asin_deg
from sky_orientation.constants import EARTH_RADIUS_KM, MIN_DISTANCE_KM
from sky_orientation.coords import position_angle_deg


class EclipseKind(Enum):
    """Local appearance of a Sun-Moon overlap."""

    NONE = 'none'
    PARTIAL = 'partial'
    ANNULAR = 'annular'
    TOTAL = 'total'


def apparent_diameter_deg(radius_km: float, distance_km: float) -> float:
    """Apparent angular diameter of a sphere (degrees).

    Parameters:
        radius_km: Body radius.
        distance_km: Distance to the body's center, clamped to at least 1 km.

    Returns:
        Full angular diameter in degrees.
    """
    return 2.0 * math.degrees(math.atan(radius_km / max(MIN_DISTANCE_KM, distance_km)))


def moon_horizontal_parallax_deg(distance_km: float) -> float:
    """Equatorial horizontal parallax for a geocentric distance (degrees)."""
    return safe_asin_deg(EARTH_RADIUS_KM / max(MIN_DISTANCE_KM, distance_km))


def topocentric_moon_distance_km(distance_km: float, altitude_deg: float) -> float:
    """Observer-to-Moon distance on a spherical Earth.

    Parameters:
        distance_km: Geocentric distance of the Moon.
        altitude_deg: Topocentric altitude of the Moon.

    Returns:
        Distance from a surface observer, at least 1 km.
    """
    h = radians(altitude_deg)
    r_cos = EARTH_RADIUS_KM * math.cos(h)
    under = max(0.0, distance_km * distance_km - r_cos * r_cos)
    return max(MIN_DISTANCE_KM, math.sqrt(under) - EARTH_RADIUS_KM * math.sin(h))


def angular_separation_deg(
    alt1_deg: float, az1_deg: float, alt2_deg: float, az2_deg: float
) -> float:
    """Great-circle separation of two horizontal directions (degrees)."""
    a1 = radians(alt1_deg)
    a2 = radians(alt2_deg)
    cos_sep = (math.sin(a1) * math.sin(a2)
               + math.cos(a1) * math.cos(a2) * math.cos(radians(az1_deg - az2_deg)))
    return math.degrees(math.acos(clamp(cos_sep, -1.0, 1.0)))


def solar_eclipse_kind(
    separation_deg: float, sun_radius_deg: float, moon_radius_deg: float
) -> EclipseKind:
    """Classify the local overlap of the solar and lunar disks.

    Parameters:
        separation_deg: Center-to-center separation.
        sun_radius_deg: Apparent solar radius.
        moon_radius_deg: Apparent lunar radius.

    Returns:
        EclipseKind; contact exactly at the sum of the radii is NONE.
    """
    if separation_deg >= sun_radius_deg + moon_radius_deg:
        return EclipseKind.NONE
    if moon_radius_deg >= sun_radius_deg:
        if separation_deg < moon_radius_deg - sun_radius_deg:
            return EclipseKind.TOTAL
        return EclipseKind.PARTIAL
    if separation_deg < sun_radius_deg - moon_radius_deg:
        return EclipseKind.ANNULAR
    return EclipseKind.PARTIAL


def bright_limb_position_angle_deg(
    sun_ra_deg: float, sun_dec_deg: float, moon_ra_deg: float, moon_dec_deg: float
) -> float:
    """Position angle of the midpoint of a body's bright limb (Meeus 48.5).

    Works for the Moon and for planets alike: pass the body's RA/Dec in
    place of the Moon's.

    Returns:
        Angle east from celestial north toward the Sun, in [0, 360).
    """
    return norm_360(position_angle_deg(moon_ra_deg, moon_dec_deg, sun_ra_deg, sun_dec_deg))
