"""Earth's umbra and penumbra at the Moon's distance (lunar eclipse geometry).

The shadow cones are built along the anti-solar axis from geocentric J2000
position vectors of the Sun and Moon.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from sky_orientation.angle_utils import wrap_180
from sky_orientation.constants import EARTH_RADIUS_KM, MIN_DISTANCE_KM, SUN_RADIUS_KM
from sky_orientation.coords import precession_j2000_to_date
from sky_orientation.ephemeris import EphemerisProvider, get_default_provider
from sky_orientation.libration import moon_libration
from sky_orientation.models import Body, Instant, ShadowGeometry
from sky_orientation.rotation import position_angle_of_vector, unit, vector_to_radec
from sky_orientation.time_utils import julian_centuries_tt

logger = logging.getLogger(__name__)

_Z_AXIS = np.array([0.0, 0.0, 1.0])


def shadow_radii_km(along_axis_km: float, sun_distance_km: float) -> tuple[float, float]:
    """Umbra and penumbra radii at a distance behind the Earth.

    Parameters:
        along_axis_km: Distance from Earth's center along the anti-solar axis.
        sun_distance_km: Earth-Sun distance.

    Returns:
        (umbra, penumbra) radii in km; the umbra is 0 past the cone's apex.
    """
    d = max(0.0, along_axis_km)
    sun_dist = max(MIN_DISTANCE_KM, sun_distance_km)
    umbra = max(0.0, EARTH_RADIUS_KM - d * (SUN_RADIUS_KM - EARTH_RADIUS_KM) / sun_dist)
    penumbra = EARTH_RADIUS_KM + d * (SUN_RADIUS_KM + EARTH_RADIUS_KM) / sun_dist
    return (umbra, penumbra)


def date_north_position_angle(instant: Instant, ra_deg: float, dec_deg: float) -> float:
    """J2000 position angle of the mean-of-date celestial north at (ra, dec).

    Adding it to a position angle measured from north of date gives the same
    direction measured from J2000 north.
    """
    to_date = precession_j2000_to_date(julian_centuries_tt(instant))
    return position_angle_of_vector(to_date.inverse().apply(_Z_AXIS), ra_deg, dec_deg)


def shadow_geometry(
    sun_km: Sequence[float] | np.ndarray,
    moon_km: Sequence[float] | np.ndarray,
    lunar_pa_deg: float,
) -> ShadowGeometry:
    """Shadow radii, Moon offset and offset direction from geocentric vectors.

    Parameters:
        sun_km: Geocentric J2000 position of the Sun (km).
        moon_km: Geocentric J2000 position of the Moon (km).
        lunar_pa_deg: Position angle of the Moon's north pole, east of north in
            the frame of the vectors.

    Returns:
        ShadowGeometry; the position angles are those of the direction from
        the Moon's center toward the shadow axis.
    """
    sun = np.asarray(sun_km, dtype=np.float64).reshape(3)
    moon = np.asarray(moon_km, dtype=np.float64).reshape(3)
    sun_dist = float(np.linalg.norm(sun))
    axis = -unit(sun)

    along = float(moon @ axis)
    if along < 0.0:
        logger.debug('Moon is on the sunward side of the Earth (%.0f km); '
                     'shadow evaluated at the Earth', along)
    umbra, penumbra = shadow_radii_km(along, sun_dist)

    perp = moon - along * axis
    offset = float(np.linalg.norm(perp))

    ra, dec = vector_to_radec(moon)
    pa_celestial = position_angle_of_vector(-perp, ra, dec)
    pa_lunar = wrap_180(pa_celestial - lunar_pa_deg)

    return ShadowGeometry(
        umbra_radius_km=umbra,
        penumbra_radius_km=penumbra,
        offset_km=offset,
        axis_pa_celestial_north_deg=pa_celestial,
        axis_pa_lunar_north_deg=pa_lunar,
    )


def earth_shadow_at_moon(
    instant: Instant,
    provider: EphemerisProvider | None = None,
    *,
    lunar_pa_deg: float | None = None,
) -> ShadowGeometry:
    """Earth's shadow at the Moon for an instant.

    Parameters:
        instant: UTC instant.
        provider: Ephemeris source; None uses the default SPICE provider.
        lunar_pa_deg: Position angle of the Moon's axis. When omitted it is
            taken from the libration model at the Moon's geocentric position
            and rotated from north of date to J2000 north. An explicit value
            must be J2000-relative, e.g. pole_position_angle(Body.MOON, ...).

    Returns:
        ShadowGeometry at the Moon's distance.
    """
    source = provider if provider is not None else get_default_provider()
    sun = source.geocentric_position_km(Body.SUN, instant)
    moon = source.geocentric_position_km(Body.MOON, instant)
    if lunar_pa_deg is None:
        ra, dec = vector_to_radec(moon)
        p_of_date = moon_libration(instant, ra, dec).position_angle_deg
        lunar_pa_deg = wrap_180(p_of_date + date_north_position_angle(instant, ra, dec))
    return shadow_geometry(sun, moon, lunar_pa_deg)
