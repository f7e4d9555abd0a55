"""Rotation-to-horizon angles for sprites and models of the Sun, Moon and planets.

The renderer receives two angles per body: -q for images whose up is
celestial north and -q + P for images whose up is the body's north, where q
is the parallactic angle from the azimuth formula and P the position angle
of the body's pole. With the azimuth measured from north through east, q is
the negated position angle of the zenith at the body.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from sky_orientation.angle_utils import fold_0_90, radians, wrap_180
from sky_orientation.constants import COS_EPSILON
from sky_orientation.coords import mean_obliquity_deg, precession_j2000_to_date
from sky_orientation.ephemeris import EphemerisProvider, get_default_provider
from sky_orientation.models import (
    Body,
    BodyEphemeris,
    Instant,
    ObserverLocation,
    OrientationAngles,
)
from sky_orientation.poles import pole_position_angle
from sky_orientation.rotation import position_angle_of_vector, radec_to_vector, vector_to_radec
from sky_orientation.time_utils import julian_centuries_tt

logger = logging.getLogger(__name__)


def parallactic_angle_deg(azimuth_deg: float, altitude_deg: float, latitude_deg: float) -> float:
    """Parallactic angle between the zenith and the celestial pole at a body.

    Parameters:
        azimuth_deg: Compass azimuth of the body (0=N, 90=E).
        altitude_deg: Altitude of the body.
        latitude_deg: Observer latitude.

    Returns:
        q in (-180, 180]; it has the sign of sin(azimuth), so it is positive
        for bodies east of the meridian and q(360 - A) = -q(A).
    """
    a = radians(azimuth_deg)
    h = radians(altitude_deg)
    phi = radians(latitude_deg)
    tan_phi = math.sin(phi) / max(COS_EPSILON, math.cos(phi))
    q = math.atan2(math.sin(a), tan_phi * math.cos(h) - math.sin(h) * math.cos(a))
    return wrap_180(math.degrees(q))


def compose_orientation(parallactic_deg: float, pole_pa_deg: float) -> OrientationAngles:
    """Combine parallactic angle and pole position angle into rotation angles.

    Parameters:
        parallactic_deg: Parallactic angle q.
        pole_pa_deg: Position angle P of the body's north pole.

    Returns:
        OrientationAngles with rotation_to_horizon_celestial_north = -q and
        rotation_to_horizon_body_north = -q + P, both in (-180, 180].
    """
    return OrientationAngles(
        parallactic_angle_deg=parallactic_deg,
        pole_position_angle_deg=pole_pa_deg,
        rotation_to_horizon_celestial_north_deg=wrap_180(-parallactic_deg),
        rotation_to_horizon_body_north_deg=wrap_180(-parallactic_deg + pole_pa_deg),
    )


def orientation_from_ephemeris(
    body: Body, instant: Instant, ephemeris: BodyEphemeris, latitude_deg: float
) -> OrientationAngles:
    """Orientation angles from an already fetched ephemeris sample.

    Parameters:
        body: Body the sample belongs to.
        instant: UTC instant of the sample.
        ephemeris: Provider output (J2000 RA/Dec and horizontal position).
        latitude_deg: Observer latitude.

    Returns:
        OrientationAngles for the body.
    """
    hz = ephemeris.horizontal
    q = parallactic_angle_deg(hz.azimuth_deg, hz.altitude_deg, latitude_deg)
    eq = ephemeris.equatorial
    p = pole_position_angle(body, instant, eq.ra_deg, eq.dec_deg)
    return compose_orientation(q, p)


def orientation_angles(
    body: Body,
    instant: Instant,
    observer: ObserverLocation,
    provider: EphemerisProvider | None = None,
) -> OrientationAngles:
    """Parallactic angle, pole position angle and rotation-to-horizon angles.

    Parameters:
        body: Sun, Moon, or one of the seven planets.
        instant: UTC instant.
        observer: Geodetic observer.
        provider: Ephemeris source; None uses the default SPICE provider.

    Returns:
        OrientationAngles for the body as seen by the observer.
    """
    source = provider if provider is not None else get_default_provider()
    eph = source.body_ephemeris(body, instant, observer)
    return orientation_from_ephemeris(body, instant, eph, observer.latitude_deg)


def ecliptic_tilt_from_ephemeris(
    instant: Instant, sun: BodyEphemeris, latitude_deg: float
) -> float:
    """Tilt between the ecliptic at the Sun and the local horizon, in [0, 90].

    The ecliptic tangent is the cross product of the ecliptic north pole with
    the Sun's direction (both mean of date). Its position angle is compared
    with that of the horizon, 90 degrees from the zenith at position angle -q.

    Parameters:
        instant: UTC instant.
        sun: Sun ephemeris sample (J2000 RA/Dec and horizontal position).
        latitude_deg: Observer latitude.

    Returns:
        Acute angle between the two lines, degrees.
    """
    t = julian_centuries_tt(instant)
    sun_vec = precession_j2000_to_date(t).apply(
        radec_to_vector(sun.equatorial.ra_deg, sun.equatorial.dec_deg)
    )
    ra_date, dec_date = vector_to_radec(sun_vec)
    ecliptic_pole = radec_to_vector(270.0, 90.0 - mean_obliquity_deg(t))
    tangent = np.cross(ecliptic_pole, sun_vec)
    pa_ecliptic = position_angle_of_vector(tangent, ra_date, dec_date)
    q = parallactic_angle_deg(sun.horizontal.azimuth_deg, sun.horizontal.altitude_deg, latitude_deg)
    tilt = fold_0_90(pa_ecliptic - (90.0 - q))
    logger.debug('Ecliptic tilt: pa=%.3f q=%.3f tilt=%.3f', pa_ecliptic, q, tilt)
    return tilt


def ecliptic_tilt_vs_horizon(
    instant: Instant,
    observer: ObserverLocation,
    provider: EphemerisProvider | None = None,
) -> float:
    """Tilt of the ecliptic relative to the horizon at the Sun's position.

    Parameters:
        instant: UTC instant.
        observer: Geodetic observer.
        provider: Ephemeris source; None uses the default SPICE provider.

    Returns:
        Tilt in [0, 90] degrees.
    """
    source = provider if provider is not None else get_default_provider()
    sun = source.body_ephemeris(Body.SUN, instant, observer)
    return ecliptic_tilt_from_ephemeris(instant, sun, observer.latitude_deg)
