"""Spherical coordinate transforms: equatorial, ecliptic, horizontal, precession.

All angles are in degrees. Frame changes between inertial systems go through
rotation.Rotation; the horizontal transforms use the hour-angle formulas
directly.
"""

from __future__ import annotations

import math

from sky_orientation.angle_utils import norm_360, radians, safe_asin_deg, wrap_180
from sky_orientation.constants import ARCSEC_PER_DEGREE
from sky_orientation.models import EclipticDirection, ObserverLocation
from sky_orientation.rotation import Rotation, radec_to_vector, vector_to_radec


def mean_obliquity_deg(t_centuries: float) -> float:
    """Mean obliquity of the ecliptic (IAU 1980 polynomial).

    Parameters:
        t_centuries: Julian centuries TT since J2000.0.

    Returns:
        Mean obliquity in degrees (23.4392911 at J2000.0).
    """
    t = t_centuries
    arcsec = 84381.448 - 46.8150 * t - 0.00059 * t * t + 0.001813 * t * t * t
    return arcsec / ARCSEC_PER_DEGREE


def equatorial_to_ecliptic(
    ra_deg: float, dec_deg: float, obliquity_deg: float
) -> tuple[float, float]:
    """Convert equatorial to ecliptic coordinates of the same equinox.

    Parameters:
        ra_deg: Right ascension.
        dec_deg: Declination.
        obliquity_deg: Obliquity of the ecliptic for that equinox.

    Returns:
        (lambda, beta): ecliptic longitude in [0, 360) and latitude.
    """
    rot = Rotation.about_axis(0, -obliquity_deg)
    return vector_to_radec(rot.apply(radec_to_vector(ra_deg, dec_deg)))


def ecliptic_to_equatorial(
    lon_deg: float, lat_deg: float, obliquity_deg: float
) -> tuple[float, float]:
    """Inverse of equatorial_to_ecliptic: returns (ra in [0, 360), dec)."""
    rot = Rotation.about_axis(0, obliquity_deg)
    return vector_to_radec(rot.apply(radec_to_vector(lon_deg, lat_deg)))


def equatorial_to_horizontal(
    ra_deg: float,
    dec_deg: float,
    observer: ObserverLocation,
    lst_deg: float,
) -> tuple[float, float]:
    """Convert equatorial coordinates to compass azimuth and altitude.

    Parameters:
        ra_deg: Right ascension (same equinox as the sidereal time).
        dec_deg: Declination.
        observer: Observer; only the latitude is used.
        lst_deg: Local sidereal time in degrees.

    Returns:
        (azimuth, altitude): azimuth in [0, 360) from north through east.
    """
    phi = radians(observer.latitude_deg)
    dec = radians(dec_deg)
    h = radians(lst_deg - ra_deg)
    sin_phi, cos_phi = math.sin(phi), math.cos(phi)
    sin_dec, cos_dec = math.sin(dec), math.cos(dec)
    alt = safe_asin_deg(sin_phi * sin_dec + cos_phi * cos_dec * math.cos(h))
    az = math.atan2(-cos_dec * math.sin(h), sin_dec * cos_phi - cos_dec * math.cos(h) * sin_phi)
    return (norm_360(math.degrees(az)), alt)


def horizontal_to_equatorial(
    azimuth_deg: float,
    altitude_deg: float,
    observer: ObserverLocation,
    lst_deg: float,
) -> tuple[float, float]:
    """Convert compass azimuth/altitude to right ascension and declination.

    Parameters:
        azimuth_deg: Azimuth from north through east.
        altitude_deg: Altitude above the horizon.
        observer: Observer; only the latitude is used.
        lst_deg: Local sidereal time in degrees.

    Returns:
        (ra, dec): right ascension in [0, 360) and declination.
    """
    phi = radians(observer.latitude_deg)
    az = radians(azimuth_deg)
    alt = radians(altitude_deg)
    sin_phi, cos_phi = math.sin(phi), math.cos(phi)
    sin_alt, cos_alt = math.sin(alt), math.cos(alt)
    dec = safe_asin_deg(sin_phi * sin_alt + cos_phi * cos_alt * math.cos(az))
    # Hour angle, positive westward
    h = math.atan2(-math.sin(az) * cos_alt, sin_alt * cos_phi - cos_alt * math.cos(az) * sin_phi)
    return (norm_360(lst_deg - math.degrees(h)), dec)


def precession_j2000_to_date(t_centuries: float) -> Rotation:
    """Equatorial precession from J2000.0 to the mean equinox of date.

    Uses the zeta, z, theta angles of Meeus (21.3), adequate to well under an
    arc-second over a few centuries.

    Parameters:
        t_centuries: Julian centuries TT since J2000.0.

    Returns:
        Rotation taking J2000 vectors to mean-of-date vectors.
    """
    t = t_centuries
    zeta = (2306.2181 * t + 0.30188 * t * t + 0.017998 * t * t * t) / ARCSEC_PER_DEGREE
    z = (2306.2181 * t + 1.09468 * t * t + 0.018203 * t * t * t) / ARCSEC_PER_DEGREE
    theta = (2004.3109 * t - 0.42665 * t * t - 0.041833 * t * t * t) / ARCSEC_PER_DEGREE
    return (
        Rotation.about_axis(2, zeta)
        .compose(Rotation.about_axis(1, -theta))
        .compose(Rotation.about_axis(2, z))
    )


def ecliptic_of_date(ra_j2000_deg: float, dec_j2000_deg: float, t_centuries: float) -> EclipticDirection:
    """Mean ecliptic coordinates of date for a J2000 equatorial direction.

    Parameters:
        ra_j2000_deg: J2000 right ascension.
        dec_j2000_deg: J2000 declination.
        t_centuries: Julian centuries TT since J2000.0.

    Returns:
        EclipticDirection referred to the mean ecliptic and equinox of date.
    """
    to_date = precession_j2000_to_date(t_centuries)
    to_ecliptic = Rotation.about_axis(0, -mean_obliquity_deg(t_centuries))
    v = to_date.compose(to_ecliptic).apply(radec_to_vector(ra_j2000_deg, dec_j2000_deg))
    lon, lat = vector_to_radec(v)
    return EclipticDirection(lon_deg=lon, lat_deg=lat)


def position_angle_deg(
    ra_deg: float, dec_deg: float, target_ra_deg: float, target_dec_deg: float
) -> float:
    """Position angle of a target direction as seen from (ra, dec).

    Measured from celestial north toward east, in (-180, 180].
    """
    d_ra = radians(target_ra_deg - ra_deg)
    dec = radians(dec_deg)
    t_dec = radians(target_dec_deg)
    num = math.cos(t_dec) * math.sin(d_ra)
    den = math.sin(t_dec) * math.cos(dec) - math.cos(t_dec) * math.sin(dec) * math.cos(d_ra)
    return wrap_180(math.degrees(math.atan2(num, den)))
