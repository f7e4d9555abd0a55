"""Lunar libration and axis position angle (Meeus, Astronomical Algorithms ch. 53).

Optical libration follows from the Moon's apparent ecliptic position and the
mean elements of its orbit. Physical libration (a few hundredths of a degree)
is available on request.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from sky_orientation.angle_utils import clamp, norm_360, radians, safe_asin_deg, wrap_180
from sky_orientation.constants import COS_EPSILON
from sky_orientation.coords import ecliptic_of_date, ecliptic_to_equatorial, mean_obliquity_deg
from sky_orientation.models import Instant, LibrationState
from sky_orientation.time_utils import julian_centuries_tt

# Inclination of the mean lunar equator to the ecliptic
MOON_EQUATOR_INCLINATION_DEG = 1.54242


@dataclass(frozen=True)
class LunarArguments:
    """Mean lunar arguments of date, in degrees [0, 360)."""

    elongation: float  # D
    sun_anomaly: float  # M
    moon_anomaly: float  # M'
    latitude_argument: float  # F
    node: float  # Omega


def lunar_arguments(t_centuries: float) -> LunarArguments:
    """Mean elongation, anomalies, argument of latitude and node (Meeus 47).

    Parameters:
        t_centuries: Julian centuries TT since J2000.0.

    Returns:
        LunarArguments in degrees.
    """
    t = t_centuries
    t2 = t * t
    t3 = t2 * t
    t4 = t3 * t
    d = 297.8501921 + 445267.1114034 * t - 0.0018819 * t2 + t3 / 545868.0 - t4 / 113065000.0
    m = 357.5291092 + 35999.0502909 * t - 0.0001536 * t2 + t3 / 24490000.0
    mp = 134.9633964 + 477198.8675055 * t + 0.0087414 * t2 + t3 / 69699.0 - t4 / 14712000.0
    f = 93.2720950 + 483202.0175233 * t - 0.0036539 * t2 - t3 / 3526000.0 + t4 / 863310000.0
    om = 125.0445479 - 1934.1362891 * t + 0.0020754 * t2 + t3 / 467441.0 - t4 / 60616000.0
    return LunarArguments(norm_360(d), norm_360(m), norm_360(mp), norm_360(f), norm_360(om))


def _physical_terms(args: LunarArguments, t_centuries: float) -> tuple[float, float, float]:
    """Physical libration quantities (rho, sigma, tau) in degrees."""
    r = radians
    d = r(args.elongation)
    m = r(args.sun_anomaly)
    mp = r(args.moon_anomaly)
    f = r(args.latitude_argument)
    om = r(args.node)
    t = t_centuries
    k1 = r(119.75 + 131.849 * t)
    k2 = r(72.56 + 20.186 * t)
    e = 1.0 - 0.002516 * t - 0.0000074 * t * t
    sin, cos = math.sin, math.cos
    rho = (
        -0.02752 * cos(mp) - 0.02245 * sin(f) + 0.00684 * cos(mp - 2 * f)
        - 0.00293 * cos(2 * f) - 0.00085 * cos(2 * f - 2 * d) - 0.00054 * cos(mp - 2 * d)
        - 0.00020 * sin(mp + f) - 0.00020 * cos(mp + 2 * f) - 0.00020 * cos(mp - f)
        + 0.00014 * cos(mp + 2 * f - 2 * d)
    )
    sigma = (
        -0.02816 * sin(mp) + 0.02244 * cos(f) - 0.00682 * sin(mp - 2 * f)
        - 0.00279 * sin(2 * f) - 0.00083 * sin(2 * f - 2 * d) + 0.00069 * sin(mp - 2 * d)
        + 0.00040 * cos(mp + f) - 0.00025 * sin(2 * mp) - 0.00023 * sin(mp + 2 * f)
        + 0.00020 * cos(mp - f) + 0.00019 * sin(mp - f) + 0.00013 * sin(mp + 2 * f - 2 * d)
        - 0.00010 * cos(mp - 3 * f)
    )
    tau = (
        0.02520 * e * sin(m) + 0.00473 * sin(2 * mp - 2 * f) - 0.00467 * sin(mp)
        + 0.00396 * sin(k1) + 0.00276 * sin(2 * mp - 2 * d) + 0.00196 * sin(om)
        - 0.00183 * cos(mp - f) + 0.00115 * sin(mp - 2 * d) - 0.00096 * sin(mp - d)
        + 0.00046 * sin(2 * f - 2 * d) - 0.00039 * sin(mp - f) - 0.00032 * sin(mp - m - d)
        + 0.00027 * sin(2 * mp - m - 2 * d) + 0.00023 * sin(k2) - 0.00014 * sin(2 * d)
        + 0.00014 * cos(2 * mp - 2 * f) - 0.00012 * sin(mp - 2 * f) - 0.00012 * sin(2 * mp)
        + 0.00011 * sin(2 * mp - 2 * m - 2 * d)
    )
    return (rho, sigma, tau)


def libration_at(
    t_centuries: float,
    ecliptic_lon_deg: float,
    ecliptic_lat_deg: float,
    *,
    moon_ra_deg: float | None = None,
    delta_psi_deg: float = 0.0,
    physical: bool = False,
) -> LibrationState:
    """Libration for T Julian centuries TT (float-level form of optical_libration)."""
    args = lunar_arguments(t_centuries)
    inc = radians(MOON_EQUATOR_INCLINATION_DEG)
    sin_i, cos_i = math.sin(inc), math.cos(inc)
    beta = radians(ecliptic_lat_deg)
    sin_b, cos_b = math.sin(beta), math.cos(beta)
    w = radians(ecliptic_lon_deg - delta_psi_deg - args.node)
    sin_w, cos_w = math.sin(w), math.cos(w)

    # Longitude of the sub-observer point relative to the mean lunar equator
    a = math.atan2(sin_w * cos_b * cos_i - sin_b * sin_i, cos_w * cos_b)
    lon = wrap_180(math.degrees(a) - args.latitude_argument)
    lat = safe_asin_deg(-sin_w * cos_b * sin_i - sin_b * cos_i)

    rho = sigma = 0.0
    if physical:
        rho, sigma, tau = _physical_terms(args, t_centuries)
        lon = wrap_180(lon - tau + (rho * math.cos(a) + sigma * math.sin(a)) * math.tan(radians(lat)))
        lat = lat + sigma * math.cos(a) - rho * math.sin(a)

    eps_deg = mean_obliquity_deg(t_centuries)
    if moon_ra_deg is None:
        moon_ra_deg, _ = ecliptic_to_equatorial(ecliptic_lon_deg, ecliptic_lat_deg, eps_deg)
    eps = radians(eps_deg)
    v = radians(args.node + delta_psi_deg + sigma / math.sin(inc))
    inc_rho = inc + radians(rho)
    x = math.sin(inc_rho) * math.sin(v)
    y = math.sin(inc_rho) * math.cos(v) * math.cos(eps) - math.cos(inc_rho) * math.sin(eps)
    omega = math.atan2(x, y)
    cos_lat = max(COS_EPSILON, math.cos(radians(lat)))
    sin_p = math.hypot(x, y) * math.cos(radians(moon_ra_deg) - omega) / cos_lat
    pa = wrap_180(math.degrees(math.asin(clamp(sin_p, -1.0, 1.0))))
    return LibrationState(lat_deg=lat, lon_deg=lon, position_angle_deg=pa)


def optical_libration(
    instant: Instant,
    ecliptic_lon_deg: float,
    ecliptic_lat_deg: float,
    *,
    moon_ra_deg: float | None = None,
    delta_psi_deg: float = 0.0,
    physical: bool = False,
) -> LibrationState:
    """Lunar libration and axis position angle for an apparent Moon position.

    Parameters:
        instant: UTC instant.
        ecliptic_lon_deg: Apparent ecliptic longitude of the Moon, of date.
        ecliptic_lat_deg: Apparent ecliptic latitude of the Moon, of date.
        moon_ra_deg: Apparent right ascension of date; derived from the
            ecliptic position with the mean obliquity when omitted.
        delta_psi_deg: Nutation in longitude. Default 0 (reduced precision,
            matching mean-of-date inputs); pass it with true-of-date inputs.
        physical: Add Meeus physical libration (rho, sigma, tau). Default
            False: optical libration only.

    Returns:
        LibrationState: latitude, longitude in (-180, 180], and axis position
        angle east of north in (-180, 180].
    """
    return libration_at(
        julian_centuries_tt(instant),
        ecliptic_lon_deg,
        ecliptic_lat_deg,
        moon_ra_deg=moon_ra_deg,
        delta_psi_deg=delta_psi_deg,
        physical=physical,
    )


def moon_libration(
    instant: Instant, ra_j2000_deg: float, dec_j2000_deg: float, *, physical: bool = False
) -> LibrationState:
    """Libration from the Moon's apparent J2000 RA/Dec (geocentric or topocentric).

    Precesses the direction to the mean equinox of date and converts it to
    ecliptic coordinates before calling libration_at with delta_psi 0.
    """
    t = julian_centuries_tt(instant)
    ecl = ecliptic_of_date(ra_j2000_deg, dec_j2000_deg, t)
    return libration_at(t, ecl.lon_deg, ecl.lat_deg, physical=physical)
