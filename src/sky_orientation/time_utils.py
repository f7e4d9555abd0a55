"""Time scales: Julian Day, Delta T, Julian centuries TT, sidereal time, ET.

Julian Day and TT arithmetic is plain float math so NaN propagates. The
ephemeris-time conversion for SPICE goes through rms-julian.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import julian

from sky_orientation.angle_utils import norm_360
from sky_orientation.config import get_leapsecs_path
from sky_orientation.constants import (
    DAYS_PER_CENTURY,
    DAYS_PER_JULIAN_YEAR,
    J2000_JD,
    JD_AT_J2000_MIDNIGHT,
    SECONDS_PER_DAY,
    TT_MINUS_TAI_SECONDS,
)

logger = logging.getLogger(__name__)

# Leap seconds loaded once at first use.
_leapsecs_loaded = False

# Espenak & Meeus polynomial fits: (lower year bound, upper year bound,
# reference year, scale in years, coefficients in ascending powers).
_DELTA_T_FITS: tuple[tuple[float, float, float, float, tuple[float, ...]], ...] = (
    (-500.0, 500.0, 0.0, 100.0,
     (10583.6, -1014.41, 33.78311, -5.952053, -0.1798452, 0.022174192, 0.0090316521)),
    (500.0, 1600.0, 1000.0, 100.0,
     (1574.2, -556.01, 71.23472, 0.319781, -0.8503463, -0.005050998, 0.0083572073)),
    (1600.0, 1700.0, 1600.0, 1.0,
     (120.0, -0.9808, -0.01532, 1.0 / 7129.0)),
    (1700.0, 1800.0, 1700.0, 1.0,
     (8.83, 0.1603, -0.0059285, 0.00013336, -1.0 / 1174000.0)),
    (1800.0, 1860.0, 1800.0, 1.0,
     (13.72, -0.332447, 0.0068612, 0.0041116, -0.00037436, 0.0000121272,
      -0.0000001699, 0.000000000875)),
    (1860.0, 1900.0, 1860.0, 1.0,
     (7.62, 0.5737, -0.251754, 0.01680668, -0.0004473624, 1.0 / 233174.0)),
    (1900.0, 1920.0, 1900.0, 1.0,
     (-2.79, 1.494119, -0.0598939, 0.0061966, -0.000197)),
    (1920.0, 1941.0, 1920.0, 1.0,
     (21.20, 0.84493, -0.076100, 0.0020936)),
    (1941.0, 1961.0, 1950.0, 1.0,
     (29.07, 0.407, -1.0 / 233.0, 1.0 / 2547.0)),
    (1961.0, 1986.0, 1975.0, 1.0,
     (45.45, 1.067, -1.0 / 260.0, -1.0 / 718.0)),
    # TODO: confirm whether 1986-2005 should get the Espenak-Meeus quintic
    # (63.86 + 0.3345t - 0.060374t^2 ...); the 2005-2050 quadratic covers it
    # for now, a few seconds off at the start of the range.
    (1986.0, 2050.0, 2000.0, 1.0,
     (62.92, 0.32217, 0.005589)),
)


def _poly(t: float, coeffs: tuple[float, ...]) -> float:
    """Evaluate a polynomial with ascending coefficients (Horner)."""
    result = 0.0
    for c in reversed(coeffs):
        result = result * t + c
    return result


def _ensure_leapsecs() -> None:
    """Load the leap seconds kernel into rms-julian once per process.

    The configured LSK is tried first; if none is configured or it cannot be
    read, the LSK bundled with rms-julian is loaded instead. Failure of the
    bundled file propagates.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    # ET must agree with the UTC model of the SPICE kernels.
    julian.set_ut_model('SPICE')
    path = get_leapsecs_path()
    if path is not None:
        try:
            julian.load_lsk(path)
        except (OSError, KeyError, ValueError) as e:
            logger.info('Cannot use leap seconds file %s (%s); loading bundled LSK', path, e)
        else:
            _leapsecs_loaded = True
            return
    else:
        logger.info('No leap seconds kernel configured; loading bundled LSK')
    try:
        julian.load_lsk()
    except Exception:
        logger.error('Bundled rms-julian LSK could not be loaded', exc_info=True)
        raise
    _leapsecs_loaded = True


def _as_utc(instant: datetime) -> datetime:
    """Return instant as an aware UTC datetime; naive values are taken as UTC."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def day_sec_from_instant(instant: datetime) -> tuple[int, float]:
    """Split a UTC instant into (day, sec) as used by rms-julian.

    Parameters:
        instant: Absolute time; naive datetimes are interpreted as UTC.

    Returns:
        (day, sec) where day is days since 2000-01-01 and sec is seconds
        within that day.
    """
    utc = _as_utc(instant)
    day = int(julian.day_from_ymd(utc.year, utc.month, utc.day))
    sec = utc.hour * 3600.0 + utc.minute * 60.0 + utc.second + utc.microsecond * 1e-6
    return (day, sec)


def julian_day_utc(instant: datetime) -> float:
    """Julian Day of a UTC instant (UTC time scale, no leap-second smearing).

    Parameters:
        instant: Absolute time; naive datetimes are interpreted as UTC.

    Returns:
        Julian Day number (days).
    """
    day, sec = day_sec_from_instant(instant)
    return JD_AT_J2000_MIDNIGHT + day + sec / SECONDS_PER_DAY


def decimal_year_from_jd(jd: float) -> float:
    """Approximate decimal year of a Julian Day (Julian years from J2000.0)."""
    return 2000.0 + (jd - J2000_JD) / DAYS_PER_JULIAN_YEAR


def delta_t_seconds(year: float) -> float:
    """Approximate Delta T in seconds for a decimal year.

    Piecewise polynomial fits of Espenak & Meeus; outside -500..2150 the
    long-term parabola is used. NaN in, NaN out.

    Parameters:
        year: Decimal year (e.g. 2024.5).

    Returns:
        Delta T in seconds.
    """
    for lo, hi, ref, scale, coeffs in _DELTA_T_FITS:
        if lo <= year < hi:
            return _poly((year - ref) / scale, coeffs)
    u = (year - 1820.0) / 100.0
    long_term = -20.0 + 32.0 * u * u
    if 2050.0 <= year < 2150.0:
        return long_term - 0.5628 * (2150.0 - year)
    return long_term


def julian_centuries_tt_from_jd(jd_utc: float) -> float:
    """Julian centuries TT since J2000.0 for a UTC Julian Day.

    Applies Delta T for the date plus the fixed TT - TAI offset.

    Parameters:
        jd_utc: Julian Day in UTC.

    Returns:
        T in Julian centuries (NaN for NaN input).
    """
    dt_sec = delta_t_seconds(decimal_year_from_jd(jd_utc)) + TT_MINUS_TAI_SECONDS
    jd_tt = jd_utc + dt_sec / SECONDS_PER_DAY
    return (jd_tt - J2000_JD) / DAYS_PER_CENTURY


def julian_centuries_tt(instant: datetime) -> float:
    """Julian centuries TT since J2000.0 for a UTC instant.

    Parameters:
        instant: Absolute time; naive datetimes are interpreted as UTC.

    Returns:
        T in Julian centuries.
    """
    return julian_centuries_tt_from_jd(julian_day_utc(instant))


def gmst_deg(jd_utc: float) -> float:
    """Greenwich mean sidereal time in degrees [0, 360) (IAU 1982 series).

    Parameters:
        jd_utc: Julian Day (UT, approximated by UTC).

    Returns:
        GMST in degrees.
    """
    d = jd_utc - J2000_JD
    t = d / DAYS_PER_CENTURY
    gmst = 280.46061837 + 360.98564736629 * d + 0.000387933 * t * t - t * t * t / 38710000.0
    return norm_360(gmst)


def local_sidereal_time_deg(jd_utc: float, lon_deg: float) -> float:
    """Local mean sidereal time in degrees [0, 360) for an east longitude."""
    return norm_360(gmst_deg(jd_utc) + lon_deg)


def et_from_instant(instant: datetime) -> float:
    """Convert a UTC instant to ephemeris time (TDB seconds past J2000) for SPICE.

    Parameters:
        instant: Absolute time; naive datetimes are interpreted as UTC.

    Returns:
        ET (TDB) in seconds.
    """
    _ensure_leapsecs()
    day, sec = day_sec_from_instant(instant)
    tai = float(julian.tai_from_day_sec(day, sec))
    return float(julian.tdb_from_tai(tai))
