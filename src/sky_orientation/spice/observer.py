"""Observer state and local horizon basis for a geodetic location on Earth."""

from __future__ import annotations

import math

import cspyce
import numpy as np

from sky_orientation.angle_utils import radians
from sky_orientation.constants import EARTH_FLATTENING, EARTH_ID, EARTH_RADIUS_KM
from sky_orientation.models import ObserverLocation

EARTH_FRAME = 'IAU_EARTH'

# Earth rotation rate (rad/s) in body-fixed frame for surface velocity
_EARTH_ROT_RATE_RAD_S = 2.0 * math.pi / 86400.0


def observer_state(et: float, observer: ObserverLocation) -> np.ndarray:
    """Return observer state (position and velocity) in J2000 at ephemeris time.

    The geodetic offset (GRS 80) and the surface rotation velocity are
    rotated from the Earth body-fixed frame and added to Earth's SSB state.

    Parameters:
        et: Ephemeris time (TDB seconds past J2000).
        observer: Geodetic location; elevation in meters.

    Returns:
        Length-6 array: position (3) and velocity (3) in km and km/s.
    """
    obs_pv = np.array(cspyce.spkssb(EARTH_ID, et, 'J2000'), dtype=np.float64)
    obs_dp = cspyce.georec(
        radians(observer.longitude_deg),
        radians(observer.latitude_deg),
        observer.elevation_m / 1000.0,
        EARTH_RADIUS_KM,
        EARTH_FLATTENING,
    )
    # J2000 -> body-fixed; mtxv applies the transpose (body-fixed -> J2000)
    earth_mat = cspyce.pxform('J2000', EARTH_FRAME, et)
    obs_pv[:3] += np.asarray(cspyce.mtxv(earth_mat, obs_dp), dtype=np.float64)
    vel_body = [
        -_EARTH_ROT_RATE_RAD_S * obs_dp[1],
        _EARTH_ROT_RATE_RAD_S * obs_dp[0],
        0.0,
    ]
    obs_pv[3:6] += np.asarray(cspyce.mtxv(earth_mat, vel_body), dtype=np.float64)
    return obs_pv


def local_basis(et: float, observer: ObserverLocation) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """East, north, up unit vectors of the observer's horizon in J2000.

    Parameters:
        et: Ephemeris time (TDB seconds past J2000).
        observer: Geodetic location.

    Returns:
        (east, north, up) unit vectors in the J2000 frame.
    """
    lat = radians(observer.latitude_deg)
    lon = radians(observer.longitude_deg)
    sin_lat, cos_lat = math.sin(lat), math.cos(lat)
    sin_lon, cos_lon = math.sin(lon), math.cos(lon)
    east = [-sin_lon, cos_lon, 0.0]
    north = [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat]
    up = [cos_lat * cos_lon, cos_lat * sin_lon, sin_lat]
    earth_mat = cspyce.pxform('J2000', EARTH_FRAME, et)
    return (
        np.asarray(cspyce.mtxv(earth_mat, east), dtype=np.float64),
        np.asarray(cspyce.mtxv(earth_mat, north), dtype=np.float64),
        np.asarray(cspyce.mtxv(earth_mat, up), dtype=np.float64),
    )
