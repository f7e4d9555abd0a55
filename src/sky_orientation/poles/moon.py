"""Lunar pole model (IAU WGCCRE 2009, Archinal et al. 2011).

The thirteen arguments E1..E13 are nutation/precession angles of the lunar
orbit and the Earth; only the pole (not the prime meridian) terms are used.
"""

from __future__ import annotations

from sky_orientation.models import Body
from sky_orientation.poles.base import PeriodicArgument, PoleModel

MOON_ARGUMENTS: tuple[PeriodicArgument, ...] = (
    PeriodicArgument(125.045, -0.0529921),  # E1
    PeriodicArgument(250.089, -0.1059842),  # E2
    PeriodicArgument(260.008, 13.0120009),  # E3
    PeriodicArgument(176.625, 13.3407154),  # E4
    PeriodicArgument(357.529, 0.9856003),  # E5
    PeriodicArgument(311.589, 26.4057084),  # E6
    PeriodicArgument(134.963, 13.0649930),  # E7
    PeriodicArgument(276.617, 0.3287146),  # E8
    PeriodicArgument(34.226, 1.7484877),  # E9
    PeriodicArgument(15.134, -0.1589763),  # E10
    PeriodicArgument(119.743, 0.0036096),  # E11
    PeriodicArgument(239.961, 0.1643573),  # E12
    PeriodicArgument(25.053, 12.9590088),  # E13
)

MOON_POLE = PoleModel(
    body=Body.MOON,
    ra0_deg=269.9949,
    dec0_deg=66.5392,
    ra_rate_deg_per_century=0.0031,
    dec_rate_deg_per_century=0.0130,
    arguments=MOON_ARGUMENTS,
    ra_sin_deg=(
        -3.8787, -0.1204, 0.0700, -0.0172, 0.0, 0.0072, 0.0,
        0.0, 0.0, -0.0052, 0.0, 0.0, 0.0043,
    ),
    dec_cos_deg=(
        1.5419, 0.0239, -0.0278, 0.0068, 0.0, -0.0029, 0.0009,
        0.0, 0.0, 0.0008, 0.0, 0.0, -0.0009,
    ),
)
