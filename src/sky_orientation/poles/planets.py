"""Sun and planet pole models (IAU WGCCRE 2009, linear terms only).

Jupiter's periodic terms are below an arc-minute and are left out. Neptune
keeps its mean pole; its N-term (up to 0.7 deg in RA) is not modelled.
Venus, Uranus, Neptune and the Sun are constant.
"""

from __future__ import annotations

from sky_orientation.models import Body
from sky_orientation.poles.base import PoleModel

SUN_POLE = PoleModel(Body.SUN, ra0_deg=286.13, dec0_deg=63.87)

MERCURY_POLE = PoleModel(
    Body.MERCURY,
    ra0_deg=281.0097,
    dec0_deg=61.4143,
    ra_rate_deg_per_century=-0.0328,
    dec_rate_deg_per_century=-0.0049,
)

VENUS_POLE = PoleModel(Body.VENUS, ra0_deg=272.76, dec0_deg=67.16)

MARS_POLE = PoleModel(
    Body.MARS,
    ra0_deg=317.68143,
    dec0_deg=52.88650,
    ra_rate_deg_per_century=-0.1061,
    dec_rate_deg_per_century=-0.0609,
)

JUPITER_POLE = PoleModel(
    Body.JUPITER,
    ra0_deg=268.056595,
    dec0_deg=64.495303,
    ra_rate_deg_per_century=-0.006499,
    dec_rate_deg_per_century=0.002413,
)

SATURN_POLE = PoleModel(
    Body.SATURN,
    ra0_deg=40.589,
    dec0_deg=83.537,
    ra_rate_deg_per_century=-0.036,
    dec_rate_deg_per_century=-0.004,
)

URANUS_POLE = PoleModel(Body.URANUS, ra0_deg=257.311, dec0_deg=-15.175)

NEPTUNE_POLE = PoleModel(Body.NEPTUNE, ra0_deg=299.36, dec0_deg=43.46)
