"""Pole orientation model dataclass (WGCCRE form: secular + periodic terms)."""

from __future__ import annotations

import math
from dataclasses import dataclass

from sky_orientation.angle_utils import clamp, norm_360, radians
from sky_orientation.constants import DAYS_PER_CENTURY
from sky_orientation.models import Body, PoleDirection


@dataclass(frozen=True)
class PeriodicArgument:
    """Argument linear in days since J2000: angle = e0 + rate * d (degrees)."""

    e0_deg: float
    rate_deg_per_day: float

    def angle_rad(self, days: float) -> float:
        """Argument value in radians at days since J2000 TT."""
        return radians(self.e0_deg + self.rate_deg_per_day * days)


@dataclass(frozen=True)
class PoleModel:
    """Rotation pole of a body in J2000 as a function of time.

    alpha0 = ra0 + ra_rate T + sum(ra_sin[i] sin E_i)
    delta0 = dec0 + dec_rate T + sum(dec_cos[i] cos E_i)

    where T is Julian centuries TT and E_i are the periodic arguments. The
    amplitude tuples are indexed like ``arguments`` (missing entries are 0).
    """

    body: Body
    ra0_deg: float
    dec0_deg: float
    ra_rate_deg_per_century: float = 0.0
    dec_rate_deg_per_century: float = 0.0
    arguments: tuple[PeriodicArgument, ...] = ()
    ra_sin_deg: tuple[float, ...] = ()
    dec_cos_deg: tuple[float, ...] = ()

    @property
    def is_constant(self) -> bool:
        """True if the pole does not move at this precision tier."""
        return (
            self.ra_rate_deg_per_century == 0.0
            and self.dec_rate_deg_per_century == 0.0
            and not self.arguments
        )

    def direction(self, t_centuries: float) -> PoleDirection:
        """Pole RA/Dec at T Julian centuries TT since J2000.0.

        Parameters:
            t_centuries: Julian centuries TT since J2000.0.

        Returns:
            PoleDirection with RA in [0, 360) and Dec in [-90, 90].
        """
        ra = self.ra0_deg + self.ra_rate_deg_per_century * t_centuries
        dec = self.dec0_deg + self.dec_rate_deg_per_century * t_centuries
        days = t_centuries * DAYS_PER_CENTURY
        for i, arg in enumerate(self.arguments):
            e = arg.angle_rad(days)
            if i < len(self.ra_sin_deg):
                ra += self.ra_sin_deg[i] * math.sin(e)
            if i < len(self.dec_cos_deg):
                dec += self.dec_cos_deg[i] * math.cos(e)
        return PoleDirection(ra_deg=norm_360(ra), dec_deg=clamp(dec, -90.0, 90.0))
