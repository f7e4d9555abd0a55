"""EphemerisProvider backed by SPICE kernels through cspyce."""

from __future__ import annotations

import logging
import math

import cspyce
import numpy as np

from sky_orientation.angle_utils import norm_360, safe_asin_deg
from sky_orientation.constants import EARTH_ID, SUN_ID
from sky_orientation.models import (
    Body,
    BodyEphemeris,
    EquatorialDirection,
    HorizontalDirection,
    Instant,
    ObserverLocation,
)
from sky_orientation.spice.load import load_kernels
from sky_orientation.spice.observer import local_basis, observer_state
from sky_orientation.time_utils import et_from_instant

logger = logging.getLogger(__name__)

DEFAULT_ABERRATION = 'LT+S'


class SpiceEphemeris:
    """Apparent positions from SPICE kernels (light time + stellar aberration).

    Kernels are furnished on construction; see config for SPICE_PATH and
    SKY_ORIENTATION_KERNELS.
    """

    def __init__(
        self,
        kernels: list[str] | None = None,
        *,
        aberration: str = DEFAULT_ABERRATION,
    ) -> None:
        """Load kernels and set the aberration correction.

        Parameters:
            kernels: Kernel names or paths; None uses the configured list.
            aberration: SPICE aberration correction (default 'LT+S').

        Raises:
            RuntimeError: If no kernel could be loaded.
        """
        ok, reason = load_kernels(kernels)
        if not ok:
            logger.error('SPICE kernels not loaded: %s', reason)
            raise RuntimeError(f'SPICE kernels not loaded: {reason}')
        self.aberration = aberration

    def body_ephemeris(
        self, body: Body, instant: Instant, observer: ObserverLocation
    ) -> BodyEphemeris:
        """Apparent topocentric position of a body.

        Parameters:
            body: Body to observe.
            instant: UTC instant.
            observer: Geodetic observer.

        Returns:
            BodyEphemeris with J2000 RA/Dec, azimuth/altitude (no refraction),
            distance (km) and illuminated fraction.
        """
        et = et_from_instant(instant)
        obs_pv = observer_state(et, observer)
        body_dpv, lt = cspyce.spkapp(
            body.ephemeris_id, et, 'J2000', obs_pv[:6].tolist(), self.aberration
        )
        pos = np.asarray(body_dpv[:3], dtype=np.float64)
        distance, ra, dec = cspyce.recrad(pos.tolist())

        east, north, up = local_basis(et, observer)
        az = norm_360(math.degrees(math.atan2(float(pos @ east), float(pos @ north))))
        alt = safe_asin_deg(float(pos @ up) / max(float(distance), 1e-12))

        return BodyEphemeris(
            equatorial=EquatorialDirection(math.degrees(ra), math.degrees(dec), 'J2000'),
            horizontal=HorizontalDirection(az, alt),
            distance_km=float(distance),
            illuminated_fraction=self._illuminated_fraction(body, et - lt, pos),
        )

    def _illuminated_fraction(self, body: Body, body_time: float, obs_to_body: np.ndarray) -> float:
        """Lit fraction of the disk, (1 + cos phase) / 2; 1 for the Sun."""
        if body is Body.SUN:
            return 1.0
        body_pv = cspyce.spkssb(body.ephemeris_id, body_time, 'J2000')
        sun_dpv, _ = cspyce.spkapp(SUN_ID, body_time, 'J2000', list(body_pv[:6]), 'LT')
        phase = cspyce.vsep(sun_dpv[:3], cspyce.vminus(obs_to_body.tolist()))
        return 0.5 * (1.0 + math.cos(phase))

    def geocentric_position_km(self, body: Body, instant: Instant) -> np.ndarray:
        """Apparent geocentric J2000 position vector of a body (km).

        Parameters:
            body: Body to locate.
            instant: UTC instant.

        Returns:
            Length-3 position array.
        """
        et = et_from_instant(instant)
        state, _ = cspyce.spkez(body.ephemeris_id, et, 'J2000', self.aberration, EARTH_ID)
        return np.asarray(state[:3], dtype=np.float64)
