"""Ephemeris provider interface and the lazily created default provider."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Protocol

from sky_orientation.models import Body, BodyEphemeris, Instant, ObserverLocation

if TYPE_CHECKING:
    import numpy as np

logger = logging.getLogger(__name__)


class EphemerisProvider(Protocol):
    """Source of raw apparent positions for the orientation computations."""

    def body_ephemeris(
        self, body: Body, instant: Instant, observer: ObserverLocation
    ) -> BodyEphemeris:
        """Apparent topocentric position of a body.

        Parameters:
            body: Body to observe.
            instant: UTC instant.
            observer: Geodetic observer.

        Returns:
            BodyEphemeris with J2000 apparent RA/Dec, azimuth/altitude,
            distance in km and illuminated fraction.
        """
        ...

    def geocentric_position_km(self, body: Body, instant: Instant) -> np.ndarray:
        """Apparent geocentric position vector of a body in J2000 (km)."""
        ...


_default_provider: EphemerisProvider | None = None
_default_lock = threading.Lock()


def get_default_provider() -> EphemerisProvider:
    """Return the module default provider, creating the SPICE provider on first use.

    Returns:
        Shared EphemerisProvider.
    """
    global _default_provider
    with _default_lock:
        if _default_provider is None:
            from sky_orientation.spice.provider import SpiceEphemeris

            logger.debug('Creating default SPICE ephemeris provider')
            _default_provider = SpiceEphemeris()
        return _default_provider


def set_default_provider(provider: EphemerisProvider | None) -> None:
    """Replace the default provider (None resets to lazy SPICE creation)."""
    global _default_provider
    with _default_lock:
        _default_provider = provider
