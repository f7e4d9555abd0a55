"""Pole orientation models: pole direction, axis position angle, model rotation."""

from __future__ import annotations

import logging

from sky_orientation.coords import position_angle_deg
from sky_orientation.models import Body, Instant, PoleDirection
from sky_orientation.poles.base import PeriodicArgument, PoleModel
from sky_orientation.poles.moon import MOON_POLE
from sky_orientation.poles.planets import (
    JUPITER_POLE,
    MARS_POLE,
    MERCURY_POLE,
    NEPTUNE_POLE,
    SATURN_POLE,
    SUN_POLE,
    URANUS_POLE,
    VENUS_POLE,
)
from sky_orientation.rotation import Rotation, radec_to_vector
from sky_orientation.time_utils import julian_centuries_tt

logger = logging.getLogger(__name__)

_POLE_MODELS: dict[Body, PoleModel] = {
    Body.SUN: SUN_POLE,
    Body.MOON: MOON_POLE,
    Body.MERCURY: MERCURY_POLE,
    Body.VENUS: VENUS_POLE,
    Body.MARS: MARS_POLE,
    Body.JUPITER: JUPITER_POLE,
    Body.SATURN: SATURN_POLE,
    Body.URANUS: URANUS_POLE,
    Body.NEPTUNE: NEPTUNE_POLE,
}

_J2000_Z = (0.0, 0.0, 1.0)


def get_pole_model(body: Body) -> PoleModel:
    """Return the pole model for a body.

    Parameters:
        body: Body to look up.

    Returns:
        PoleModel for the body.

    Raises:
        ValueError: If no model is registered for the body.
    """
    model = _POLE_MODELS.get(body)
    if model is None:
        logger.error('No pole model for body %r', body)
        raise ValueError(f'No pole model for body {body!r}')
    return model


def pole_position_at(body: Body, t_centuries: float) -> PoleDirection:
    """Pole direction at T Julian centuries TT (float-level form of pole_position)."""
    return get_pole_model(body).direction(t_centuries)


def pole_position(body: Body, instant: Instant) -> PoleDirection:
    """J2000 RA/Dec of a body's rotation pole at an instant.

    Parameters:
        body: Sun, Moon, or one of the seven planets.
        instant: UTC instant.

    Returns:
        PoleDirection in the J2000 equatorial frame.
    """
    return pole_position_at(body, julian_centuries_tt(instant))


def pole_position_angle(body: Body, instant: Instant, ra_deg: float, dec_deg: float) -> float:
    """Position angle of a body's north pole on the sky.

    The apparent RA/Dec must be J2000 (the pole models are J2000); geocentric
    and topocentric inputs both work since the angle only depends on the
    line of sight.

    Parameters:
        body: Body whose axis is measured.
        instant: UTC instant.
        ra_deg: Apparent J2000 right ascension of the body.
        dec_deg: Apparent J2000 declination of the body.

    Returns:
        Position angle of the rotation axis, east from celestial north, in
        (-180, 180].
    """
    pole = pole_position(body, instant)
    return position_angle_deg(ra_deg, dec_deg, pole.ra_deg, pole.dec_deg)


def pole_rotation(body: Body, instant: Instant) -> Rotation:
    """Rotation carrying the J2000 +Z axis onto a body's north pole.

    Renderers apply it to a model whose spin axis is +Z in J2000 space.

    Parameters:
        body: Body to align.
        instant: UTC instant.

    Returns:
        Rotation from J2000 +Z to the pole direction.
    """
    pole = pole_position(body, instant)
    return Rotation.rotate_a_to_b(_J2000_Z, radec_to_vector(pole.ra_deg, pole.dec_deg))


__all__ = [
    'PeriodicArgument',
    'PoleModel',
    'get_pole_model',
    'pole_position',
    'pole_position_angle',
    'pole_position_at',
    'pole_rotation',
]
