"""Immutable result types shared by the computation modules and providers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from sky_orientation.constants import MOON_ID, SUN_ID

# An absolute UTC time; naive datetimes are interpreted as UTC.
Instant = datetime


class Body(Enum):
    """Bodies with orientation models: value is the NAIF body ID."""

    SUN = SUN_ID
    MOON = MOON_ID
    MERCURY = 199
    VENUS = 299
    MARS = 499
    JUPITER = 599
    SATURN = 699
    URANUS = 799
    NEPTUNE = 899

    @property
    def naif_id(self) -> int:
        """NAIF ID of the body itself."""
        return self.value

    @property
    def ephemeris_id(self) -> int:
        """NAIF ID to request from a planetary ephemeris.

        Outer planets use their system barycenter, which is what the compact
        DE kernels carry; the offset is far below arc-minute level.
        """
        if self.value > 400 and self.value % 100 == 99:
            return self.value // 100
        return self.value


@dataclass(frozen=True)
class ObserverLocation:
    """Geodetic observer position (degrees, east longitude positive)."""

    latitude_deg: float
    longitude_deg: float
    elevation_m: float = 0.0


@dataclass(frozen=True)
class EquatorialDirection:
    """Right ascension [0, 360) and declination [-90, 90] in degrees."""

    ra_deg: float
    dec_deg: float
    frame: str = 'J2000'  # 'J2000' or 'OF_DATE'


@dataclass(frozen=True)
class HorizontalDirection:
    """Compass azimuth (0=N, 90=E, [0, 360)) and altitude in degrees."""

    azimuth_deg: float
    altitude_deg: float


@dataclass(frozen=True)
class EclipticDirection:
    """Ecliptic longitude [0, 360) and latitude in degrees, mean of date."""

    lon_deg: float
    lat_deg: float


@dataclass(frozen=True)
class PoleDirection:
    """Rotation pole of a body in the J2000 equatorial frame (degrees)."""

    ra_deg: float
    dec_deg: float


@dataclass(frozen=True)
class LibrationState:
    """Lunar libration (degrees).

    lat_deg and lon_deg give the selenographic latitude/longitude of the
    sub-observer point (lon in (-180, 180]); position_angle_deg is the
    position angle of the Moon's axis, east from celestial north.
    """

    lat_deg: float
    lon_deg: float
    position_angle_deg: float


@dataclass(frozen=True)
class OrientationAngles:
    """On-sky orientation of a body for sprite/model alignment (degrees).

    All angles are in (-180, 180]. parallactic_angle_deg is q from the
    azimuth formula (minus the position angle of the zenith);
    pole_position_angle_deg is the position angle of the body's north pole.
    The renderer turns images whose up is celestial north by
    rotation_to_horizon_celestial_north_deg (-q) and images whose up is
    the body's north by rotation_to_horizon_body_north_deg (-q + P).
    """

    parallactic_angle_deg: float
    pole_position_angle_deg: float
    rotation_to_horizon_celestial_north_deg: float
    rotation_to_horizon_body_north_deg: float


@dataclass(frozen=True)
class ShadowGeometry:
    """Earth's shadow at the Moon's distance.

    Radii and offset are in km and never negative. The position angles give
    the direction from the Moon's center toward the shadow axis, measured
    east from celestial north and from lunar north, both in (-180, 180].
    """

    umbra_radius_km: float
    penumbra_radius_km: float
    offset_km: float
    axis_pa_celestial_north_deg: float
    axis_pa_lunar_north_deg: float


@dataclass(frozen=True)
class TerminatorSample:
    """Overlap circle producing an illuminated fraction of a unit disk.

    radius_ratio is the circle radius and offset_ratio the distance between
    centers, both relative to the disk radius.
    """

    radius_ratio: float
    offset_ratio: float


@dataclass(frozen=True)
class BodyEphemeris:
    """Apparent position of a body for an observer, as supplied by a provider."""

    equatorial: EquatorialDirection
    horizontal: HorizontalDirection
    distance_km: float
    illuminated_fraction: float
