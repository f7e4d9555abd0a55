"""Rotation value type and unit-vector helpers shared by the geometry modules.

Vectors are numpy float64 arrays of length 3 in a right-handed equatorial
frame (x toward RA 0, z toward the celestial pole) unless stated otherwise.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from sky_orientation.angle_utils import norm_360, radians, safe_asin_deg, wrap_180

logger = logging.getLogger(__name__)

_EPS = 1e-12

_AXES = (
    np.array([1.0, 0.0, 0.0]),
    np.array([0.0, 1.0, 0.0]),
    np.array([0.0, 0.0, 1.0]),
)


def _as_vec(v: Sequence[float] | np.ndarray) -> np.ndarray:
    return np.asarray(v, dtype=np.float64).reshape(3)


def unit(v: Sequence[float] | np.ndarray) -> np.ndarray:
    """Unit vector in the direction of v; zero vector if v is zero (SPICE VHAT)."""
    arr = _as_vec(v)
    n = float(np.linalg.norm(arr))
    if n == 0.0:
        logger.debug('Zero-length vector has no direction; using the zero vector')
        return np.zeros(3)
    return arr / n


def _perpendicular(v: np.ndarray) -> np.ndarray:
    """Some unit vector perpendicular to v, using its least-aligned axis as reference."""
    ref = _AXES[int(np.argmin(np.abs(v)))]
    return unit(np.cross(v, ref))


class Rotation:
    """Immutable proper rotation of 3-space backed by a 3x3 matrix.

    ``apply`` maps vectors from the source frame into the rotated frame;
    ``a.compose(b)`` is the rotation that applies ``a`` first, then ``b``.
    """

    __slots__ = ('_matrix',)

    def __init__(self, matrix: Sequence[Sequence[float]] | np.ndarray) -> None:
        mat = np.array(matrix, dtype=np.float64).reshape(3, 3)
        mat.setflags(write=False)
        self._matrix = mat

    @classmethod
    def identity(cls) -> Rotation:
        """The identity rotation."""
        return cls(np.eye(3))

    @classmethod
    def about_axis(cls, axis: int | Sequence[float] | np.ndarray, angle_deg: float) -> Rotation:
        """Active rotation by angle_deg (right-hand rule) about an axis.

        Parameters:
            axis: 0, 1, 2 for x, y, z, or an arbitrary 3-vector.
            angle_deg: Rotation angle in degrees.

        Returns:
            Rotation turning vectors counterclockwise about the axis.
        """
        k = _AXES[axis] if isinstance(axis, int) else unit(axis)
        a = radians(angle_deg)
        c = math.cos(a)
        s = math.sin(a)
        kx = np.array([
            [0.0, -k[2], k[1]],
            [k[2], 0.0, -k[0]],
            [-k[1], k[0], 0.0],
        ])
        # Rodrigues: R = I + sin(a) K + (1 - cos(a)) K^2
        return cls(np.eye(3) + s * kx + (1.0 - c) * (kx @ kx))

    @classmethod
    def rotate_a_to_b(
        cls, a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray
    ) -> Rotation:
        """Smallest rotation carrying direction a onto direction b.

        Antiparallel inputs rotate by 180 degrees about an arbitrary
        perpendicular axis; a zero input gives the identity.

        Parameters:
            a: Source direction (any length).
            b: Target direction (any length).

        Returns:
            Rotation R with R.apply(unit(a)) == unit(b).
        """
        ua = unit(a)
        ub = unit(b)
        if not ua.any() or not ub.any():
            return cls.identity()
        axis = np.cross(ua, ub)
        sin_a = float(np.linalg.norm(axis))
        cos_a = float(np.dot(ua, ub))
        if sin_a < _EPS:
            if cos_a > 0.0:
                return cls.identity()
            return cls.about_axis(_perpendicular(ua), 180.0)
        return cls.about_axis(axis, math.degrees(math.atan2(sin_a, cos_a)))

    @property
    def matrix(self) -> np.ndarray:
        """Read-only 3x3 matrix (row-major) of the rotation."""
        return self._matrix

    def apply(self, v: Sequence[float] | np.ndarray) -> np.ndarray:
        """Rotate a 3-vector."""
        return self._matrix @ _as_vec(v)

    def compose(self, other: Rotation) -> Rotation:
        """Rotation applying self first, then other."""
        return Rotation(other._matrix @ self._matrix)

    def inverse(self) -> Rotation:
        """Inverse rotation (matrix transpose)."""
        return Rotation(self._matrix.T)

    def __repr__(self) -> str:
        return f'Rotation({self._matrix.tolist()!r})'


def radec_to_vector(ra_deg: float, dec_deg: float) -> np.ndarray:
    """Unit vector for a right ascension / declination pair (degrees)."""
    ra = radians(ra_deg)
    dec = radians(dec_deg)
    cd = math.cos(dec)
    return np.array([cd * math.cos(ra), cd * math.sin(ra), math.sin(dec)])


def vector_to_radec(v: Sequence[float] | np.ndarray) -> tuple[float, float]:
    """RA in [0, 360) and Dec in [-90, 90] (degrees) of a vector of any length."""
    u = unit(v)
    ra = norm_360(math.degrees(math.atan2(u[1], u[0])))
    return (ra, safe_asin_deg(u[2]))


def sky_basis(ra_deg: float, dec_deg: float) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Local tangent basis on the celestial sphere at (ra, dec).

    Parameters:
        ra_deg: Right ascension in degrees.
        dec_deg: Declination in degrees.

    Returns:
        (radial, north, east) unit vectors; north points toward the
        celestial pole along the hour circle, east toward increasing RA.
    """
    ra = radians(ra_deg)
    dec = radians(dec_deg)
    sr, cr = math.sin(ra), math.cos(ra)
    sd, cd = math.sin(dec), math.cos(dec)
    radial = np.array([cd * cr, cd * sr, sd])
    north = np.array([-sd * cr, -sd * sr, cd])
    east = np.array([-sr, cr, 0.0])
    return (radial, north, east)


def position_angle_of_vector(
    v: Sequence[float] | np.ndarray, ra_deg: float, dec_deg: float
) -> float:
    """Position angle (east of north) of direction v as seen at (ra, dec).

    The component of v along the line of sight is ignored.

    Parameters:
        v: Direction in the equatorial frame (any length).
        ra_deg: Right ascension of the reference point, degrees.
        dec_deg: Declination of the reference point, degrees.

    Returns:
        Position angle in (-180, 180]. Meaningless (but finite) when v is
        parallel to the line of sight.
    """
    _, north, east = sky_basis(ra_deg, dec_deg)
    arr = _as_vec(v)
    return wrap_180(math.degrees(math.atan2(float(arr @ east), float(arr @ north))))
