"""Tests for the Rotation value type and sky-vector helpers."""

from __future__ import annotations

import numpy as np
import pytest

from sky_orientation.rotation import (
    Rotation,
    position_angle_of_vector,
    radec_to_vector,
    sky_basis,
    unit,
    vector_to_radec,
)


def test_about_axis_z_quarter_turn() -> None:
    """A +90 degree turn about z carries x onto y (right-hand rule)."""
    out = Rotation.about_axis(2, 90.0).apply([1.0, 0.0, 0.0])
    np.testing.assert_allclose(out, [0.0, 1.0, 0.0], atol=1e-15)


def test_about_arbitrary_axis_matches_coordinate_axis() -> None:
    """A vector axis gives the same matrix as the equivalent axis index."""
    a = Rotation.about_axis([0.0, 0.0, 5.0], 33.0).matrix
    b = Rotation.about_axis(2, 33.0).matrix
    np.testing.assert_allclose(a, b, atol=1e-15)


def test_compose_applies_self_first() -> None:
    """a.compose(b) rotates by a, then by b."""
    a = Rotation.about_axis(2, 90.0)
    b = Rotation.about_axis(0, 90.0)
    v = np.array([1.0, 0.0, 0.0])
    np.testing.assert_allclose(a.compose(b).apply(v), b.apply(a.apply(v)), atol=1e-15)
    np.testing.assert_allclose(a.compose(b).apply(v), [0.0, 0.0, 1.0], atol=1e-15)


def test_inverse_undoes_rotation() -> None:
    """inverse composed with the rotation is the identity."""
    r = Rotation.about_axis([1.0, 2.0, 3.0], 47.0)
    np.testing.assert_allclose(r.compose(r.inverse()).matrix, np.eye(3), atol=1e-14)


def test_matrix_is_read_only() -> None:
    """Rotation matrices cannot be mutated in place."""
    r = Rotation.identity()
    with pytest.raises(ValueError):
        r.matrix[0, 0] = 2.0


@pytest.mark.parametrize(
    ('a', 'b'),
    [
        ([1.0, 0.0, 0.0], [0.0, 0.0, 2.0]),
        ([1.0, 2.0, 3.0], [-3.0, 0.5, 1.0]),
        ([0.0, 0.0, 1.0], [0.0, 0.0, 1.0]),
        ([0.0, 0.0, 1.0], [0.0, 0.0, -1.0]),
    ],
)
def test_rotate_a_to_b(a: list[float], b: list[float]) -> None:
    """rotate_a_to_b maps unit(a) onto unit(b), including antiparallel inputs."""
    r = Rotation.rotate_a_to_b(a, b)
    np.testing.assert_allclose(r.apply(unit(a)), unit(b), atol=1e-12)
    np.testing.assert_allclose(r.matrix @ r.matrix.T, np.eye(3), atol=1e-12)
    assert np.linalg.det(r.matrix) == pytest.approx(1.0)


def test_unit_of_zero_is_zero() -> None:
    """The zero vector has no direction and stays zero."""
    np.testing.assert_array_equal(unit([0.0, 0.0, 0.0]), np.zeros(3))


def test_radec_vector_round_trip() -> None:
    """radec_to_vector and vector_to_radec are inverses."""
    ra, dec = vector_to_radec(3.0 * radec_to_vector(301.5, -12.25))
    assert ra == pytest.approx(301.5)
    assert dec == pytest.approx(-12.25)


def test_sky_basis_is_orthonormal() -> None:
    """(radial, east, north) is a right-handed orthonormal triad."""
    radial, north, east = sky_basis(47.0, 31.0)
    basis = np.vstack([radial, north, east])
    np.testing.assert_allclose(basis @ basis.T, np.eye(3), atol=1e-15)
    np.testing.assert_allclose(np.cross(radial, east), north, atol=1e-15)


def test_position_angle_of_vector_cardinal_directions() -> None:
    """North is PA 0, east is PA 90, the line-of-sight component is ignored."""
    radial, north, east = sky_basis(10.0, 20.0)
    assert position_angle_of_vector(north + 5.0 * radial, 10.0, 20.0) == pytest.approx(0.0, abs=1e-12)
    assert position_angle_of_vector(east, 10.0, 20.0) == pytest.approx(90.0)
    assert position_angle_of_vector(-east, 10.0, 20.0) == pytest.approx(-90.0)
    assert position_angle_of_vector(-north, 10.0, 20.0) == pytest.approx(180.0)
