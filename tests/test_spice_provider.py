"""Tests for the SPICE observer helpers and SpiceEphemeris with mocked cspyce."""

from __future__ import annotations

import math
from datetime import datetime

import numpy as np
import pytest

from sky_orientation import ephemeris
from sky_orientation.constants import EARTH_ID, SUN_ID
from sky_orientation.models import Body, ObserverLocation
from sky_orientation.spice import observer as spice_observer
from sky_orientation.spice.provider import SpiceEphemeris

INSTANT = datetime(2024, 4, 8, 18, 0, 0)
OBSERVER = ObserverLocation(latitude_deg=30.0, longitude_deg=-100.0, elevation_m=1000.0)


def _mtxv(mat: object, vec: object) -> np.ndarray:
    return np.asarray(mat, dtype=np.float64).T @ np.asarray(vec, dtype=np.float64)


def _recrad(v: list[float]) -> tuple[float, float, float]:
    x, y, z = v
    r = math.sqrt(x * x + y * y + z * z)
    return (r, math.atan2(y, x) % (2.0 * math.pi), math.asin(z / r))


def _vsep(a: object, b: object) -> float:
    ua = np.asarray(a, dtype=np.float64) / np.linalg.norm(a)
    ub = np.asarray(b, dtype=np.float64) / np.linalg.norm(b)
    return math.acos(max(-1.0, min(1.0, float(ua @ ub))))


def test_observer_state_geodetic_offset_keeps_ssb_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Surface offset is added to Earth's SSB position; velocity gains surface rotation."""

    monkeypatch.setattr(
        'cspyce.spkssb',
        lambda body_id, et, frame: [1.0, 2.0, 3.0, 4.0, 5.0, 6.0],
    )
    geodetic: list[tuple[float, ...]] = []

    def _georec(lon: float, lat: float, alt: float, rad: float, flat: float) -> list[float]:
        geodetic.append((lon, lat, alt))
        return [10.0, 20.0, 30.0]

    def _pxform(frm: str, to: str, et: float) -> np.ndarray:
        assert (frm, to) == ('J2000', 'IAU_EARTH')
        assert et == 0.0
        return np.eye(3)

    monkeypatch.setattr('cspyce.georec', _georec)
    monkeypatch.setattr('cspyce.pxform', _pxform)
    monkeypatch.setattr('cspyce.mtxv', _mtxv)

    out = spice_observer.observer_state(0.0, OBSERVER)

    assert geodetic == [(math.radians(-100.0), math.radians(30.0), 1.0)]
    np.testing.assert_allclose(out[:3], [11.0, 22.0, 33.0])
    rate = 2.0 * math.pi / 86400.0
    np.testing.assert_allclose(out[3:], [4.0 - rate * 20.0, 5.0 + rate * 10.0, 6.0])


def test_local_basis_rotates_body_fixed_vectors_to_j2000(monkeypatch: pytest.MonkeyPatch) -> None:
    """East/north/up are built body-fixed and rotated with the transpose of pxform."""
    # J2000 -> body-fixed: body x is J2000 y
    to_body = np.array([[0.0, 1.0, 0.0], [-1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
    monkeypatch.setattr('cspyce.pxform', lambda frm, to, et: to_body)
    monkeypatch.setattr('cspyce.mtxv', _mtxv)

    east, north, up = spice_observer.local_basis(0.0, ObserverLocation(0.0, 0.0))

    np.testing.assert_allclose(up, [0.0, 1.0, 0.0], atol=1e-15)
    np.testing.assert_allclose(east, [-1.0, 0.0, 0.0], atol=1e-15)
    np.testing.assert_allclose(north, [0.0, 0.0, 1.0], atol=1e-15)


@pytest.fixture
def mocked_provider(
    monkeypatch: pytest.MonkeyPatch,
) -> tuple[SpiceEphemeris, list[tuple], dict[str, list[float]]]:
    """SpiceEphemeris with kernels, time, observer and cspyce geometry mocked."""
    calls: list[tuple] = []
    sun_from_body = {'vector': [-1000.0, 0.0, -1000.0]}

    def _spkapp(targ: int, et: float, ref: str, sobs: list[float], abcorr: str):
        calls.append(('spkapp', targ, abcorr))
        if targ == SUN_ID:
            return (list(sun_from_body['vector']) + [0.0, 0.0, 0.0], 499.0)
        return ([1000.0, 0.0, 1000.0, 0.0, 0.0, 0.0], 0.004)

    def _spkssb(targ: int, et: float, ref: str) -> list[float]:
        calls.append(('spkssb', targ, et))
        return [0.0] * 6

    monkeypatch.setattr('sky_orientation.spice.provider.load_kernels', lambda kernels: (True, None))
    monkeypatch.setattr('sky_orientation.spice.provider.et_from_instant', lambda instant: 100.0)
    monkeypatch.setattr('sky_orientation.spice.provider.observer_state', lambda et, obs: np.zeros(6))
    # east = +y, north = +z, up = +x
    monkeypatch.setattr(
        'sky_orientation.spice.provider.local_basis',
        lambda et, obs: (np.array([0.0, 1.0, 0.0]), np.array([0.0, 0.0, 1.0]), np.array([1.0, 0.0, 0.0])),
    )
    monkeypatch.setattr('cspyce.spkapp', _spkapp)
    monkeypatch.setattr('cspyce.spkssb', _spkssb)
    monkeypatch.setattr('cspyce.recrad', _recrad)
    monkeypatch.setattr('cspyce.vsep', _vsep)
    monkeypatch.setattr('cspyce.vminus', lambda v: [-x for x in v])
    return SpiceEphemeris(), calls, sun_from_body


def test_body_ephemeris_horizontal_and_equatorial(
    mocked_provider: tuple[SpiceEphemeris, list[tuple], dict[str, list[float]]],
) -> None:
    """Apparent vector gives RA/Dec, az/alt from the local basis and the distance."""
    provider, calls, _ = mocked_provider

    eph = provider.body_ephemeris(Body.MOON, INSTANT, OBSERVER)

    assert eph.equatorial.ra_deg == pytest.approx(0.0)
    assert eph.equatorial.dec_deg == pytest.approx(45.0)
    assert eph.equatorial.frame == 'J2000'
    assert eph.horizontal.azimuth_deg == pytest.approx(0.0)
    assert eph.horizontal.altitude_deg == pytest.approx(45.0)
    assert eph.distance_km == pytest.approx(1000.0 * math.sqrt(2.0))
    assert ('spkapp', 301, 'LT+S') in calls
    # the Sun is looked up from the body at the light-time corrected epoch
    assert ('spkssb', 301, pytest.approx(100.0 - 0.004)) in calls


def test_illuminated_fraction_from_phase_angle(
    mocked_provider: tuple[SpiceEphemeris, list[tuple], dict[str, list[float]]],
) -> None:
    """Sun behind the observer is full phase; at right angles half lit."""
    provider, _, sun_from_body = mocked_provider

    full = provider.body_ephemeris(Body.MOON, INSTANT, OBSERVER)
    assert full.illuminated_fraction == pytest.approx(1.0)

    sun_from_body['vector'] = [1000.0, 0.0, -1000.0]
    half = provider.body_ephemeris(Body.MOON, INSTANT, OBSERVER)
    assert half.illuminated_fraction == pytest.approx(0.5)


def test_sun_is_fully_lit_and_outer_planets_use_barycenters(
    mocked_provider: tuple[SpiceEphemeris, list[tuple], dict[str, list[float]]],
) -> None:
    """No phase lookup for the Sun; Jupiter is requested as barycenter 5."""
    provider, calls, _ = mocked_provider

    sun = provider.body_ephemeris(Body.SUN, INSTANT, OBSERVER)
    assert sun.illuminated_fraction == 1.0
    assert not [c for c in calls if c[0] == 'spkssb']

    provider.body_ephemeris(Body.JUPITER, INSTANT, OBSERVER)
    assert ('spkapp', 5, 'LT+S') in calls


def test_geocentric_position_uses_earth_as_observer(monkeypatch: pytest.MonkeyPatch) -> None:
    """geocentric_position_km returns the first three components of spkez."""
    seen: list[tuple] = []

    def _spkez(targ: int, et: float, ref: str, abcorr: str, obs: int):
        seen.append((targ, et, ref, abcorr, obs))
        return ([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], 0.1)

    monkeypatch.setattr('sky_orientation.spice.provider.load_kernels', lambda kernels: (True, None))
    monkeypatch.setattr('sky_orientation.spice.provider.et_from_instant', lambda instant: 7.0)
    monkeypatch.setattr('cspyce.spkez', _spkez)

    pos = SpiceEphemeris().geocentric_position_km(Body.MOON, INSTANT)

    np.testing.assert_allclose(pos, [1.0, 2.0, 3.0])
    assert seen == [(301, 7.0, 'J2000', 'LT+S', EARTH_ID)]


def test_constructor_raises_when_kernels_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    """A provider without kernels cannot be built."""
    monkeypatch.setattr(
        'sky_orientation.spice.provider.load_kernels', lambda kernels: (False, 'no kernels here')
    )
    with pytest.raises(RuntimeError, match='no kernels here'):
        SpiceEphemeris()


def test_default_provider_is_created_once(monkeypatch: pytest.MonkeyPatch) -> None:
    """get_default_provider builds SpiceEphemeris lazily and reuses it."""
    built: list[object] = []

    class _Provider:
        def __init__(self) -> None:
            built.append(self)

    monkeypatch.setattr(ephemeris, '_default_provider', None)
    monkeypatch.setattr('sky_orientation.spice.provider.SpiceEphemeris', _Provider)

    first = ephemeris.get_default_provider()
    second = ephemeris.get_default_provider()

    assert first is second
    assert len(built) == 1

    ephemeris.set_default_provider(None)
    assert ephemeris._default_provider is None
