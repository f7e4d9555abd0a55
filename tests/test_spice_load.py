"""Tests for SPICE kernel loading from the configured kernel directory."""

from __future__ import annotations

from pathlib import Path

import pytest

from sky_orientation.spice.common import SpiceState, get_state
from sky_orientation.spice.load import load_kernels


@pytest.fixture
def fresh_state(monkeypatch: pytest.MonkeyPatch) -> SpiceState:
    """Kernel pool bookkeeping reset for the duration of a test."""
    state = get_state()
    monkeypatch.setattr(state, 'pool_loaded', False)
    monkeypatch.setattr(state, 'kernels', [])
    return state


def test_missing_spice_path_reports_reason(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, fresh_state: SpiceState
) -> None:
    """A nonexistent kernel root is reported, nothing is furnished."""
    monkeypatch.setattr(
        'sky_orientation.spice.load.get_spice_path', lambda: str(tmp_path / 'absent')
    )
    monkeypatch.setattr('cspyce.furnsh', lambda path: pytest.fail('furnsh called'))

    ok, reason = load_kernels(['naif0012.tls'])

    assert ok is False
    assert reason is not None and 'does not exist' in reason
    assert fresh_state.pool_loaded is False


def test_missing_and_failing_kernels_are_skipped(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, fresh_state: SpiceState
) -> None:
    """Absent files and furnsh errors are skipped; the rest load."""
    (tmp_path / 'naif0012.tls').touch()
    (tmp_path / 'broken.bsp').touch()
    furnished: list[str] = []

    def _furnsh(path: str) -> None:
        if path.endswith('broken.bsp'):
            raise IOError('SPICE(INVALIDFORMAT)')
        furnished.append(path)

    monkeypatch.setattr('sky_orientation.spice.load.get_spice_path', lambda: str(tmp_path))
    monkeypatch.setattr('cspyce.furnsh', _furnsh)

    ok, reason = load_kernels(['naif0012.tls', 'de440s.bsp', 'broken.bsp'])

    assert ok is True
    assert reason is None
    assert furnished == [str(tmp_path / 'naif0012.tls')]
    assert fresh_state.kernels == furnished
    assert fresh_state.pool_loaded is True


def test_no_loadable_kernel_fails(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, fresh_state: SpiceState
) -> None:
    """With nothing loaded the call fails and leaves the pool unmarked."""
    monkeypatch.setattr('sky_orientation.spice.load.get_spice_path', lambda: str(tmp_path))
    monkeypatch.setattr('cspyce.furnsh', lambda path: None)

    ok, reason = load_kernels(['de440s.bsp'])

    assert ok is False
    assert reason is not None and 'de440s.bsp' in reason
    assert fresh_state.pool_loaded is False


def test_configured_names_and_absolute_paths(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, fresh_state: SpiceState
) -> None:
    """names=None reads the configured list; absolute names bypass SPICE_PATH."""
    elsewhere = tmp_path / 'other'
    elsewhere.mkdir()
    (elsewhere / 'pck00011.tpc').touch()
    (tmp_path / 'naif0012.tls').touch()
    furnished: list[str] = []

    monkeypatch.setattr('sky_orientation.spice.load.get_spice_path', lambda: str(tmp_path))
    monkeypatch.setattr(
        'sky_orientation.spice.load.get_kernel_names',
        lambda: ['naif0012.tls', str(elsewhere / 'pck00011.tpc')],
    )
    monkeypatch.setattr('cspyce.furnsh', furnished.append)

    ok, _ = load_kernels()

    assert ok is True
    assert furnished == [str(tmp_path / 'naif0012.tls'), str(elsewhere / 'pck00011.tpc')]


def test_loaded_pool_is_not_reloaded(monkeypatch: pytest.MonkeyPatch, fresh_state: SpiceState) -> None:
    """Once loaded, later calls return immediately."""
    fresh_state.pool_loaded = True
    monkeypatch.setattr('cspyce.furnsh', lambda path: pytest.fail('furnsh called'))
    assert load_kernels(['anything.bsp']) == (True, None)


def test_reset_forgets_loaded_kernels(fresh_state: SpiceState) -> None:
    """reset clears the bookkeeping so the next call loads again."""
    fresh_state.pool_loaded = True
    fresh_state.kernels = ['/k/naif0012.tls']
    fresh_state.reset()
    assert fresh_state.pool_loaded is False
    assert fresh_state.kernels == []
