"""SPICE kernel loading from the configured kernel directory."""

from __future__ import annotations

import logging
from pathlib import Path

import cspyce

from sky_orientation.config import get_kernel_names, get_spice_path
from sky_orientation.spice.common import get_state

logger = logging.getLogger(__name__)


def load_kernels(names: list[str] | None = None) -> tuple[bool, str | None]:
    """Furnish SPICE kernels once per process.

    Returns (True, None) if the pool is loaded, (False, reason) on failure.
    Individual kernels that are missing or fail to load are logged and
    skipped; at least one must load.

    Parameters:
        names: Kernel file names relative to SPICE_PATH, or absolute paths.
            None uses the configured list (SKY_ORIENTATION_KERNELS).

    Returns:
        (ok, reason) tuple.
    """
    state = get_state()
    if state.pool_loaded:
        return (True, None)
    base = Path(get_spice_path())
    if not base.exists():
        return (False, f'SPICE_PATH directory does not exist: {base}')
    if not base.is_dir():
        return (False, f'SPICE_PATH is not a directory: {base}')
    kernel_names = names if names is not None else get_kernel_names()
    loaded: list[str] = []
    for name in kernel_names:
        kpath = Path(name) if Path(name).is_absolute() else base / name
        if not kpath.exists():
            logger.warning('Kernel not found: %s', kpath)
            continue
        try:
            cspyce.furnsh(str(kpath))
        except Exception as e:
            logger.warning('Failed to load %s: %s', kpath, e)
            continue
        loaded.append(str(kpath))
    if not loaded:
        return (
            False,
            f'No kernel files from {kernel_names} could be loaded under {base}. '
            'Set SPICE_PATH and SKY_ORIENTATION_KERNELS to an existing kernel set.',
        )
    state.kernels = loaded
    state.pool_loaded = True
    logger.info('Loaded %d SPICE kernels from %s', len(loaded), base)
    return (True, None)
