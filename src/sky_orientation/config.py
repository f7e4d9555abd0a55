"""Configuration: SPICE kernel directory, kernel list and leap seconds kernel."""

import os
from pathlib import Path

DEFAULT_SPICE_PATH = '/var/www/SPICE/'
DEFAULT_KERNELS = ('naif0012.tls', 'pck00011.tpc', 'de440s.bsp')


def get_spice_path() -> str:
    """Return SPICE kernel root directory (SPICE_PATH env var or default).

    Returns:
        Path string.
    """
    return os.environ.get('SPICE_PATH', DEFAULT_SPICE_PATH)


def get_kernel_names() -> list[str]:
    """Return kernel file names to load, relative to the SPICE path.

    Reads the comma-separated SKY_ORIENTATION_KERNELS env var; blank entries
    are ignored. Falls back to DEFAULT_KERNELS when unset or empty.

    Returns:
        List of kernel file names in load order.
    """
    raw = os.environ.get('SKY_ORIENTATION_KERNELS', '')
    names = [name.strip() for name in raw.split(',') if name.strip()]
    if names:
        return names
    return list(DEFAULT_KERNELS)


def get_leapsecs_path() -> str | None:
    """Return the leap seconds kernel (LSK) to load into rms-julian.

    JULIAN_LEAPSECS wins; otherwise the first .tls entry of the configured
    kernel list, resolved against SPICE_PATH like load_kernels does.

    Returns:
        Path string, or None when no LSK is configured.
    """
    path = os.environ.get('JULIAN_LEAPSECS', '').strip()
    if path:
        return path
    for name in get_kernel_names():
        if name.lower().endswith('.tls'):
            kpath = Path(name)
            return str(kpath if kpath.is_absolute() else Path(get_spice_path()) / kpath)
    return None
