"""Shared state for the SPICE layer: which kernels are in the CSPICE pool."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SpiceState:
    """Kernel pool bookkeeping; CSPICE itself keeps the loaded data globally.

    Modified only by load_kernels and reset.
    """

    pool_loaded: bool = False
    kernels: list[str] = field(default_factory=list)

    def reset(self) -> None:
        """Forget loaded kernels (does not unload them from CSPICE)."""
        self.pool_loaded = False
        self.kernels = []


# Module-level singleton mirroring the process-wide CSPICE kernel pool
_state = SpiceState()


def get_state() -> SpiceState:
    """Return the global SpiceState instance."""
    return _state
