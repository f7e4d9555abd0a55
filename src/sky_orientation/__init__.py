"""Orientation and shadow geometry for the Sun, Moon, and major planets.

This package provides the angular quantities a sky-rendering layer needs:
- Time scales: Julian Day, Julian centuries TT, Delta T, sidereal time
- Coordinate transforms and a small rotation value type
- Pole orientation models (WGCCRE) and lunar optical libration
- Rotation-to-horizon angles, Earth-shadow geometry, terminator lookup

Raw ephemerides come from an EphemerisProvider; the default provider uses
SPICE kernels via cspyce and rms-julian for time conversions.
"""

__all__: list[str] = []
