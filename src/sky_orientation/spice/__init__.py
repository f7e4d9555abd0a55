"""SPICE-backed ephemeris provider (cspyce): kernel loading, observer state, positions."""
