"""Fixed constants: physical radii, distance units, time epochs, NAIF body IDs."""

# Body IDs (NAIF)
SUN_ID = 10
EARTH_ID = 399
MOON_ID = 301

# Physical sizes (km)
EARTH_RADIUS_KM = 6378.137
MOON_RADIUS_KM = 1737.4
SUN_RADIUS_KM = 695700.0
AU_KM = 149597870.7

# GRS 80 flattening for geodetic observer offsets
EARTH_FLATTENING = 1.0 / 298.257222

# Time
SECONDS_PER_DAY = 86400.0
J2000_JD = 2451545.0
JD_AT_J2000_MIDNIGHT = 2451544.5  # 2000-01-01 00:00 (day 0 of rms-julian)
DAYS_PER_CENTURY = 36525.0
DAYS_PER_JULIAN_YEAR = 365.25
TT_MINUS_TAI_SECONDS = 32.184

# Angle: degrees per circle and sexagesimal
DEGREES_PER_CIRCLE = 360.0
HALF_CIRCLE_DEGREES = 180.0
ARCSEC_PER_DEGREE = 3600.0

# Numerical guards
MIN_DISTANCE_KM = 1.0  # distances are clamped to this before division
COS_EPSILON = 1e-9  # cosines are clamped away from zero by this
