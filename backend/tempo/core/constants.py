"""Shared heart rate constants.

Centralizes the values used by zone derivation and relative effort scoring
so we can document and adjust them in one place.
"""

# Age-predicted max heart rate: HR max = 220 - age
AGE_MAX_HR_BASE = 220

# Number of training zones; every zone set has exactly this many entries
ZONE_COUNT = 5

# Heart rate zone bounds as whole percentages of HR max (age based) or of
# heart rate reserve (Karvonen). Adjacent zones share a boundary.
# Z1: 50-60, Z2: 60-70, Z3: 70-80, Z4: 80-90, Z5: 90-100
HR_ZONE_PERCENT_BOUNDS = [50, 60, 70, 80, 90, 100]

# Relative effort points per minute spent in each zone
ZONE_WEIGHTS = (1, 2, 3, 4, 5)

# Sample gaps longer than this (seconds) are treated as pauses and count 1s
MAX_SAMPLE_GAP_S = 10
