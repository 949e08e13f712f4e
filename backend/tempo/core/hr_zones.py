"""Heart rate zone derivation and validation.

Three ways to get a 5-zone set:

- age based: bands are percentages of ``220 - age``
- Karvonen: bands are ``resting + pct * (max - resting)``
- custom: caller supplies the zones, we only validate them

Both formulas use ``HR_ZONE_PERCENT_BOUNDS`` and round half up to whole bpm.
"""

from typing import Optional, Sequence

from tempo.core.constants import AGE_MAX_HR_BASE, HR_ZONE_PERCENT_BOUNDS, ZONE_COUNT
from tempo.core.errors import InvalidArgument
from tempo.schemas.hr_zones import CalculationMethod, HeartRateZone


def _round_pct(value: int, pct: int) -> int:
    """Return ``value * pct / 100`` rounded half up (exact integer math)."""
    return (value * pct + 50) // 100


def _zones_from_bounds(base: int, span: int) -> list[HeartRateZone]:
    bounds = [base + _round_pct(span, pct) for pct in HR_ZONE_PERCENT_BOUNDS]
    return [
        HeartRateZone(zone_number=i + 1, min_bpm=bounds[i], max_bpm=bounds[i + 1])
        for i in range(ZONE_COUNT)
    ]


def calculate_zones_from_age(age: int) -> list[HeartRateZone]:
    """Zones as percentages of the age-predicted max heart rate.

    Example: age 30 -> HR max 190 -> Z1 95-114, ..., Z5 171-190
    """
    if age is None or age <= 0:
        raise InvalidArgument("Age must be a positive number")
    max_hr = AGE_MAX_HR_BASE - age
    if max_hr <= 0:
        raise InvalidArgument(f"Age must be less than {AGE_MAX_HR_BASE}")
    return _zones_from_bounds(0, max_hr)


def calculate_zones_from_karvonen(max_heart_rate_bpm: int, resting_heart_rate_bpm: int) -> list[HeartRateZone]:
    """Zones from heart rate reserve (max - resting) offset by resting HR.

    Example: max 190, resting 60 -> reserve 130 -> Z1 125-138, ..., Z5 177-190
    """
    if max_heart_rate_bpm <= 0 or resting_heart_rate_bpm <= 0:
        raise InvalidArgument("Heart rate values must be positive")
    if resting_heart_rate_bpm >= max_heart_rate_bpm:
        raise InvalidArgument("Max heart rate must be greater than resting heart rate")
    reserve = max_heart_rate_bpm - resting_heart_rate_bpm
    return _zones_from_bounds(resting_heart_rate_bpm, reserve)


def validate_custom_zones(zones: Optional[Sequence[HeartRateZone]]) -> tuple[bool, Optional[str]]:
    """Check user supplied zones; returns ``(is_valid, error_message)``.

    Gaps between zones are accepted, overlaps are not. Zone numbers are
    either all omitted (list order) or exactly 1..5.
    """
    if zones is None or len(zones) != ZONE_COUNT:
        return False, f"Exactly {ZONE_COUNT} zones are required"

    if any(z is None for z in zones):
        return False, "All zones must be defined"

    numbers = [z.zone_number for z in zones]
    if any(n is not None for n in numbers):
        if sorted(n for n in numbers if n is not None) != list(range(1, ZONE_COUNT + 1)):
            return False, f"Zone numbers must be 1 through {ZONE_COUNT}, each exactly once"
        zones = sorted(zones, key=lambda z: z.zone_number)

    for i, zone in enumerate(zones):
        if zone.min_bpm > zone.max_bpm:
            return False, f"Zone {i + 1}: minimum BPM must not exceed maximum BPM"

    for i in range(ZONE_COUNT - 1):
        if zones[i].max_bpm > zones[i + 1].min_bpm:
            return False, f"Zone {i + 1} and Zone {i + 2} overlap or are not in ascending order"

    return True, None


def normalize_zones(zones: Sequence[HeartRateZone]) -> list[HeartRateZone]:
    """Order validated zones by number and fill in positional numbers."""
    if all(z.zone_number is not None for z in zones):
        zones = sorted(zones, key=lambda z: z.zone_number)
    return [
        HeartRateZone(zone_number=i + 1, min_bpm=z.min_bpm, max_bpm=z.max_bpm)
        for i, z in enumerate(zones)
    ]


def derive_zones(
    method: CalculationMethod,
    age: Optional[int] = None,
    resting_heart_rate_bpm: Optional[int] = None,
    max_heart_rate_bpm: Optional[int] = None,
    zones: Optional[Sequence[HeartRateZone]] = None,
) -> list[HeartRateZone]:
    """Compute or validate the zone set for ``method``.

    Raises InvalidArgument with a method specific message when a required
    input is missing or the inputs are rejected.
    """
    if method == CalculationMethod.age_based:
        if age is None:
            raise InvalidArgument("Age is required for AgeBased calculation method")
        return calculate_zones_from_age(age)

    if method == CalculationMethod.karvonen:
        if max_heart_rate_bpm is None or resting_heart_rate_bpm is None:
            raise InvalidArgument(
                "Max heart rate and resting heart rate are required for Karvonen calculation method"
            )
        return calculate_zones_from_karvonen(max_heart_rate_bpm, resting_heart_rate_bpm)

    if method == CalculationMethod.custom:
        if zones is None or len(zones) != ZONE_COUNT:
            raise InvalidArgument(f"Exactly {ZONE_COUNT} zones are required for Custom method")
        is_valid, error = validate_custom_zones(zones)
        if not is_valid:
            raise InvalidArgument(error)
        return normalize_zones(zones)

    raise InvalidArgument("Invalid calculation method")


def get_zones_from_user_settings(settings) -> list[HeartRateZone]:
    """Read the five persisted zones, whatever method produced them."""
    return [
        HeartRateZone(
            zone_number=n,
            min_bpm=getattr(settings, f"zone{n}_min_bpm"),
            max_bpm=getattr(settings, f"zone{n}_max_bpm"),
        )
        for n in range(1, ZONE_COUNT + 1)
    ]


def apply_zones_to_user_settings(settings, zones: Sequence[HeartRateZone]) -> None:
    """Write zone boundaries onto the settings record (no validation)."""
    for n, zone in enumerate(zones, start=1):
        setattr(settings, f"zone{n}_min_bpm", zone.min_bpm)
        setattr(settings, f"zone{n}_max_bpm", zone.max_bpm)
