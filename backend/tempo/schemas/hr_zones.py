from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from tempo.core.errors import InvalidArgument


class CalculationMethod(str, Enum):
    age_based = "AgeBased"    # 220 - age
    karvonen = "Karvonen"     # heart rate reserve
    custom = "Custom"         # user-defined zones

    @classmethod
    def parse(cls, value) -> "CalculationMethod":
        """Resolve a caller-supplied method name, ignoring case."""
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        for method in cls:
            if key in (method.value.lower(), method.name):
                return method
        raise InvalidArgument("Invalid calculation method")


class HeartRateZone(BaseModel):
    # Optional on input: zones without numbers are taken in list order
    zone_number: Optional[int] = None
    min_bpm: int
    max_bpm: int


class HeartRateZonesRead(BaseModel):
    calculation_method: str
    age: Optional[int] = None
    resting_heart_rate_bpm: Optional[int] = None
    max_heart_rate_bpm: Optional[int] = None
    zones: list[HeartRateZone]


class HeartRateZonesUpdate(BaseModel):
    """Schema for a zone update; which fields are required depends on the method."""

    # Plain optional string so a missing or unknown method gets our own error message
    calculation_method: Optional[str] = None
    age: Optional[int] = None
    resting_heart_rate_bpm: Optional[int] = None
    max_heart_rate_bpm: Optional[int] = None
    # null entries are reported by custom zone validation
    zones: Optional[list[Optional[HeartRateZone]]] = None

    model_config = ConfigDict(extra="ignore")


class HeartRateZonesUpdateWithRecalc(HeartRateZonesUpdate):
    recalculate_existing: Optional[bool] = None


class HeartRateZonesUpdateResult(HeartRateZonesRead):
    is_first_time_setup: bool


class HeartRateZonesRecalcResult(HeartRateZonesUpdateResult):
    # None when recalculation was not requested or did not complete
    recalculated_count: Optional[int] = None
    recalculated_error_count: Optional[int] = None


class RecalculationResult(BaseModel):
    updated_count: int = 0
    total_qualifying: int = 0
    error_count: int = 0
    errors: Optional[list[str]] = None


class QualifyingCount(BaseModel):
    count: int
