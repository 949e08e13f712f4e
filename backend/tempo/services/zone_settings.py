"""Reading and updating the heart rate zone settings.

``update_zones`` validates and derives the zones before touching the store,
so bad input never leaves a partial write. ``update_zones_and_recalculate``
adds an optional relative effort recalculation that is best effort: the
settings commit stands even if recalculation fails.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import Session

from tempo.core.config import settings as app_settings
from tempo.core.constants import AGE_MAX_HR_BASE
from tempo.core.hr_zones import (
    apply_zones_to_user_settings,
    calculate_zones_from_age,
    derive_zones,
    get_zones_from_user_settings,
)
from tempo.core.logging import get_logger
from tempo.schemas.hr_zones import (
    CalculationMethod,
    HeartRateZonesRead,
    HeartRateZonesRecalcResult,
    HeartRateZonesUpdate,
    HeartRateZonesUpdateResult,
    HeartRateZonesUpdateWithRecalc,
)
from tempo.services.recalculation import Scorer, recalculate_all
from tempo.services.settings_store import SettingsSlot

logger = get_logger(__name__)


def read_zones(db: Session) -> HeartRateZonesRead:
    """Current settings, or age based defaults when nothing is configured yet."""
    row = SettingsSlot(db).get()
    if row is None:
        age = app_settings.default_age
        return HeartRateZonesRead(
            calculation_method=CalculationMethod.age_based.value,
            age=age,
            resting_heart_rate_bpm=None,
            max_heart_rate_bpm=AGE_MAX_HR_BASE - age,
            zones=calculate_zones_from_age(age),
        )
    return HeartRateZonesRead(
        calculation_method=row.calculation_method,
        age=row.age,
        resting_heart_rate_bpm=row.resting_heart_rate_bpm,
        max_heart_rate_bpm=row.max_heart_rate_bpm,
        zones=get_zones_from_user_settings(row),
    )


def update_zones(db: Session, payload: HeartRateZonesUpdate) -> HeartRateZonesUpdateResult:
    method = CalculationMethod.parse(payload.calculation_method)
    zones = derive_zones(
        method,
        age=payload.age,
        resting_heart_rate_bpm=payload.resting_heart_rate_bpm,
        max_heart_rate_bpm=payload.max_heart_rate_bpm,
        zones=payload.zones,
    )

    row, created = SettingsSlot(db).get_or_create()
    row.calculation_method = method.value
    # Stored verbatim, even when the method ignores them
    row.age = payload.age
    row.resting_heart_rate_bpm = payload.resting_heart_rate_bpm
    row.max_heart_rate_bpm = payload.max_heart_rate_bpm
    apply_zones_to_user_settings(row, zones)
    row.updated_at = datetime.now(timezone.utc)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(row)

    if created:
        logger.info("zone_settings_created", calculation_method=method.value)

    return HeartRateZonesUpdateResult(
        calculation_method=row.calculation_method,
        age=row.age,
        resting_heart_rate_bpm=row.resting_heart_rate_bpm,
        max_heart_rate_bpm=row.max_heart_rate_bpm,
        zones=zones,
        is_first_time_setup=created,
    )


def update_zones_and_recalculate(
    db: Session,
    payload: HeartRateZonesUpdateWithRecalc,
    score: Scorer,
) -> HeartRateZonesRecalcResult:
    updated = update_zones(db, payload)
    result = HeartRateZonesRecalcResult(**updated.model_dump())

    if payload.recalculate_existing:
        try:
            outcome = recalculate_all(db, updated.zones, score)
        except Exception as e:
            # Zones are already saved; recalculation is optional
            db.rollback()
            logger.warning("relative_effort_recalculation_failed", error=str(e), exc_info=True)
        else:
            result.recalculated_count = outcome.updated_count
            result.recalculated_error_count = outcome.error_count

    return result
