"""Bulk relative effort recalculation.

A workout qualifies when it carries any heart rate signal: a time series
sample with heart rate, a raw FIT capture (may embed an average HR), or an
average heart rate column. Every qualifying workout is rescored with the
given zones; a scorer failure on one workout is recorded and skipped, and all
successful updates are committed together at the end.
"""

from typing import Callable, Optional, Sequence

from sqlalchemy import and_, exists, or_
from sqlalchemy.orm import Session, selectinload

from tempo.core.errors import PreconditionFailed
from tempo.core.hr_zones import get_zones_from_user_settings
from tempo.core.logging import get_logger
from tempo.models.workout import Workout
from tempo.models.workout_time_series import WorkoutTimeSeries
from tempo.schemas.hr_zones import HeartRateZone, RecalculationResult
from tempo.services.settings_store import SettingsSlot

logger = get_logger(__name__)

# score(workout, zones) -> relative effort, or None when it cannot be scored
Scorer = Callable[[Workout, Sequence[HeartRateZone]], Optional[int]]


def find_qualifying_workout_ids(db: Session) -> set[int]:
    has_hr_samples = exists().where(
        and_(
            WorkoutTimeSeries.workout_id == Workout.id,
            WorkoutTimeSeries.heart_rate_bpm.isnot(None),
        )
    )
    rows = (
        db.query(Workout.id)
        .filter(
            or_(
                has_hr_samples,
                and_(Workout.raw_fit_data.isnot(None), Workout.raw_fit_data != ""),
                Workout.avg_heart_rate_bpm.isnot(None),
            )
        )
        .all()
    )
    return {r.id for r in rows}


def count_qualifying_workouts(db: Session) -> int:
    return len(find_qualifying_workout_ids(db))


def recalculate_all(db: Session, zones: Sequence[HeartRateZone], score: Scorer) -> RecalculationResult:
    """Rescore every qualifying workout and commit the results in one go.

    Workouts are processed in ascending id order. If the final commit fails
    the session is rolled back and the error propagates, so either all
    updates of the run are stored or none are.
    """
    ids = find_qualifying_workout_ids(db)
    if not ids:
        return RecalculationResult()

    workouts = (
        db.query(Workout)
        .options(selectinload(Workout.time_series))
        .filter(Workout.id.in_(ids))
        .order_by(Workout.id)
        .all()
    )

    updated = 0
    errors: list[str] = []
    for workout in workouts:
        try:
            effort = score(workout, zones)
        except Exception as e:
            logger.warning("relative_effort_failed", workout_id=workout.id, error=str(e))
            errors.append(f"Workout {workout.id}: {e}")
            continue
        if effort is not None:
            workout.relative_effort = effort
            updated += 1

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "relative_effort_recalculated",
        updated=updated,
        total=len(workouts),
        errors=len(errors),
    )
    return RecalculationResult(
        updated_count=updated,
        total_qualifying=len(workouts),
        error_count=len(errors),
        errors=errors or None,
    )


def recalculate_from_settings(db: Session, score: Scorer) -> RecalculationResult:
    """Recalculate with the persisted zones; requires zones to be configured."""
    settings = SettingsSlot(db).get()
    if settings is None:
        raise PreconditionFailed(
            "Heart rate zones not configured. Please configure heart rate zones in settings first."
        )
    return recalculate_all(db, get_zones_from_user_settings(settings), score)
