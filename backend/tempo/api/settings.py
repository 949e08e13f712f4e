from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from tempo.core.errors import ZoneSettingsError
from tempo.core.logging import get_logger
from tempo.db import get_db
from tempo.schemas.hr_zones import (
    HeartRateZonesRead,
    HeartRateZonesRecalcResult,
    HeartRateZonesUpdate,
    HeartRateZonesUpdateResult,
    HeartRateZonesUpdateWithRecalc,
    QualifyingCount,
    RecalculationResult,
)
from tempo.services.recalculation import (
    Scorer,
    count_qualifying_workouts,
    recalculate_from_settings,
)
from tempo.services.relative_effort import calculate_relative_effort
from tempo.services.zone_settings import (
    read_zones,
    update_zones,
    update_zones_and_recalculate,
)

router = APIRouter(prefix="/settings", tags=["settings"])
logger = get_logger(__name__)


def get_scorer() -> Scorer:
    """Relative effort scorer used by recalculation (overridable in tests)."""
    return calculate_relative_effort


@router.get("/heart-rate-zones", response_model=HeartRateZonesRead)
def get_heart_rate_zones(db: Session = Depends(get_db)):
    try:
        return read_zones(db)
    except Exception:
        logger.error("heart_rate_zones_read_failed", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to retrieve heart rate zones")


@router.put("/heart-rate-zones", response_model=HeartRateZonesUpdateResult)
def put_heart_rate_zones(payload: HeartRateZonesUpdate, db: Session = Depends(get_db)):
    try:
        return update_zones(db, payload)
    except ZoneSettingsError:
        raise
    except Exception:
        logger.error("heart_rate_zones_update_failed", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update heart rate zones")


@router.get("/recalculate-relative-effort/count", response_model=QualifyingCount)
def get_qualifying_count(db: Session = Depends(get_db)):
    """Number of workouts with heart rate data (time series, raw FIT data or average HR)."""
    try:
        return QualifyingCount(count=count_qualifying_workouts(db))
    except Exception:
        logger.error("qualifying_count_failed", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to get qualifying workout count")


@router.post("/recalculate-relative-effort", response_model=RecalculationResult)
def post_recalculate_relative_effort(
    db: Session = Depends(get_db),
    score: Scorer = Depends(get_scorer),
):
    """Recalculate relative effort for all qualifying workouts with the saved zones."""
    try:
        return recalculate_from_settings(db, score)
    except ZoneSettingsError:
        raise
    except Exception:
        logger.error("relative_effort_recalculation_failed", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail="Failed to recalculate Relative Effort for all workouts",
        )


@router.post("/heart-rate-zones/update-with-recalc", response_model=HeartRateZonesRecalcResult)
def post_heart_rate_zones_with_recalc(
    payload: HeartRateZonesUpdateWithRecalc,
    db: Session = Depends(get_db),
    score: Scorer = Depends(get_scorer),
):
    """Update zones and, when asked, recalculate relative effort for existing workouts."""
    try:
        return update_zones_and_recalculate(db, payload, score)
    except ZoneSettingsError:
        raise
    except Exception:
        logger.error("heart_rate_zones_update_failed", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update heart rate zones")
