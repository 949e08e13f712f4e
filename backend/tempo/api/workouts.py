from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from tempo.db import get_db
from tempo.models.workout import Workout
from tempo.schemas.workout import WorkoutRead


router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.get("/", response_model=list[WorkoutRead])
def list_workouts(
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    has_relative_effort: Optional[bool] = None,
    db: Session = Depends(get_db),
):
    q = db.query(Workout)
    if has_relative_effort is True:
        q = q.filter(Workout.relative_effort.isnot(None))
    elif has_relative_effort is False:
        q = q.filter(Workout.relative_effort.is_(None))
    return (
        q.order_by(Workout.started_at.desc(), Workout.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


@router.get("/{workout_id}", response_model=WorkoutRead)
def get_workout(workout_id: int, db: Session = Depends(get_db)):
    workout = db.get(Workout, workout_id)
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout
