from datetime import datetime, time, timedelta, timezone
import json
import random

from tempo.db import Base, SessionLocal, engine
from tempo.models.workout import Workout
from tempo.models.workout_time_series import WorkoutTimeSeries


def hr_samples(duration_s: int, base_hr: int, step_s: int = 5) -> list[WorkoutTimeSeries]:
    """Heart rate every ``step_s`` seconds drifting up from ``base_hr``."""
    samples = []
    for t in range(0, duration_s, step_s):
        drift = int(15 * t / max(duration_s, 1))
        samples.append(
            WorkoutTimeSeries(
                elapsed_seconds=t,
                heart_rate_bpm=base_hr + drift + random.randint(-3, 3),
            )
        )
    return samples


def clear_recent_workouts(db, days: int = 120) -> None:
    """Delete workouts in the last N days so we can reseed cleanly."""
    cutoff = datetime.now(timezone.utc) - timedelta(days=days)
    for w in db.query(Workout).filter(Workout.started_at >= cutoff).all():
        db.delete(w)
    db.commit()


def seed_demo_workouts(db) -> None:
    """Insert a 12-week block of workouts with each kind of heart rate source.

    Tue easy runs carry a full HR time series, Thu workouts only a raw FIT
    session summary, Sun long runs only an average HR.
    """
    today = datetime.now(timezone.utc).date()
    start_day = today - timedelta(weeks=11)

    workouts = []
    for week in range(12):
        week_start = start_day + timedelta(weeks=week)
        tue = week_start + timedelta(days=1)
        thu = week_start + timedelta(days=3)
        sun = week_start + timedelta(days=6)

        for d, name, duration_s, distance_m, base_hr in [
            (tue, "Easy run", 50 * 60, random.uniform(8000, 11000), 135),
            (thu, "Workout", 60 * 60, random.uniform(11000, 15000), 155),
            (sun, "Long run", 120 * 60, random.uniform(18000, 28000), 145),
        ]:
            if d > today:
                continue

            w = Workout(
                started_at=datetime.combine(d, time(7, 0), tzinfo=timezone.utc),
                name=name,
                duration_s=duration_s,
                distance_m=round(distance_m, 1),
            )
            if name == "Easy run":
                w.time_series = hr_samples(duration_s, base_hr)
            elif name == "Workout":
                w.raw_fit_data = json.dumps({"session": {"avgHeartRate": base_hr}})
            else:
                w.avg_heart_rate_bpm = base_hr
            workouts.append(w)

    if workouts:
        db.add_all(workouts)
        db.commit()

    print(f"Seeded {len(workouts)} demo workouts")


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        clear_recent_workouts(db, days=150)
        seed_demo_workouts(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
