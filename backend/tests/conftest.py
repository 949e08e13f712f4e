import os
from datetime import datetime, timezone

# Use in-memory sqlite for tests; must be set before tempo is imported
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from tempo.db import Base, SessionLocal, engine  # noqa: E402
from tempo.main import app  # noqa: E402
from tempo.models.workout import Workout  # noqa: E402
from tempo.models.workout_time_series import WorkoutTimeSeries  # noqa: E402


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_workout(db):
    """Create and commit a workout; ``hr_samples`` is a list of (t, bpm)."""

    def _make(hr_samples=None, **fields):
        fields.setdefault("started_at", datetime(2025, 1, 1, 7, 0, tzinfo=timezone.utc))
        fields.setdefault("duration_s", 1800)
        fields.setdefault("distance_m", 5000.0)
        w = Workout(**fields)
        if hr_samples:
            w.time_series = [
                WorkoutTimeSeries(elapsed_seconds=t, heart_rate_bpm=hr)
                for t, hr in hr_samples
            ]
        db.add(w)
        db.commit()
        return w

    return _make
