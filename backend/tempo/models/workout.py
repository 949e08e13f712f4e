from sqlalchemy import Column, Integer, String, DateTime, Float, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from tempo.db import Base


class Workout(Base):
    __tablename__ = "workouts"

    id = Column(Integer, primary_key=True, index=True)

    started_at = Column(DateTime(timezone=True), nullable=False)
    name = Column(String, nullable=True)

    # Total elapsed time in seconds
    duration_s = Column(Integer, nullable=False)
    distance_m = Column(Float, nullable=False)

    # Heart rate summary (if the device recorded one)
    avg_heart_rate_bpm = Column(Integer, nullable=True)
    max_heart_rate_bpm = Column(Integer, nullable=True)

    # Raw FIT capture as JSON text: session summary, device info, ...
    raw_fit_data = Column(Text, nullable=True)

    # Derived from heart rate zones; rewritten on zone changes
    relative_effort = Column(Integer, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    time_series = relationship(
        "WorkoutTimeSeries",
        order_by="WorkoutTimeSeries.elapsed_seconds",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
