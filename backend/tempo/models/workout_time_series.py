from sqlalchemy import Column, Integer, ForeignKey
from tempo.db import Base


class WorkoutTimeSeries(Base):
    __tablename__ = "workout_time_series"

    id = Column(Integer, primary_key=True, index=True)
    workout_id = Column(Integer, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True)

    elapsed_seconds = Column(Integer, nullable=False)  # from workout start
    heart_rate_bpm = Column(Integer, nullable=True)
