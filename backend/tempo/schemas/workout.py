from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class WorkoutRead(BaseModel):
    """Schema returned to the frontend when reading a workout."""

    id: int
    started_at: datetime
    name: Optional[str] = None
    duration_s: int
    distance_m: float
    avg_heart_rate_bpm: Optional[int] = None
    max_heart_rate_bpm: Optional[int] = None
    relative_effort: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)
