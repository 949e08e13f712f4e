from sqlalchemy import CheckConstraint, Column, Integer, String, DateTime
from sqlalchemy.sql import func
from tempo.db import Base

# The settings table holds at most one row, always under this key
SETTINGS_ID = 1


class UserSettings(Base):
    __tablename__ = "user_settings"
    __table_args__ = (
        CheckConstraint(f"id = {SETTINGS_ID}", name="ck_user_settings_singleton"),
    )

    id = Column(Integer, primary_key=True, default=SETTINGS_ID)

    # AgeBased, Karvonen or Custom (see CalculationMethod)
    calculation_method = Column(
        String(20),
        nullable=False,
        server_default="AgeBased",
    )

    # Inputs are stored as given, even when the method did not use them
    age = Column(Integer, nullable=True)
    resting_heart_rate_bpm = Column(Integer, nullable=True)
    max_heart_rate_bpm = Column(Integer, nullable=True)

    # Zone boundaries (5 zones)
    zone1_min_bpm = Column(Integer, nullable=False, default=0)
    zone1_max_bpm = Column(Integer, nullable=False, default=0)
    zone2_min_bpm = Column(Integer, nullable=False, default=0)
    zone2_max_bpm = Column(Integer, nullable=False, default=0)
    zone3_min_bpm = Column(Integer, nullable=False, default=0)
    zone3_max_bpm = Column(Integer, nullable=False, default=0)
    zone4_min_bpm = Column(Integer, nullable=False, default=0)
    zone4_max_bpm = Column(Integer, nullable=False, default=0)
    zone5_min_bpm = Column(Integer, nullable=False, default=0)
    zone5_max_bpm = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
