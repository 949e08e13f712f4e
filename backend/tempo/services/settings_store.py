from typing import Optional

from sqlalchemy.orm import Session

from tempo.models.user_settings import SETTINGS_ID, UserSettings


class SettingsSlot:
    """The single user settings record, which may not exist yet."""

    def __init__(self, db: Session):
        self.db = db

    def get(self) -> Optional[UserSettings]:
        return self.db.get(UserSettings, SETTINGS_ID)

    def get_or_create(self) -> tuple[UserSettings, bool]:
        """Return ``(settings, created)``; a new record is added but not committed."""
        row = self.get()
        if row is not None:
            return row, False
        row = UserSettings(id=SETTINGS_ID)
        self.db.add(row)
        return row, True
