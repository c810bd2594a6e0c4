# docusafe/services/preferences.py
from sqlalchemy.orm import Session

from ..models import AppPreferences
from ..models.document import utcnow

PREFERENCES_ID = 1


def get_preferences(db: Session) -> AppPreferences:
    """Fetch the preferences row, creating it with defaults on first use"""
    preferences = db.get(AppPreferences, PREFERENCES_ID)
    if preferences is None:
        preferences = AppPreferences(id=PREFERENCES_ID, dark_mode=False, show_intro=True)
        db.add(preferences)
        db.commit()
        db.refresh(preferences)
    return preferences


def touch_last_opened(db: Session) -> AppPreferences:
    preferences = get_preferences(db)
    preferences.last_opened_at = utcnow()
    db.commit()
    db.refresh(preferences)
    return preferences
