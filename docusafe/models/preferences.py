# docusafe/models/preferences.py
from sqlalchemy import Column, Integer, Boolean, DateTime

from ..database import Base


class AppPreferences(Base):
    """Single-row table holding the user's app preferences"""
    __tablename__ = "app_preferences"

    id = Column(Integer, primary_key=True)
    dark_mode = Column(Boolean, nullable=False, default=False)
    show_intro = Column(Boolean, nullable=False, default=True)
    last_opened_at = Column(DateTime(timezone=True), nullable=True)
