# docusafe/schemas/settings.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from .base import BaseSchema


class Preferences(BaseSchema):
    dark_mode: bool
    show_intro: bool
    last_opened_at: Optional[datetime] = None


class PreferencesUpdate(BaseModel):
    dark_mode: Optional[bool] = None
    show_intro: Optional[bool] = None


class IntroPoint(BaseModel):
    title: str
    image: str
    description: str


class Intro(BaseModel):
    title: str
    points: List[IntroPoint]


class Link(BaseModel):
    label: str
    url: str


class About(BaseModel):
    name: str
    version: str
    build_number: str
    support_email: str
    legal: List[Link]
    social: List[Link]
    contact: List[Link]
