# docusafe/schemas/__init__.py
from .document import Document, DocumentUpdate, DocumentDetail, DocumentListing
from .page import Page
from .settings import Preferences, PreferencesUpdate, Intro, IntroPoint, About, Link

__all__ = [
    "Document", "DocumentUpdate", "DocumentDetail", "DocumentListing",
    "Page",
    "Preferences", "PreferencesUpdate", "Intro", "IntroPoint", "About", "Link"
]
