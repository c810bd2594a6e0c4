# docusafe/models/__init__.py
from ..database import Base
from .document import Document
from .page import DocumentPage
from .preferences import AppPreferences

__all__ = [
    "Base",
    "Document",
    "DocumentPage",
    "AppPreferences"
]
