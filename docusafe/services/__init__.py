# docusafe/services/__init__.py
from .documents import document_service
from .listing import listing_notifier
from .workflow import scan_workflow

__all__ = ["document_service", "listing_notifier", "scan_workflow"]
