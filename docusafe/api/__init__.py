# docusafe/api/__init__.py
from .documents import router as documents_router
from .pages import router as pages_router
from .workflow import router as workflow_router
from .settings import router as settings_router

__all__ = ["documents_router", "pages_router", "workflow_router", "settings_router"]
