# docusafe/schemas/workflow.py
from typing import Optional

from pydantic import BaseModel

from .base import BaseSchema
from ..services.workflow import Feedback


class WorkflowState(BaseSchema):
    show_scanner: bool
    ask_document_name: bool
    document_name: str
    is_loading: bool
    pending_page_count: Optional[int] = None
    last_feedback: Optional[Feedback] = None


class DocumentNameUpdate(BaseModel):
    name: str


class SaveRequest(BaseModel):
    name: Optional[str] = None


class CaptureErrorReport(BaseModel):
    reason: str
