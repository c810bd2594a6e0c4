# docusafe/services/workflow.py
import enum
from typing import Optional

from sqlalchemy.orm import Session

from ..config import settings
from ..exceptions import WorkflowBusyError, WorkflowStateError
from ..models import Document
from ..utils.logging import service_logger
from .capture import CaptureSession, ScanSource
from .documents import DocumentService, document_service, validate_document_name


class Feedback(str, enum.Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    LIGHT_IMPACT = "light_impact"
    MEDIUM_IMPACT = "medium_impact"
    HEAVY_IMPACT = "heavy_impact"


class ScanWorkflow:
    """Transient state of the scan -> name -> save flow on the home screen.

    `is_loading` is the only guard against overlapping saves; there is no lock.
    """

    def __init__(self, service: DocumentService = document_service, default_name: str | None = None):
        self.service = service
        self.default_name = default_name or settings.DEFAULT_DOCUMENT_NAME
        self.show_scanner = False
        self.scan: Optional[ScanSource] = None
        self.document_name = self.default_name
        self.ask_document_name = False
        self.is_loading = False
        self.last_feedback: Optional[Feedback] = None
        self.capture: Optional[CaptureSession] = None

    @property
    def pending_page_count(self) -> Optional[int]:
        return self.scan.page_count if self.scan is not None else None

    def trigger(self, feedback: Feedback) -> None:
        self.last_feedback = feedback
        service_logger.debug("Feedback triggered", extra={"feedback": feedback.value})

    def begin_scan(self) -> CaptureSession:
        if self.is_loading:
            raise WorkflowBusyError("A document is still being saved")
        if self.scan is not None or self.ask_document_name:
            raise WorkflowStateError("A scanned document is still waiting to be named")
        if self.capture is not None and not self.capture.finished:
            self.capture.cancel()

        self.trigger(Feedback.MEDIUM_IMPACT)
        self.show_scanner = True
        self.capture = CaptureSession(
            on_success=self._capture_succeeded,
            on_cancel=self._capture_cancelled,
            on_error=self._capture_failed,
        )
        return self.capture

    def active_capture(self) -> CaptureSession:
        if self.capture is None or self.capture.finished:
            raise WorkflowStateError("Scanner is not open")
        return self.capture

    def _capture_succeeded(self, scan: ScanSource) -> None:
        self.scan = scan
        self.show_scanner = False
        self.ask_document_name = True
        service_logger.info("Scan captured", extra={"page_count": scan.page_count})

    def _capture_cancelled(self) -> None:
        self.show_scanner = False

    def _capture_failed(self, reason: str) -> None:
        self.show_scanner = False
        service_logger.error(f"Scan failed: {reason}")

    def set_name(self, name: str) -> None:
        self.document_name = name

    def dismiss_name_prompt(self) -> None:
        self.document_name = self.default_name
        self.ask_document_name = False
        self.scan = None

    async def save(self, db: Session, name: str | None = None) -> Document:
        if self.is_loading:
            raise WorkflowBusyError("A document is already being saved")
        if self.scan is None:
            raise WorkflowStateError("There is no scanned document to save")
        if self.show_scanner:
            raise WorkflowStateError("Scanner is still open")
        if name is not None:
            self.document_name = name
        validate_document_name(self.document_name)

        scan = self.scan
        self.is_loading = True
        try:
            document = await self.service.create_document(db, scan, self.document_name)
        except Exception as e:
            self.is_loading = False
            self.trigger(Feedback.ERROR)
            service_logger.error(f"Error saving document: {e}")
            raise

        if self.scan is scan:
            self.reset()
        else:
            self.is_loading = False
        self.trigger(Feedback.SUCCESS)
        return document

    def reset(self) -> None:
        self.scan = None
        self.document_name = self.default_name
        self.ask_document_name = False
        self.is_loading = False


scan_workflow = ScanWorkflow()


def get_workflow() -> ScanWorkflow:
    return scan_workflow
