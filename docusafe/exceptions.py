"""Custom exceptions for the application."""


class DocumentError(Exception):
    """Base class for failures while creating or changing documents."""

    pass


class ImageProcessingError(DocumentError):
    """Raised when a scanned page cannot be encoded."""

    def __init__(self, message: str = "Failed to process scanned images", page_index: int | None = None):
        super().__init__(message)
        self.page_index = page_index


class DocumentCommitError(DocumentError):
    """Raised when the store rejects a document insert or update."""

    pass


class InvalidDocumentNameError(DocumentError):
    """Raised when a document name is empty."""

    pass


class CaptureError(Exception):
    """Raised when a capture ends with an error or delivers unreadable pages."""

    pass


class CaptureAlreadyFinishedError(CaptureError):
    """Raised when a capture session receives a second terminal event."""

    pass


class WorkflowBusyError(Exception):
    """Raised when a scan or save is requested while a save is in progress."""

    pass


class WorkflowStateError(Exception):
    """Raised when a workflow step is requested out of order."""

    pass
