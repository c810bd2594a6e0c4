# docusafe/services/capture.py
import enum
import io
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Sequence

from PIL import Image, UnidentifiedImageError

from ..exceptions import CaptureError, CaptureAlreadyFinishedError
from ..utils.logging import service_logger


class ScanSource(Protocol):
    """Ordered pages delivered by a finished capture"""

    @property
    def page_count(self) -> int: ...

    def image_of_page(self, index: int) -> Image.Image: ...


class ImageScan:
    """A scan backed by already-decoded page images"""

    def __init__(self, images: Sequence[Image.Image]):
        self._images = list(images)

    @property
    def page_count(self) -> int:
        return len(self._images)

    def image_of_page(self, index: int) -> Image.Image:
        if index < 0 or index >= len(self._images):
            raise IndexError(f"Page {index} out of range for scan of {len(self._images)} pages")
        return self._images[index]


class UploadedScan(ImageScan):
    """A scan built from raw image payloads sent by a capture client"""

    @classmethod
    def from_payloads(cls, payloads: Sequence[bytes], filenames: Sequence[str] | None = None) -> "UploadedScan":
        images = []
        for idx, payload in enumerate(payloads):
            label = filenames[idx] if filenames else f"page {idx}"
            try:
                image = Image.open(io.BytesIO(payload))
                image.load()
            except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
                service_logger.warning("Rejected unreadable page", extra={
                    "page_index": idx,
                    "file_name": label,
                    "error": str(e)
                })
                raise CaptureError(f"Could not read image {label}") from e
            images.append(image)
        return cls(images)


class CaptureOutcome(str, enum.Enum):
    SUCCESS = "success"
    CANCEL = "cancel"
    ERROR = "error"


@dataclass
class CaptureResult:
    outcome: CaptureOutcome
    scan: Optional[ScanSource] = None
    reason: Optional[str] = None


class CaptureSession:
    """Single capture invocation.

    Exactly one of succeed, cancel or fail may be reported; the matching
    callback runs once and any later report raises CaptureAlreadyFinishedError.
    """

    def __init__(
            self,
            on_success: Callable[[ScanSource], None],
            on_cancel: Callable[[], None],
            on_error: Callable[[str], None],
    ):
        self.on_success = on_success
        self.on_cancel = on_cancel
        self.on_error = on_error
        self.result: Optional[CaptureResult] = None

    @property
    def finished(self) -> bool:
        return self.result is not None

    def _finish(self, result: CaptureResult) -> None:
        if self.result is not None:
            raise CaptureAlreadyFinishedError(
                f"Capture already finished with {self.result.outcome.value}"
            )
        self.result = result

    def succeed(self, scan: ScanSource) -> CaptureResult:
        if scan.page_count == 0:
            return self.fail("Scan contains no pages")
        self._finish(CaptureResult(CaptureOutcome.SUCCESS, scan=scan))
        self.on_success(scan)
        return self.result

    def cancel(self) -> CaptureResult:
        self._finish(CaptureResult(CaptureOutcome.CANCEL))
        self.on_cancel()
        return self.result

    def fail(self, reason: str) -> CaptureResult:
        self._finish(CaptureResult(CaptureOutcome.ERROR, reason=reason))
        self.on_error(reason)
        return self.result


def read_scan(payloads: List[bytes], filenames: List[str] | None = None) -> UploadedScan:
    """Decode uploaded pages, rejecting an empty capture"""
    if not payloads:
        raise CaptureError("Scan contains no pages")
    return UploadedScan.from_payloads(payloads, filenames)
