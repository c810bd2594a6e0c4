# docusafe/services/encoding.py
import io
import time
from typing import List

from PIL import Image

from ..config import settings
from ..exceptions import ImageProcessingError
from ..utils.logging import service_logger
from .capture import ScanSource

# Modes Pillow can write as JPEG without conversion
JPEG_MODES = {"RGB", "L", "CMYK"}


def encode_page(image: Image.Image, quality: int | None = None) -> bytes:
    """Compress a single page image to JPEG bytes"""
    quality = quality if quality is not None else settings.jpeg_quality_percent
    try:
        if image.mode not in JPEG_MODES:
            image = image.convert("RGB")

        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", quality=quality)
        data = buffer.getvalue()
    except Exception as e:
        raise ImageProcessingError(f"Failed to encode page image: {e}") from e

    if not data:
        raise ImageProcessingError("Encoder produced no data")
    return data


def encode_pages(scan: ScanSource, quality: int | None = None) -> List[bytes]:
    """Encode every page of a scan in capture order.

    The first page that fails aborts the whole batch; nothing is returned
    for the pages encoded before it.
    """
    start_time = time.perf_counter()
    encoded = []

    for page_index in range(scan.page_count):
        try:
            encoded.append(encode_page(scan.image_of_page(page_index), quality))
        except ImageProcessingError as e:
            e.page_index = page_index
            service_logger.error("Page encoding failed", extra={
                "page_index": page_index,
                "page_count": scan.page_count,
                "error": str(e)
            })
            raise
        except Exception as e:
            service_logger.error("Could not read page from scan", extra={
                "page_index": page_index,
                "error": str(e)
            })
            raise ImageProcessingError(
                f"Failed to read page {page_index}: {e}", page_index=page_index
            ) from e

    service_logger.debug("Encoded scan pages", extra={
        "page_count": len(encoded),
        "total_bytes": sum(len(data) for data in encoded),
        "execution_time_ms": round((time.perf_counter() - start_time) * 1000, 2)
    })
    return encoded
