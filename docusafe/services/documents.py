# docusafe/services/documents.py
import asyncio
import time
from pathlib import Path
from typing import List

from sqlalchemy.orm import Session

from ..config import settings
from ..exceptions import DocumentCommitError, InvalidDocumentNameError
from ..models import Document, DocumentPage
from ..models.document import new_view_id, utcnow
from ..utils.files import write_file, get_relative_path
from ..utils.logging import service_logger
from .capture import ScanSource
from .cleanup import cleanup_service
from .encoding import encode_pages
from .listing import listing_notifier


def validate_document_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise InvalidDocumentNameError("Document name must not be empty")
    return name


class DocumentService:
    """Creates, renames and deletes documents as single transactions"""

    @staticmethod
    def page_file_path(unique_view_id: str, page_index: int) -> Path:
        return cleanup_service.document_dir(unique_view_id) / f"page_{page_index:04d}.jpg"

    async def create_document(
            self,
            db: Session,
            scan: ScanSource,
            name: str,
            quality: int | None = None
    ) -> Document:
        """Encode every page of `scan` and persist it as one new document.

        Encoding runs in a worker thread. The insert and commit happen on the
        calling thread, which owns `db`. Any failure leaves the store as it
        was and removes page files written for this attempt.
        """
        name = validate_document_name(name)
        start_time = time.perf_counter()

        service_logger.info("Creating document from scan", extra={
            "document_name": name,
            "page_count": scan.page_count
        })

        encoded = await asyncio.to_thread(encode_pages, scan, quality)

        document = Document(
            name=name,
            unique_view_id=new_view_id(),
            created_at=utcnow()
        )
        log = service_logger.bind(unique_view_id=document.unique_view_id, document_name=name)
        written: List[Path] = []

        try:
            for page_index, data in enumerate(encoded):
                file_path = write_file(self.page_file_path(document.unique_view_id, page_index), data)
                written.append(file_path)
                document.pages.append(DocumentPage(
                    page_index=page_index,
                    image_path=get_relative_path(file_path, settings.IMAGES_PATH),
                    byte_size=len(data)
                ))

            db.add(document)
            db.commit()

        except Exception as e:
            db.rollback()
            cleanup_service.delete_paths(written)
            log.error("Error saving document", extra={
                "page_count": len(encoded),
                "error": str(e)
            }, exc_info=True)
            raise DocumentCommitError(f"Failed to save document: {e}") from e

        db.refresh(document)
        listing_notifier.notify("created", document.id)

        log.info("Successfully created document", extra={
            "document_id": document.id,
            "page_count": len(document.pages),
            "execution_time_ms": round((time.perf_counter() - start_time) * 1000, 2)
        })
        return document

    def rename_document(self, db: Session, document: Document, name: str) -> Document:
        name = validate_document_name(name)
        original_name = document.name

        try:
            document.name = name
            db.commit()
        except Exception as e:
            db.rollback()
            service_logger.error("Error renaming document", extra={
                "document_id": document.id,
                "error": str(e)
            })
            raise DocumentCommitError(f"Failed to rename document: {e}") from e

        db.refresh(document)
        listing_notifier.notify("renamed", document.id)
        service_logger.info("Renamed document", extra={
            "document_id": document.id,
            "original_name": original_name,
            "new_name": name
        })
        return document

    def delete_document(self, db: Session, document: Document) -> None:
        """Delete a document with its pages, then drop their stored images"""
        document_id = document.id
        unique_view_id = document.unique_view_id
        image_paths = [page.image_path for page in document.pages]

        try:
            db.delete(document)
            db.commit()
        except Exception as e:
            db.rollback()
            service_logger.error("Error deleting document", extra={
                "document_id": document_id,
                "error": str(e)
            })
            raise DocumentCommitError(f"Failed to delete document: {e}") from e

        cleanup_service.delete_document_artifacts(document_id, unique_view_id, image_paths)
        listing_notifier.notify("deleted", document_id)


document_service = DocumentService()
