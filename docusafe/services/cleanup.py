# docusafe/services/cleanup.py
from pathlib import Path
from typing import Iterable

from ..config import settings
from ..utils.files import delete_file, remove_empty_dir
from ..utils.logging import service_logger


class CleanupService:
    """Service to remove out-of-line page payloads from storage"""

    @staticmethod
    def document_dir(unique_view_id: str) -> Path:
        return settings.IMAGES_PATH / unique_view_id

    @staticmethod
    def delete_paths(paths: Iterable[Path]) -> None:
        """Delete payload files written for an attempt that was not committed"""
        parents = set()
        for path in paths:
            delete_file(path)
            parents.add(path.parent)
        for parent in parents:
            remove_empty_dir(parent)

    @staticmethod
    def delete_document_artifacts(document_id: int, unique_view_id: str, image_paths: Iterable[str]) -> None:
        """Delete all page images of a document and its storage directory"""
        try:
            for image_path in image_paths:
                if delete_file(settings.IMAGES_PATH / image_path):
                    service_logger.info(f"Deleted page image: {image_path}")
            remove_empty_dir(CleanupService.document_dir(unique_view_id))
            service_logger.info(f"Deleted all artifacts for document {document_id}")

        except Exception as e:
            service_logger.error(f"Error deleting document artifacts: {str(e)}", extra={
                "document_id": document_id
            })
            raise


cleanup_service = CleanupService()
