# docusafe/services/listing.py
import asyncio
import time
from typing import List

from sqlalchemy.orm import Session, selectinload

from ..models.document import Document
from ..utils.logging import service_logger


def list_documents(db: Session) -> List[Document]:
    """All documents, most recently created first"""
    return (
        db.query(Document)
        .options(selectinload(Document.pages))
        .order_by(Document.created_at.desc(), Document.id.desc())
        .all()
    )


class ListingNotifier:
    """Version counter bumped after every committed change to the document set"""

    def __init__(self, poll_interval: float = 0.1):
        self.version = 0
        self.poll_interval = poll_interval

    def notify(self, reason: str, document_id: int | None = None) -> int:
        self.version += 1
        service_logger.debug("Document listing changed", extra={
            "version": self.version,
            "reason": reason,
            "document_id": document_id
        })
        return self.version

    async def wait_for_change(self, since: int, timeout: float) -> int:
        """Wait until the version moves past `since` or `timeout` seconds pass"""
        deadline = time.monotonic() + max(timeout, 0.0)
        while self.version <= since:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            await asyncio.sleep(min(self.poll_interval, remaining))
        return self.version


listing_notifier = ListingNotifier()
