# docusafe/models/document.py
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from ..database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_view_id() -> str:
    return uuid4().hex


class Document(Base):
    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, index=True)
    unique_view_id = Column(String(32), nullable=False, unique=True, default=new_view_id)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    pages = relationship(
        "DocumentPage",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DocumentPage.page_index",
    )

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def __repr__(self):
        return f"<Document(id={self.id}, name={self.name!r}, pages={len(self.pages)})>"
