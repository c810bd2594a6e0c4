# docusafe/models/page.py
from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from ..config import settings
from ..database import Base


class DocumentPage(Base):
    __tablename__ = "document_pages"
    __table_args__ = (
        UniqueConstraint("document_id", "page_index", name="uq_document_page_index"),
    )

    id = Column(Integer, primary_key=True, index=True)
    document_id = Column(Integer, ForeignKey("documents.id", ondelete="CASCADE"), nullable=False, index=True)
    page_index = Column(Integer, nullable=False)
    # Encoded JPEG lives on disk under IMAGES_PATH, only its location is stored here
    image_path = Column(String(255), nullable=False)
    byte_size = Column(Integer, nullable=False, default=0)

    document = relationship("Document", back_populates="pages")

    @property
    def absolute_image_path(self):
        return settings.IMAGES_PATH / self.image_path

    @property
    def image_url(self) -> str:
        return f"/api/documents/{self.document_id}/pages/{self.page_index}/image"

    @property
    def page_data(self) -> bytes:
        """Raw encoded image bytes of this page"""
        return self.absolute_image_path.read_bytes()

    def __repr__(self):
        return f"<DocumentPage(id={self.id}, document_id={self.document_id}, page_index={self.page_index})>"
