# docusafe/schemas/document.py
from typing import List

from pydantic import field_validator

from .base import BaseSchema, TimestampMixin
from .page import Page


class DocumentBase(BaseSchema):
    name: str

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Document name must not be empty")
        return value


class DocumentUpdate(DocumentBase):
    pass


class Document(DocumentBase, TimestampMixin):
    id: int
    unique_view_id: str
    page_count: int = 0


class DocumentDetail(Document):
    pages: List[Page] = []


class DocumentListing(BaseSchema):
    version: int
    documents: List[Document] = []
