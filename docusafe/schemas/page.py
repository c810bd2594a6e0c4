# docusafe/schemas/page.py
from .base import BaseSchema


class PageBase(BaseSchema):
    page_index: int


class Page(PageBase):
    id: int
    document_id: int
    byte_size: int
    image_url: str
