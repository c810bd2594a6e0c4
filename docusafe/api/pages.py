# docusafe/api/pages.py
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.page import DocumentPage
from ..schemas.page import Page as PageSchema
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/documents/{document_id}/pages", tags=["pages"])


def get_page_or_404(document_id: int, page_index: int, db: Session) -> DocumentPage:
    page = db.query(DocumentPage) \
        .filter(DocumentPage.document_id == document_id, DocumentPage.page_index == page_index) \
        .first()

    if not page:
        api_logger.warning(
            f"Page {page_index} of document {document_id} not found",
            extra={"document_id": document_id, "page_index": page_index}
        )
        raise HTTPException(status_code=404, detail="Page not found")
    return page


@router.get("/{page_index}", response_model=PageSchema)
async def get_page(document_id: int, page_index: int, db: Session = Depends(get_db)):
    api_logger.debug(f"Fetching page {page_index} of document {document_id}")
    return get_page_or_404(document_id, page_index, db)


@router.get("/{page_index}/image")
async def get_page_image(document_id: int, page_index: int, db: Session = Depends(get_db)):
    page = get_page_or_404(document_id, page_index, db)

    try:
        data = page.page_data
    except FileNotFoundError:
        api_logger.error(
            "Stored page image is missing",
            extra={"page_id": page.id, "image_path": page.image_path}
        )
        raise HTTPException(status_code=404, detail="Page image not found")

    return Response(content=data, media_type="image/jpeg")
