# docusafe/api/documents.py
import time
from typing import List

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from sqlalchemy.orm import Session, selectinload

from ..config import settings
from ..database import get_db
from ..exceptions import CaptureError, DocumentCommitError, ImageProcessingError, InvalidDocumentNameError
from ..models.document import Document
from ..schemas.document import DocumentUpdate, Document as DocumentSchema, DocumentDetail, DocumentListing
from ..services.capture import read_scan
from ..services.documents import document_service
from ..services.listing import list_documents, listing_notifier
from ..services.preferences import touch_last_opened
from ..utils.files import read_upload_files
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/documents", tags=["documents"])


def get_document_or_404(document_id: int, db: Session) -> Document:
    document = db.query(Document) \
        .options(selectinload(Document.pages)) \
        .filter(Document.id == document_id) \
        .first()

    if not document:
        api_logger.warning("Document not found", extra={
            "document_id": document_id
        })
        raise HTTPException(status_code=404, detail="Document not found")
    return document


@router.get("", response_model=List[DocumentSchema])
async def get_documents(db: Session = Depends(get_db)):
    api_logger.info("Listing documents", extra={"operation": "list_documents"})

    try:
        start_time = time.time()
        touch_last_opened(db)
        documents = list_documents(db)

        execution_time = time.time() - start_time
        api_logger.info("Successfully listed documents", extra={
            "document_count": len(documents),
            "execution_time_ms": round(execution_time * 1000, 2)
        })
        return documents

    except Exception as e:
        api_logger.error("Error listing documents", extra={
            "error": str(e)
        })
        raise


@router.get("/watch", response_model=DocumentListing)
async def watch_documents(
        since: int = Query(0, ge=0),
        timeout: float = Query(settings.WATCH_TIMEOUT, ge=0),
        db: Session = Depends(get_db)
):
    """Return the listing once it changes past version `since`, or when `timeout` expires"""
    timeout = min(timeout, settings.WATCH_TIMEOUT)
    version = await listing_notifier.wait_for_change(since, timeout)

    # Changes were committed through other sessions
    db.expire_all()
    documents = list_documents(db)

    api_logger.debug("Served listing watch", extra={
        "since": since,
        "version": version,
        "document_count": len(documents)
    })
    return DocumentListing(
        version=version,
        documents=[DocumentSchema.model_validate(doc) for doc in documents]
    )


@router.post("", response_model=DocumentDetail, status_code=201)
async def create_document(
        name: str = Form(settings.DEFAULT_DOCUMENT_NAME),
        files: List[UploadFile] = File(...),
        db: Session = Depends(get_db)
):
    """Capture and save in one request: uploaded files become the pages, in order"""
    api_logger.info("Creating new document", extra={
        "document_name": name,
        "file_count": len(files),
        "file_names": [f.filename for f in files]
    })

    try:
        payloads, filenames = await read_upload_files(files)
        scan = read_scan(payloads, filenames)
        document = await document_service.create_document(db, scan, name)
        return document

    except InvalidDocumentNameError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CaptureError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ImageProcessingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except DocumentCommitError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{document_id}", response_model=DocumentDetail)
async def get_document(document_id: int, db: Session = Depends(get_db)):
    api_logger.info("Retrieving document details", extra={
        "document_id": document_id
    })

    document = get_document_or_404(document_id, db)

    api_logger.info("Successfully retrieved document", extra={
        "document_id": document_id,
        "page_count": document.page_count
    })
    return document


@router.put("/{document_id}", response_model=DocumentSchema)
async def update_document(document_id: int, document: DocumentUpdate, db: Session = Depends(get_db)):
    api_logger.info("Renaming document", extra={
        "document_id": document_id,
        "new_name": document.name
    })

    db_document = get_document_or_404(document_id, db)

    try:
        return document_service.rename_document(db, db_document, document.name)
    except InvalidDocumentNameError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DocumentCommitError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{document_id}")
async def delete_document(document_id: int, db: Session = Depends(get_db)):
    api_logger.info("Deleting document", extra={"document_id": document_id})

    document = get_document_or_404(document_id, db)

    try:
        document_service.delete_document(db, document)
    except DocumentCommitError as e:
        raise HTTPException(status_code=500, detail=str(e))

    api_logger.info(f"Successfully deleted document {document_id}")
    return {"success": True}
