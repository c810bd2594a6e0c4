# docusafe/api/workflow.py
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.orm import Session

from ..database import get_db
from ..exceptions import (
    CaptureError,
    DocumentCommitError,
    ImageProcessingError,
    InvalidDocumentNameError,
    WorkflowBusyError,
    WorkflowStateError,
)
from ..schemas.document import DocumentDetail
from ..schemas.workflow import WorkflowState, DocumentNameUpdate, SaveRequest, CaptureErrorReport
from ..services.capture import read_scan
from ..services.workflow import ScanWorkflow, get_workflow
from ..utils.files import read_upload_files
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/workflow", tags=["workflow"])


@router.get("", response_model=WorkflowState)
async def get_state(workflow: ScanWorkflow = Depends(get_workflow)):
    return workflow


@router.post("/scan", response_model=WorkflowState)
async def begin_scan(workflow: ScanWorkflow = Depends(get_workflow)):
    try:
        workflow.begin_scan()
    except (WorkflowBusyError, WorkflowStateError) as e:
        raise HTTPException(status_code=409, detail=str(e))

    api_logger.info("Scanner opened")
    return workflow


@router.post("/capture", response_model=WorkflowState)
async def capture_pages(
        files: List[UploadFile] = File(...),
        workflow: ScanWorkflow = Depends(get_workflow)
):
    """Deliver the pages of a finished capture to the open scanner"""
    try:
        capture = workflow.active_capture()
    except WorkflowStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    payloads, filenames = await read_upload_files(files)
    try:
        scan = read_scan(payloads, filenames)
    except CaptureError as e:
        capture.fail(str(e))
        raise HTTPException(status_code=400, detail=str(e))

    capture.succeed(scan)
    api_logger.info("Capture delivered", extra={"page_count": scan.page_count})
    return workflow


@router.post("/capture/cancel", response_model=WorkflowState)
async def cancel_capture(workflow: ScanWorkflow = Depends(get_workflow)):
    try:
        workflow.active_capture().cancel()
    except WorkflowStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    api_logger.info("Capture cancelled")
    return workflow


@router.post("/capture/error", response_model=WorkflowState)
async def report_capture_error(report: CaptureErrorReport, workflow: ScanWorkflow = Depends(get_workflow)):
    try:
        workflow.active_capture().fail(report.reason)
    except WorkflowStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return workflow


@router.put("/name", response_model=WorkflowState)
async def set_document_name(update: DocumentNameUpdate, workflow: ScanWorkflow = Depends(get_workflow)):
    workflow.set_name(update.name)
    return workflow


@router.post("/name/dismiss", response_model=WorkflowState)
async def dismiss_name_prompt(workflow: ScanWorkflow = Depends(get_workflow)):
    workflow.dismiss_name_prompt()
    return workflow


@router.post("/save", response_model=DocumentDetail, status_code=201)
async def save_document(
        request: SaveRequest | None = None,
        workflow: ScanWorkflow = Depends(get_workflow),
        db: Session = Depends(get_db)
):
    api_logger.info("Saving scanned document", extra={
        "document_name": request.name if request and request.name is not None else workflow.document_name,
        "page_count": workflow.pending_page_count
    })

    try:
        return await workflow.save(db, request.name if request else None)
    except (WorkflowBusyError, WorkflowStateError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    except InvalidDocumentNameError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ImageProcessingError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except DocumentCommitError as e:
        raise HTTPException(status_code=500, detail=str(e))
