# tests/services/test_workflow_service.py
import pytest

from conftest import FailingScan
from docusafe.exceptions import CaptureAlreadyFinishedError, ImageProcessingError, WorkflowBusyError, WorkflowStateError
from docusafe.models import Document
from docusafe.services.capture import CaptureOutcome, ImageScan
from docusafe.services.workflow import Feedback


def test_begin_scan_opens_scanner(workflow):
    capture = workflow.begin_scan()

    assert workflow.show_scanner is True
    assert workflow.last_feedback == Feedback.MEDIUM_IMPACT
    assert workflow.active_capture() is capture


def test_active_capture_requires_open_scanner(workflow):
    with pytest.raises(WorkflowStateError):
        workflow.active_capture()


@pytest.mark.asyncio
async def test_save_resets_state(workflow, db_session, page_images):
    workflow.begin_scan().succeed(ImageScan(page_images))
    workflow.set_name("Invoice")

    document = await workflow.save(db_session)

    assert document.page_count == 3
    assert workflow.scan is None
    assert workflow.document_name == "New Document"
    assert workflow.ask_document_name is False
    assert workflow.is_loading is False
    assert workflow.last_feedback == Feedback.SUCCESS


@pytest.mark.asyncio
async def test_failed_save_keeps_scan(workflow, db_session):
    scan = FailingScan(page_count=2, fail_at=0)
    workflow.begin_scan().succeed(scan)

    with pytest.raises(ImageProcessingError):
        await workflow.save(db_session, "Broken")

    assert workflow.is_loading is False
    assert workflow.scan is scan
    assert workflow.last_feedback == Feedback.ERROR
    assert db_session.query(Document).count() == 0


@pytest.mark.asyncio
async def test_save_while_busy(workflow, db_session, page_images):
    workflow.begin_scan().succeed(ImageScan(page_images))
    workflow.is_loading = True

    with pytest.raises(WorkflowBusyError):
        await workflow.save(db_session)
    with pytest.raises(WorkflowBusyError):
        workflow.begin_scan()


def test_cancel_is_a_noop(workflow, page_images):
    before = (workflow.scan, workflow.document_name, workflow.ask_document_name, workflow.is_loading)

    workflow.begin_scan().cancel()

    assert workflow.show_scanner is False
    assert (workflow.scan, workflow.document_name, workflow.ask_document_name, workflow.is_loading) == before


def test_scan_refused_while_scan_awaits_name(workflow, page_images):
    pending = ImageScan(page_images[:1])
    workflow.begin_scan().succeed(pending)

    with pytest.raises(WorkflowStateError):
        workflow.begin_scan()

    assert workflow.scan is pending
    assert workflow.ask_document_name is True
    assert workflow.show_scanner is False


@pytest.mark.asyncio
async def test_next_scan_after_save_is_kept(workflow, db_session, page_images):
    workflow.begin_scan().succeed(ImageScan(page_images[:1]))
    await workflow.save(db_session, "First")

    second = ImageScan(page_images)
    workflow.begin_scan().succeed(second)

    assert workflow.scan is second
    assert workflow.pending_page_count == 3
    assert db_session.query(Document).count() == 1


def test_reopening_scanner_closes_previous_capture(workflow, page_images):
    first = workflow.begin_scan()
    second = workflow.begin_scan()

    assert first.result.outcome == CaptureOutcome.CANCEL
    with pytest.raises(CaptureAlreadyFinishedError):
        first.succeed(ImageScan(page_images))
    assert workflow.active_capture() is second
    assert workflow.scan is None


@pytest.mark.asyncio
async def test_save_refused_while_scanner_open(workflow, db_session, page_images):
    workflow.begin_scan().succeed(ImageScan(page_images))
    workflow.show_scanner = True

    with pytest.raises(WorkflowStateError):
        await workflow.save(db_session, "Invoice")

    assert workflow.is_loading is False
    assert db_session.query(Document).count() == 0
