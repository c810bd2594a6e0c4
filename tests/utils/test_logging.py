# tests/utils/test_logging.py
import logging

from docusafe.utils.logging import DocusafeLogger, file_formatter


def test_bound_context_reaches_records(caplog):
    logger = DocusafeLogger("test").bind(document_id=7)

    with caplog.at_level(logging.INFO, logger="docusafe.test"):
        logger.info("Saved", extra={"page_count": 3})

    record = caplog.records[-1]
    assert record.document_id == 7
    assert record.page_count == 3
    assert record.component == "test"


def test_reserved_keys_are_renamed(caplog):
    logger = DocusafeLogger("test")

    with caplog.at_level(logging.INFO, logger="docusafe.test"):
        logger.info("Renamed", extra={"name": "Invoice", "module": "scanner"})

    record = caplog.records[-1]
    assert record.extra_name == "Invoice"
    assert record.extra_module == "scanner"
    assert record.name == "docusafe.test"


def test_formatter_appends_context(caplog):
    logger = DocusafeLogger("test").bind(unique_view_id="abc")

    with caplog.at_level(logging.INFO, logger="docusafe.test"):
        logger.warning("Page rejected", extra={"page_index": 2})

    line = file_formatter.format(caplog.records[-1])
    assert "Page rejected | " in line
    assert "unique_view_id=abc" in line
    assert "page_index=2" in line
    assert " - test - WARNING" in line
