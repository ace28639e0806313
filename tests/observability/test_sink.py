"""
Tests for pipeline observability sinks.

Dependencies: pytest, sqlalchemy, funding_docs.observability
System role: Diagnostic side-channel validation
"""

import logging
import uuid
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from funding_docs.boundary.db.models.system_log_model import SystemLogModel
from funding_docs.core.document_processing.state_machine import DocumentStatus
from funding_docs.observability.sink import (
    CompositeSink,
    LoggingSink,
    SystemLogSink,
    build_sink,
    emit,
)


class TestLoggingSink:
    async def test_writes_level_and_fields(self, caplog) -> None:
        sink = LoggingSink(logging.getLogger("tests.sink"))

        with caplog.at_level(logging.INFO, logger="tests.sink"):
            await sink.record("warning", "Extraction failed", {"document_id": "abc", "message": "x"})

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "Extraction failed"
        assert record.document_id == "abc"
        assert record.ctx_message == "x"

    async def test_fields_named_like_helper_arguments(self, caplog) -> None:
        sink = LoggingSink(logging.getLogger("tests.sink"))

        with caplog.at_level(logging.INFO, logger="tests.sink"):
            await sink.record("info", "Document registered", {"level": "high", "logger": "ocr"})

        record = caplog.records[-1]
        assert record.levelno == logging.INFO
        assert record.level == "high"
        assert record.logger == "ocr"


class TestSystemLogSink:
    async def test_persists_record(self, session_factory) -> None:
        sink = SystemLogSink(session_factory, component="pdf-pipeline")
        document_id = uuid.uuid4()

        await sink.record(
            "error",
            "Indexing failed",
            {"document_id": document_id, "status": DocumentStatus.INDEXING_FAILED, "chunks": (1, 2)},
        )

        async with session_factory() as session:
            rows = (await session.execute(select(SystemLogModel))).scalars().all()
        assert len(rows) == 1
        assert rows[0].level == "error"
        assert rows[0].component == "pdf-pipeline"
        assert rows[0].message == "Indexing failed"
        assert rows[0].fields == {
            "document_id": str(document_id),
            "status": "indexing_failed",
            "chunks": [1, 2],
        }

    async def test_database_failure_is_logged_not_raised(self, caplog) -> None:
        session = MagicMock()
        session.__aenter__ = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("db down")))
        session.__aexit__ = AsyncMock(return_value=False)
        sink = SystemLogSink(lambda: session)

        with caplog.at_level(logging.WARNING):
            await sink.record("info", "Batch processing started")

        assert any("Failed to persist system log" in r.getMessage() for r in caplog.records)

    async def test_connection_error_is_logged_not_raised(self, caplog) -> None:
        session = MagicMock()
        session.__aenter__ = AsyncMock(side_effect=ConnectionRefusedError("db down"))
        session.__aexit__ = AsyncMock(return_value=False)
        sink = SystemLogSink(lambda: session)

        with caplog.at_level(logging.WARNING):
            await sink.record("info", "Batch processing started")

        assert any("Failed to persist system log" in r.getMessage() for r in caplog.records)


class TestCompositeAndFactory:
    async def test_composite_fans_out(self) -> None:
        first, second = AsyncMock(), AsyncMock()

        await CompositeSink([first, second]).record("info", "msg", {"a": 1})

        first.record.assert_awaited_once_with("info", "msg", {"a": 1})
        second.record.assert_awaited_once_with("info", "msg", {"a": 1})

    def test_build_sink_without_persistence(self, session_factory) -> None:
        assert isinstance(build_sink(session_factory, persist=False), LoggingSink)
        assert isinstance(build_sink(None, persist=True), LoggingSink)

    def test_build_sink_with_persistence(self, session_factory) -> None:
        assert isinstance(build_sink(session_factory, persist=True), CompositeSink)


class TestEmit:
    async def test_forwards_to_sink(self) -> None:
        sink = AsyncMock()

        await emit(sink, "info", "Extraction started", {"document_id": "abc"})

        sink.record.assert_awaited_once_with("info", "Extraction started", {"document_id": "abc"})

    async def test_sink_failure_is_logged_not_raised(self, caplog) -> None:
        sink = AsyncMock()
        sink.record.side_effect = RuntimeError("sink down")

        with caplog.at_level(logging.ERROR):
            await emit(sink, "error", "Extraction failed", {"document_id": "abc"})

        record = next(r for r in caplog.records if "Sink failed to record diagnostic" in r.getMessage())
        assert record.diagnostic == "Extraction failed"
        assert record.error_msg == "sink down"
