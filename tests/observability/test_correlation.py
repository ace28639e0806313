"""
Tests for correlation IDs and request middleware.

Dependencies: pytest, fastapi.testclient, funding_docs.observability
System role: Request tracing validation
"""

import logging

from fastapi.testclient import TestClient

from funding_docs.main import create_app
from funding_docs.observability.correlation import (
    clear_correlation_id,
    correlation_scope,
    get_correlation_id,
    set_correlation_id,
)
from funding_docs.observability.log_utils import log_exception_with_context, safe_log_value
from funding_docs.observability.logger import CorrelationIdFilter


def test_set_and_clear_correlation_id() -> None:
    assert set_correlation_id("req-1") == "req-1"
    assert get_correlation_id() == "req-1"

    clear_correlation_id()

    assert get_correlation_id() == ""


def test_generated_correlation_id() -> None:
    generated = set_correlation_id()
    try:
        assert generated
        assert get_correlation_id() == generated
    finally:
        clear_correlation_id()


def test_filter_adds_correlation_id_to_records() -> None:
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    set_correlation_id("req-2")
    try:
        assert CorrelationIdFilter().filter(record) is True
    finally:
        clear_correlation_id()

    assert record.correlation_id == "req-2"


def test_safe_log_value_summarises_collections() -> None:
    assert safe_log_value(None) == "None"
    assert safe_log_value([1, 2, 3]) == "list(3 items)"
    assert safe_log_value({"a": 1}) == "dict(1 keys)"
    assert safe_log_value("x" * 600).endswith("(truncated, 600 total)")


def test_log_exception_with_context(caplog) -> None:
    log = logging.getLogger("tests.correlation")

    with caplog.at_level(logging.ERROR, logger="tests.correlation"):
        log_exception_with_context(log, "stage crashed", ValueError("bad"), stage="indexing")

    record = caplog.records[-1]
    assert record.error_type == "ValueError"
    assert record.error_msg == "bad"
    assert record.stage == "indexing"
    assert record.exc_info is not None


def test_middleware_echoes_correlation_header() -> None:
    client = TestClient(create_app())

    response = client.get("/api/v1/health", headers={"X-Correlation-ID": "req-123"})

    assert response.status_code == 200
    assert response.headers["X-Correlation-ID"] == "req-123"


def test_middleware_generates_correlation_header() -> None:
    client = TestClient(create_app())

    response = client.get("/api/v1/health")

    assert response.headers["X-Correlation-ID"]


def test_correlation_scope_restores_previous_id() -> None:
    set_correlation_id("outer")
    try:
        with correlation_scope("inner") as bound:
            assert bound == "inner"
            assert get_correlation_id() == "inner"
        assert get_correlation_id() == "outer"
    finally:
        clear_correlation_id()
