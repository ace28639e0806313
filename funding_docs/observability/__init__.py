"""
Observability: logging configuration, correlation IDs, middleware and pipeline sinks.

Dependencies: logging, fastapi, sqlalchemy
System role: Cross-cutting diagnostics
"""

from funding_docs.observability.correlation import (
    clear_correlation_id,
    correlation_scope,
    get_correlation_id,
    set_correlation_id,
)
from funding_docs.observability.logger import configure_logging
from funding_docs.observability.log_utils import log_exception_with_context, log_with_context
from funding_docs.observability.sink import (
    CompositeSink,
    LoggingSink,
    ObservabilitySink,
    SystemLogSink,
    build_sink,
)

__all__ = [
    "clear_correlation_id",
    "correlation_scope",
    "get_correlation_id",
    "set_correlation_id",
    "configure_logging",
    "log_exception_with_context",
    "log_with_context",
    "CompositeSink",
    "LoggingSink",
    "ObservabilitySink",
    "SystemLogSink",
    "build_sink",
]
