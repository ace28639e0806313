"""
Pipeline diagnostic sinks.

The ingestor and batch processor report diagnostics through an injected
sink rather than writing logs directly, so callers choose whether records
only reach the process log or are also persisted to system_logs.

Dependencies: logging, sqlalchemy, funding_docs.boundary.db
System role: Observability side-channel for the document pipeline
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Iterable, Mapping
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from funding_docs.boundary.db.CRUD.system_log_crud import system_log_crud
from funding_docs.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_jsonable(v) for v in value]
    return str(value)


class ObservabilitySink(ABC):
    """Destination for structured pipeline diagnostics."""

    @abstractmethod
    async def record(
        self,
        level: str,
        message: str,
        fields: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Record one diagnostic.

        Args:
            level: One of debug, info, warning, error
            message: Human-readable message
            fields: Structured context (document id, stage, error, ...)
        """


class LoggingSink(ObservabilitySink):
    """Sink writing to a standard library logger."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    async def record(self, level, message, fields=None) -> None:
        log_with_context(self._logger, LEVELS.get(level, logging.INFO), message, **dict(fields or {}))


class SystemLogSink(ObservabilitySink):
    """
    Sink persisting records to the system_logs table.

    Each record is written in its own session so a diagnostic never joins
    (or breaks) the pipeline's transaction. Write failures are logged and
    dropped.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        component: str = "pdf-pipeline",
    ) -> None:
        self._session_factory = session_factory
        self._component = component

    async def record(self, level, message, fields=None) -> None:
        try:
            async with self._session_factory() as session:
                await system_log_crud.create(
                    session,
                    level=level,
                    component=self._component,
                    message=message,
                    fields=_jsonable(dict(fields or {})),
                )
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.warning(
                f"{__name__}:record - Failed to persist system log",
                extra={"error_type": type(e).__name__, "error_msg": str(e)},
            )


class CompositeSink(ObservabilitySink):
    """Fan a record out to several sinks in order."""

    def __init__(self, sinks: Iterable[ObservabilitySink]) -> None:
        self._sinks = list(sinks)

    async def record(self, level, message, fields=None) -> None:
        for sink in self._sinks:
            await sink.record(level, message, fields)


def build_sink(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    persist: bool = False,
    component: str = "pdf-pipeline",
) -> ObservabilitySink:
    """
    Build the sink configured for this process.

    Args:
        session_factory: Session factory for persisted records
        persist: Also write records to system_logs
        component: Component name stored with persisted records

    Returns:
        ObservabilitySink: LoggingSink, or a composite that also persists
    """
    if persist and session_factory is not None:
        return CompositeSink([LoggingSink(), SystemLogSink(session_factory, component)])
    return LoggingSink()


async def emit(
    sink: ObservabilitySink,
    level: str,
    message: str,
    fields: Mapping[str, Any] | None = None,
) -> None:
    """
    Send one record to sink, logging and dropping any failure.

    Pipeline code calls this instead of sink.record so a broken sink cannot
    change a document's outcome or stop a batch.
    """
    try:
        await sink.record(level, message, fields)
    except Exception as e:
        log_exception_with_context(
            logger,
            f"{__name__}:emit - Sink failed to record diagnostic",
            e,
            sink=type(sink).__name__,
            diagnostic=message,
        )
