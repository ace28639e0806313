"""
Request correlation IDs.

The API binds one ID per request; log records and persisted diagnostics
pick it up from here, including those emitted by background batch runs
started from that request.

Dependencies: contextvars
System role: Request tracing
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind correlation_id (or a fresh UUID4) to the current context and return it."""
    correlation_id = correlation_id or str(uuid.uuid4())
    _correlation_id.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    """Correlation ID bound to the current context, "" when none is."""
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set("")


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """
    Bind a correlation ID for the duration of a block.

    The previous value is restored on exit, so nested scopes and
    concurrent requests do not leak IDs into each other.
    """
    token = _correlation_id.set(correlation_id or str(uuid.uuid4()))
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)
