"""
Structured logging helpers.

Pipeline context (document ids, stages, error text) is attached to log
records through `extra=`. Values are flattened to bounded strings and keys
that collide with LogRecord attributes are prefixed with `ctx_`, so a field
named "message" or "filename" cannot break the logging call.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}

MAX_VALUE_LENGTH = 500


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a value for a log record.

    Collections are summarised by size rather than dumped; long strings
    (extracted text, stack-like error messages) are truncated.

    Args:
        value: Value to render
        max_length: Maximum length before truncating

    Returns:
        str: Bounded representation
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple, set)):
        rendered = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        rendered = f"dict({len(value)} keys)"
    else:
        try:
            rendered = value if isinstance(value, str) else str(value)
        except Exception as e:
            return f"<unable to log: {type(e).__name__}>"

    if len(rendered) > max_length:
        return rendered[:max_length] + f"... (truncated, {len(rendered)} total)"
    return rendered


def _safe_context(context: dict[str, Any]) -> dict[str, str]:
    return {
        (f"ctx_{key}" if key in _RESERVED_ATTRS else key): safe_log_value(value)
        for key, value in context.items()
    }


def log_with_context(logger: logging.Logger, level: int, message: str, /, **context: Any) -> None:
    """
    Log message at level with context attached as record attributes.

    The leading parameters are positional-only, so context may itself carry
    keys such as "message" or "level".
    """
    logger.log(level, message, extra=_safe_context(context))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    /,
    **context: Any,
) -> None:
    """
    Log an exception at ERROR with its traceback and context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception to report (may already be out of its except block)
        **context: Additional record attributes
    """
    extra = _safe_context(context)
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extra)
