"""
Process logging setup.

One stdout handler on the root logger; every line carries the request
correlation ID ("-" outside a request, e.g. in background batch runs
started at startup).

Dependencies: logging (stdlib), funding_docs.observability.correlation
System role: Logging configuration
"""

import logging
import sys

from funding_docs.observability.correlation import get_correlation_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("urllib3", "botocore", "boto3", "sqlalchemy.engine", "httpx", "pypdf")


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation ID to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """
    Replace root handlers with a single correlated stdout handler.

    Args:
        level: Root log level name
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger.setLevel(level.upper())
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
