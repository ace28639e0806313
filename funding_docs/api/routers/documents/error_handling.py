"""
Document error handling utilities.

Provides a decorator for consistent error handling across document API
endpoints: domain exceptions are logged and turned into JSON error bodies
of the form {success: false, error, details, requestId, timestamp}.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import status
from fastapi.responses import JSONResponse

from funding_docs.core.exceptions import (
    DocumentNotFoundError,
    FundingDocsException,
    PayloadTooLargeError,
    PersistenceError,
    StorageError,
    ValidationError,
)
from funding_docs.models.common import ErrorResponse
from funding_docs.observability.correlation import get_correlation_id

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def error_response(status_code: int, error: str, details: dict | None = None) -> JSONResponse:
    """Build a JSON error response with the standard error body."""
    body = ErrorResponse(
        error=error,
        details=details or None,
        request_id=get_correlation_id() or None,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True),
    )


def handle_document_errors(func: F) -> F:
    """
    Decorator to handle document-related errors and transform them into JSON error responses.

    This centralizes:
    - Logging of errors with context
    - Mapping domain exceptions to HTTP status codes
    - Uniform error body format
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except PayloadTooLargeError as e:
            logger.warning("Upload too large", extra={"error": e.message, **e.details})
            return error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, e.message, e.details)

        except ValidationError as e:
            logger.warning("Invalid document request", extra={"error": e.message})
            return error_response(status.HTTP_400_BAD_REQUEST, e.message, e.details)

        except DocumentNotFoundError as e:
            logger.warning("Document not found", extra={"document_id": e.document_id})
            return error_response(status.HTTP_404_NOT_FOUND, e.message, e.details)

        except StorageError as e:
            logger.error("Content store failure", extra={"error": e.message})
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Failed to store the uploaded file",
                {"reason": e.message, **e.details},
            )

        except PersistenceError as e:
            logger.error("Registry failure", extra={"error": e.message})
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Failed to save document information",
                {"reason": e.message, **e.details},
            )

        except FundingDocsException as e:
            logger.error("Document operation failed", extra={"error": e.message})
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, e.message, e.details)

        except Exception as e:
            logger.exception(
                "Unexpected failure in document operation",
                extra={"error": str(e)},
            )
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "An internal error occurred during document operation",
                {"reason": str(e)},
            )

    return wrapper  # type: ignore
