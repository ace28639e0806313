"""Registry access for the document pipeline."""

from funding_docs.core.document_processing.database.document_registry import (
    DocumentRegistry,
    truncate_error,
)

__all__ = ["DocumentRegistry", "truncate_error"]
