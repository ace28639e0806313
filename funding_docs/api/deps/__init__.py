"""Dependency injection for API routes."""

from .dependencies import (
    ServiceCache,
    get_batch_processor,
    get_document_service,
    get_pipeline_settings_dependency,
    get_service_cache,
    get_upload_processor,
)

__all__ = [
    "ServiceCache",
    "get_batch_processor",
    "get_document_service",
    "get_pipeline_settings_dependency",
    "get_service_cache",
    "get_upload_processor",
]
