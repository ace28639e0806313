"""
Document processing pipeline.

Ingestion (dedup, store, register), text extraction, sentence-aware
chunking, chunk embedding and the batch processor that drives documents
through the status state machine.

Import the ingestor and batch processor from their submodules
(`.ingestor`, `.entrypoint`).

Dependencies: pydantic, sqlalchemy, langchain_community, langchain_google_genai
System role: Document ingestion pipeline
"""

from .configs import (
    DocumentPipelineSettings,
    get_pipeline_settings,
)
from .state_machine import (
    DocumentStatus,
    PipelineStage,
    StageEvent,
)

__all__ = [
    "DocumentPipelineSettings",
    "get_pipeline_settings",
    "DocumentStatus",
    "PipelineStage",
    "StageEvent",
]
