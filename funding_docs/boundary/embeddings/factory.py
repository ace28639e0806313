"""
Embedder factory.

Dependencies: funding_docs.boundary.embeddings, funding_docs.core.document_processing.configs
System role: Embedder instantiation from pipeline settings
"""

import logging

from funding_docs.boundary.embeddings.base import Embedder
from funding_docs.boundary.embeddings.google_embedder import GoogleEmbedder
from funding_docs.core.document_processing.configs import get_pipeline_settings

logger = logging.getLogger(__name__)


def get_embedder() -> Embedder:
    """
    Build the embedder configured for the pipeline.

    Returns:
        Embedder: Google Gemini embedder with the configured fixed dimension
    """
    settings = get_pipeline_settings()
    logger.info(
        f"{__name__}:get_embedder - Creating Google embedder",
        extra={"model": settings.embedding_model_id, "dimension": settings.embedding_dimension},
    )
    return GoogleEmbedder(
        model_id=settings.embedding_model_id,
        dimension=settings.embedding_dimension,
    )
