"""
Google Generative AI embeddings with fixed output dimensionality.

Wraps GoogleGenerativeAIEmbeddings so every call requests the configured
dimension; the base class ignores output_dimensionality in its constructor.

Dependencies: langchain_google_genai
System role: Default chunk embedding backend
"""

import asyncio
import logging
from typing import List

from dotenv import load_dotenv
from langchain_google_genai import GoogleGenerativeAIEmbeddings

from funding_docs.boundary.embeddings.base import Embedder

logger = logging.getLogger(__name__)
load_dotenv()


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """GoogleGenerativeAIEmbeddings that always asks for one output dimension."""

    _output_dimensionality: int = 1536

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1536,
        **kwargs,
    ) -> None:
        """
        Initialize embeddings with fixed output dimensionality.

        Args:
            model: Google embedding model ID
            output_dimensionality: Fixed dimension for all embeddings
            **kwargs: Additional arguments for GoogleGenerativeAIEmbeddings

        Note:
            gemini-embedding-001 supports up to 3072 dimensions, reducible to 1536.
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    def embed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> List[float]:
        """Embed text with the configured dimension unless overridden."""
        return super().embed_query(
            text,
            task_type=task_type or "RETRIEVAL_DOCUMENT",
            title=title,
            output_dimensionality=output_dimensionality or self._output_dimensionality,
        )


class GoogleEmbedder(Embedder):
    """Embedder backed by Gemini embeddings through LangChain."""

    def __init__(self, model_id: str, dimension: int, embeddings=None) -> None:
        """
        Initialize Google embedder.

        Args:
            model_id: Google embedding model ID
            dimension: Fixed vector dimension
            embeddings: Optional pre-built LangChain embeddings object
        """
        self._dimension = dimension
        self._embeddings = embeddings or FixedDimensionEmbeddings(
            model=model_id,
            output_dimensionality=dimension,
        )

    @property
    def dimension(self) -> int:
        return self._dimension

    async def embed(self, text: str) -> list[float]:
        # base class aembed_query does not forward output_dimensionality
        return await asyncio.to_thread(self._embeddings.embed_query, text)
