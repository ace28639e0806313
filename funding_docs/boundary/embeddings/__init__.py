"""Chunk embedding backends."""

from funding_docs.boundary.embeddings.base import Embedder
from funding_docs.boundary.embeddings.factory import get_embedder
from funding_docs.boundary.embeddings.google_embedder import FixedDimensionEmbeddings, GoogleEmbedder

__all__ = ["Embedder", "FixedDimensionEmbeddings", "GoogleEmbedder", "get_embedder"]
