"""Political-funding report ingestion and indexing service."""

__version__ = "0.1.0"
