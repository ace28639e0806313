"""
Pipeline settings for the ingestor and batch processor.

Read from DOC_PIPELINE_* variables: upload validation, chunk sizing,
collaborator timeouts and the embedding model.

Dependencies: pydantic, pydantic_settings
System role: Pipeline configuration
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocumentPipelineSettings(BaseSettings):
    """Upload limits, chunk sizing, collaborator timeouts and embedding shape."""

    model_config = SettingsConfigDict(
        env_prefix="DOC_PIPELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Upload validation
    max_upload_bytes: int = Field(
        default=50 * 1024 * 1024,
        description="Maximum accepted upload size in bytes",
    )
    allowed_content_types: list[str] = Field(
        default_factory=lambda: ["application/pdf"],
        description="Media types accepted by the ingestor",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=1000,
        description="Target chunk size in characters",
    )

    # Collaborator timeouts
    storage_timeout_seconds: float = Field(
        default=60.0,
        description="Timeout for a single content store call",
    )
    ocr_timeout_seconds: float = Field(
        default=120.0,
        description="Timeout for a single text extraction call",
    )
    embedding_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for a single chunk embedding call",
    )

    # Embedding settings
    embedding_model_id: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=1536,
        description="Fixed dimension of every stored chunk vector",
    )

    # Batch settings
    max_concurrency: int = Field(
        default=1,
        description="Documents processed in parallel per batch (1 = sequential)",
    )
    auto_process_on_upload: bool = Field(
        default=True,
        description="Queue a processing run for every newly ingested document",
    )


@lru_cache
def get_pipeline_settings() -> DocumentPipelineSettings:
    """Pipeline settings, read from the environment on first use."""
    return DocumentPipelineSettings()
