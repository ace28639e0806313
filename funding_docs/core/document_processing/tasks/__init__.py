"""
Task modules for document processing pipeline.

Exports: ExtractionTask, ChunkingTask, chunk_text, IndexingTask
"""

from .chunking_task import ChunkingTask, chunk_text, split_sentences
from .extraction_task import ExtractionTask
from .indexing_task import IndexingTask, make_index_reference

__all__ = [
    "ChunkingTask",
    "chunk_text",
    "split_sentences",
    "ExtractionTask",
    "IndexingTask",
    "make_index_reference",
]
