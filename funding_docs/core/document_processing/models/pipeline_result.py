"""
Batch processing result models.

A batch run yields one result per requested document id, either a
ProcessingSuccess or a ProcessingFailure, discriminated by `success`.

Dependencies: pydantic
System role: Return type for BatchProcessor.process()
"""

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, Field, computed_field


class ErrorKind(str, Enum):
    """Why a document's run failed."""

    NOT_FOUND = "not_found"
    EXTRACTION_FAILED = "extraction_failed"
    INDEXING_FAILED = "indexing_failed"
    CONCURRENT_UPDATE = "concurrent_update"
    UNEXPECTED = "unexpected"


class ProcessingSuccess(BaseModel):
    """Document ended completed (or already was)."""

    success: Literal[True] = True
    document_id: str = Field(description="Requested document identifier")
    message: str = Field(description="Human-readable outcome")
    index_reference: str | None = Field(default=None, description="Set when indexing ran")
    text_length: int | None = Field(default=None, description="Length of the extracted text")


class ProcessingFailure(BaseModel):
    """Document could not be processed in this run."""

    success: Literal[False] = False
    document_id: str = Field(description="Requested document identifier")
    error_kind: ErrorKind = Field(description="Failure classification")
    detail: str = Field(description="Error message")


ProcessingResult = Union[ProcessingSuccess, ProcessingFailure]


class BatchReport(BaseModel):
    """Per-document results of one batch run, in request order."""

    results: list[ProcessingResult] = Field(default_factory=list)

    @computed_field
    @property
    def total(self) -> int:
        return len(self.results)

    @computed_field
    @property
    def successful(self) -> int:
        return sum(1 for result in self.results if result.success)

    @computed_field
    @property
    def failed(self) -> int:
        return self.total - self.successful
