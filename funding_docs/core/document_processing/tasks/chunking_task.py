"""
Sentence-aware text chunking.

Splits extracted text into sentences on Japanese and Western terminal
punctuation and line breaks, then packs consecutive sentences greedily into
chunks of roughly target_size characters. Every chunk is a trimmed slice of
the input, so chunk text can always be located in the source document.

Dependencies: re
System role: Chunking step of the indexing stage
"""

import re

SENTENCE_DELIMITERS = "。！？!?\r\n"

# a run of non-delimiters plus at most one closing delimiter
_SENTENCE_RE = re.compile(rf"[^{SENTENCE_DELIMITERS}]+[{SENTENCE_DELIMITERS}]?")


def split_sentences(text: str) -> list[tuple[int, int]]:
    """
    Locate sentence spans in text.

    Args:
        text: Input text

    Returns:
        list[tuple[int, int]]: (start, end) offsets of non-blank sentences
    """
    return [match.span() for match in _SENTENCE_RE.finditer(text) if match.group().strip()]


def chunk_text(text: str, target_size: int = 1000) -> list[str]:
    """
    Pack sentences into chunks of at most target_size characters.

    A chunk is emitted as soon as the next sentence would push it past
    target_size. A single sentence longer than target_size becomes its own
    oversized chunk rather than being cut.

    Args:
        text: Extracted document text
        target_size: Soft upper bound on chunk length in characters

    Returns:
        list[str]: Non-empty chunks in document order ([] for empty input)

    Raises:
        ValueError: target_size is less than 1
    """
    if target_size < 1:
        raise ValueError(f"target_size must be positive, got {target_size}")
    if not text:
        return []

    chunks: list[str] = []
    buffer_start: int | None = None
    buffer_end = 0

    for start, end in split_sentences(text):
        if buffer_start is not None and end - buffer_start > target_size:
            chunks.append(text[buffer_start:buffer_end].strip())
            buffer_start = None
        if buffer_start is None:
            buffer_start = start
        buffer_end = end

    if buffer_start is not None:
        chunks.append(text[buffer_start:buffer_end].strip())

    return chunks or [text[:target_size]]


class ChunkingTask:
    """Split extracted text into indexable chunks."""

    def __init__(self, chunk_size: int = 1000) -> None:
        """
        Initialize chunking task.

        Args:
            chunk_size: Target chunk size in characters
        """
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._chunk_size = chunk_size

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    def chunk(self, text: str) -> list[str]:
        """
        Split text into chunks.

        Args:
            text: Extracted document text

        Returns:
            list[str]: Chunks in document order
        """
        return chunk_text(text, self._chunk_size)
