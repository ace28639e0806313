"""
Tests for sentence-aware chunking.

Dependencies: pytest, funding_docs.core.document_processing.tasks.chunking_task
System role: Chunking behavior validation
"""

import pytest

from funding_docs.core.document_processing.tasks.chunking_task import (
    ChunkingTask,
    chunk_text,
    split_sentences,
)


class TestSplitSentences:
    """Sentence span detection."""

    def test_splits_on_japanese_and_western_terminators(self) -> None:
        """Should end a sentence after 。！？!? and line breaks."""
        text = "収入の部。支出の部！合計？Total!Done?\n次の行"

        sentences = [text[start:end] for start, end in split_sentences(text)]

        assert sentences == [
            "収入の部。",
            "支出の部！",
            "合計？",
            "Total!",
            "Done?",
            "次の行",
        ]

    def test_skips_blank_segments(self) -> None:
        """Should not report whitespace-only spans."""
        text = "一文目。\n\n   \n二文目。"

        sentences = [text[start:end].strip() for start, end in split_sentences(text)]

        assert sentences == ["一文目。", "二文目。"]

    def test_text_without_terminator_is_one_sentence(self) -> None:
        """Should treat undelimited text as a single sentence."""
        assert split_sentences("政治資金収支報告書") == [(0, 9)]


class TestChunkText:
    """Greedy sentence packing."""

    def test_empty_text_gives_no_chunks(self) -> None:
        """Should return an empty list for empty input."""
        assert chunk_text("", 100) == []

    @pytest.mark.parametrize("target_size", [0, -5])
    def test_rejects_non_positive_target(self, target_size: int) -> None:
        """Should raise ValueError for a target below 1."""
        with pytest.raises(ValueError):
            chunk_text("本文。", target_size)

    def test_short_text_is_single_chunk(self) -> None:
        """Should keep text shorter than the target in one chunk."""
        assert chunk_text("  寄付金は百万円です。  ", 100) == ["寄付金は百万円です。"]

    def test_packs_sentences_up_to_target(self) -> None:
        """Should start a new chunk when the next sentence would exceed the target."""
        text = "あいう。えお。かきくけこ。"

        chunks = chunk_text(text, 7)

        assert chunks == ["あいう。えお。", "かきくけこ。"]

    def test_oversized_sentence_is_not_cut(self) -> None:
        """Should emit a sentence longer than the target as its own chunk."""
        long_sentence = "長" * 50 + "。"
        text = f"短い。{long_sentence}終わり。"

        chunks = chunk_text(text, 10)

        assert chunks == ["短い。", long_sentence, "終わり。"]

    def test_chunks_are_ordered_substrings(self) -> None:
        """Should only produce slices of the input, in document order."""
        text = (
            "政治資金収支報告書。\n収入の部。寄付金は1,000,000円です。"
            "支出の部！人件費は2,000,000円です？合計は6,500,000円です。"
        )

        chunks = chunk_text(text, 20)

        position = 0
        for chunk in chunks:
            assert chunk
            found = text.find(chunk, position)
            assert found >= position
            position = found + len(chunk)

    def test_chunks_respect_target_when_sentences_fit(self) -> None:
        """Should never exceed the target when every sentence fits in it."""
        text = "一二三四。" * 30

        chunks = chunk_text(text, 12)

        assert len(chunks) == 15
        assert all(len(chunk) <= 12 for chunk in chunks)


class TestChunkingTask:
    """ChunkingTask wrapper."""

    def test_uses_configured_size(self) -> None:
        """Should chunk with the size it was built with."""
        task = ChunkingTask(chunk_size=7)

        assert task.chunk_size == 7
        assert task.chunk("あいう。えお。かきくけこ。") == ["あいう。えお。", "かきくけこ。"]

    def test_rejects_invalid_size(self) -> None:
        """Should refuse a chunk size below 1."""
        with pytest.raises(ValueError):
            ChunkingTask(chunk_size=0)
