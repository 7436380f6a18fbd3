"""Tests for chunker module."""

import math

import pytest

from namesweep.core.chunker import (
    Chunk,
    chunk_ranges,
    read_source_lines,
    split_into_chunks,
    split_source_lines,
)


class TestChunkRanges:
    """Tests for chunk_ranges."""

    @pytest.mark.parametrize("total_lines,chunk_size", [
        (1, 150),
        (150, 150),
        (151, 150),
        (300, 150),
        (7, 3),
        (10, 1),
    ])
    def test_ranges_cover_all_lines_in_order(self, total_lines, chunk_size):
        """Ranges are consecutive, non-empty and cover [0, N)."""
        ranges = chunk_ranges(total_lines, chunk_size)

        assert len(ranges) == math.ceil(total_lines / chunk_size)
        assert ranges[0][0] == 0
        assert ranges[-1][1] == total_lines
        for (_, prev_end), (next_start, _) in zip(ranges, ranges[1:]):
            assert prev_end == next_start
        assert all(0 < end - start <= chunk_size for start, end in ranges)

    def test_last_range_may_be_shorter(self):
        """The final range holds the remainder."""
        assert chunk_ranges(7, 3) == [(0, 3), (3, 6), (6, 7)]

    def test_zero_lines(self):
        """An empty document has no ranges."""
        assert chunk_ranges(0, 150) == []

    def test_invalid_chunk_size(self):
        """Chunk size below one is rejected."""
        with pytest.raises(ValueError, match="chunk_size"):
            chunk_ranges(10, 0)

    def test_negative_total(self):
        """A negative line count is rejected."""
        with pytest.raises(ValueError, match="total_lines"):
            chunk_ranges(-1, 10)


class TestSplitIntoChunks:
    """Tests for split_source_lines and split_into_chunks."""

    def test_chunks_rejoin_to_original_lines(self):
        """Concatenating chunk lines gives back the document."""
        lines = [f"line {i}" for i in range(23)]

        chunks = split_into_chunks(lines, 5)

        assert len(chunks) == 5
        rejoined = []
        for chunk in chunks:
            rejoined.extend(chunk.text.split("\n"))
        assert rejoined == lines

    def test_chunk_fields(self):
        """Chunk carries index, bounds and joined text."""
        chunks = split_into_chunks(["a", "b", "c"], 2)

        assert chunks[0] == Chunk(index=0, start=0, end=2, text="a\nb")
        assert chunks[1] == Chunk(index=1, start=2, end=3, text="c")
        assert chunks[1].line_count == 1

    def test_split_source_keeps_trailing_empty_line(self):
        """A trailing newline produces a final empty line."""
        assert split_source_lines("x\ny\n") == ["x", "y", ""]
        assert "\n".join(split_source_lines("x\ny\n")) == "x\ny\n"

    def test_split_empty_source(self):
        """The empty string has no lines and no chunks."""
        assert split_source_lines("") == []
        assert split_into_chunks([], 150) == []

    def test_read_source_lines(self, tmp_path):
        """Files are read as UTF-8 lines."""
        path = tmp_path / "in.js"
        path.write_text("const ü = 1;\nfoo(ü);", encoding="utf-8")

        assert read_source_lines(path) == ["const ü = 1;", "foo(ü);"]
