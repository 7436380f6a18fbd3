"""Splitting a source document into fixed-size line chunks."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Chunk:
    """A contiguous slice of source lines sent as one Pass 1 request."""
    index: int
    start: int  # 0-based first line
    end: int  # exclusive
    text: str

    @property
    def line_count(self) -> int:
        return self.end - self.start


def chunk_ranges(total_lines: int, chunk_size: int) -> list[tuple[int, int]]:
    """Partition line indices [0, total_lines) into consecutive half-open ranges.

    Args:
        total_lines: Number of lines in the document
        chunk_size: Maximum lines per range

    Returns:
        ceil(total_lines / chunk_size) ranges covering every line in order

    Raises:
        ValueError: If chunk_size < 1 or total_lines < 0
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")
    if total_lines < 0:
        raise ValueError(f"total_lines must not be negative, got {total_lines}")

    return [
        (start, min(start + chunk_size, total_lines))
        for start in range(0, total_lines, chunk_size)
    ]


def split_source_lines(source: str) -> list[str]:
    """Split source text into lines on "\\n".

    A trailing newline produces a final empty line, so joining the result with
    "\\n" gives back the source exactly. The empty string has no lines.
    """
    if not source:
        return []
    return source.split("\n")


def read_source_lines(file_path: Path) -> list[str]:
    """Read a UTF-8 source file as a list of lines."""
    return split_source_lines(file_path.read_text(encoding="utf-8"))


def split_into_chunks(lines: list[str], chunk_size: int) -> list[Chunk]:
    """Build chunks of at most chunk_size lines, in document order."""
    return [
        Chunk(index=index, start=start, end=end, text="\n".join(lines[start:end]))
        for index, (start, end) in enumerate(chunk_ranges(len(lines), chunk_size))
    ]
