"""Core pipeline functionality."""

from namesweep.core.chunker import Chunk, chunk_ranges, split_into_chunks, split_source_lines
from namesweep.core.fences import strip_code_fence
from namesweep.core.languages import SourceLanguage, detect_language
from namesweep.core.pipeline import Pass1Result, Pass2Result, run_pass1, run_pass2
from namesweep.core.renamer import apply_rename_mapping, find_rename_conflicts, parse_rename_mapping

__all__ = [
    "Chunk",
    "chunk_ranges",
    "split_into_chunks",
    "split_source_lines",
    "strip_code_fence",
    "SourceLanguage",
    "detect_language",
    "Pass1Result",
    "Pass2Result",
    "run_pass1",
    "run_pass2",
    "apply_rename_mapping",
    "find_rename_conflicts",
    "parse_rename_mapping",
]
