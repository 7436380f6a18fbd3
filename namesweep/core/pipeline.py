"""The two-pass rename pipeline: per-chunk rewrite, then global reconciliation."""

from dataclasses import dataclass, field
from typing import Optional

from rich.console import Console
from rich.markup import escape
from tqdm import tqdm

from namesweep.config import PROMPTS
from namesweep.core.chunker import Chunk, split_into_chunks
from namesweep.core.fences import strip_code_fence
from namesweep.core.languages import DEFAULT_LANGUAGE, SourceLanguage
from namesweep.core.renamer import apply_rename_mapping, find_rename_conflicts, parse_rename_mapping
from namesweep.debug import debug_log
from namesweep.llm.base import BaseLLMClient

console = Console()


@dataclass
class ChunkOutcome:
    """What one chunk contributed to the Pass 1 result."""
    chunk: Chunk
    text: str
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class Pass1Result:
    """Concatenated per-chunk output of Pass 1."""
    text: str
    outcomes: list[ChunkOutcome] = field(default_factory=list)

    @property
    def failed_chunks(self) -> list[ChunkOutcome]:
        return [outcome for outcome in self.outcomes if outcome.failed]


@dataclass
class Pass2Result:
    """Final text plus what Pass 2 did to get there."""
    text: str
    mapping: dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None
    conflicts: list[tuple[str, str]] = field(default_factory=list)

    @property
    def applied(self) -> bool:
        return self.error is None and bool(self.mapping)


def build_rewrite_prompt(chunk_text: str, language: SourceLanguage = DEFAULT_LANGUAGE) -> str:
    """Build the Pass 1 prompt for one chunk."""
    return PROMPTS["rewrite_chunk"].format(
        language=language.display_name,
        fence_tag=language.fence_tag,
        chunk=chunk_text,
    )


def build_reconcile_prompt(code: str, language: SourceLanguage = DEFAULT_LANGUAGE) -> str:
    """Build the Pass 2 prompt for the whole Pass 1 result."""
    return PROMPTS["reconcile_names"].format(
        size=len(code),
        fence_tag=language.fence_tag,
        code=code,
    )


def format_chunk_error(chunk: Chunk, message: str, language: SourceLanguage = DEFAULT_LANGUAGE) -> str:
    """Error marker followed by the untouched chunk."""
    return f"{language.comment_prefix} Error: {message}\n{chunk.text}"


async def run_pass1(
    lines: list[str],
    client: BaseLLMClient,
    chunk_size: int = 150,
    language: SourceLanguage = DEFAULT_LANGUAGE,
    show_progress: bool = True,
) -> Pass1Result:
    """Rewrite the document chunk by chunk with the fast model.

    Chunks are sent one at a time, each awaited before the next is issued, so the
    output keeps document order. A failed call never aborts the run: the chunk is
    kept as-is behind an error comment.

    Args:
        lines: Source document lines
        client: Client bound to the fast model
        chunk_size: Lines per request
        language: Source language for prompt wording and error comments
        show_progress: Whether to draw the progress bar

    Returns:
        Pass1Result whose text is every chunk's contribution plus "\\n", in order
    """
    chunks = split_into_chunks(lines, chunk_size)
    total_lines = len(lines)
    outcomes: list[ChunkOutcome] = []
    parts: list[str] = []

    console.print(f"[blue]Starting Pass 1: chunked rewrite[/blue] ({client.model}, {len(chunks)} chunks)")
    debug_log("info", "Pass 1 started", {
        "model": client.model,
        "total_lines": total_lines,
        "chunk_size": chunk_size,
        "chunks": len(chunks),
    })

    pbar = tqdm(
        total=total_lines,
        desc="Pass 1",
        unit="line",
        ncols=100,
        disable=not show_progress,
    )
    try:
        for chunk in chunks:
            percent = round(chunk.start / total_lines * 100)
            pbar.set_postfix_str(f"{percent}% ({chunk.start}/{total_lines} lines)")
            debug_log("debug", f"Chunk {chunk.index + 1}/{len(chunks)} started at line {chunk.start} ({percent}%)")

            try:
                response = await client.complete(build_rewrite_prompt(chunk.text, language))
                outcome = ChunkOutcome(chunk=chunk, text=strip_code_fence(response))
            except Exception as e:
                console.print(f"[red]Error at line {chunk.start}: {escape(str(e))}[/red]")
                debug_log("error", f"Chunk {chunk.index + 1} failed", {
                    "start_line": chunk.start,
                    "end_line": chunk.end,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                })
                outcome = ChunkOutcome(
                    chunk=chunk,
                    text=format_chunk_error(chunk, str(e), language),
                    error=str(e),
                )

            outcomes.append(outcome)
            parts.append(outcome.text + "\n")
            pbar.update(chunk.line_count)
    finally:
        pbar.close()

    result = Pass1Result(text="".join(parts), outcomes=outcomes)
    failed = len(result.failed_chunks)
    if failed:
        console.print(f"[yellow]Pass 1 complete with {failed} failed chunk(s) kept unchanged.[/yellow]")
    else:
        console.print("[green]Pass 1 complete.[/green]")
    debug_log("info", "Pass 1 finished", {"chunks": len(outcomes), "failed_chunks": failed})
    return result


async def run_pass2(
    pass1_text: str,
    client: BaseLLMClient,
    language: SourceLanguage = DEFAULT_LANGUAGE,
    single_sweep: bool = False,
) -> Pass2Result:
    """Unify names across chunk boundaries with the strong model.

    The model is asked once for a JSON rename mapping which is then applied over
    the whole text. Any failure, in the call or in the response, falls back to the
    Pass 1 text unchanged.

    Args:
        pass1_text: Full Pass 1 result
        client: Client bound to the strong model
        language: Source language for the prompt's fence tag
        single_sweep: Apply the mapping in one regex pass instead of pair by pair

    Returns:
        Pass2Result holding the final text
    """
    console.print(f"[blue]Starting Pass 2: global consistency check[/blue] ({client.model})")

    if not pass1_text:
        console.print("[yellow]Pass 1 output is empty; nothing to reconcile.[/yellow]")
        return Pass2Result(text=pass1_text)

    console.print("Sending entire file to Pass 2 for global context analysis...")
    debug_log("info", "Pass 2 started", {"model": client.model, "characters": len(pass1_text)})

    try:
        response = await client.complete(build_reconcile_prompt(pass1_text, language))
        mapping = parse_rename_mapping(response)
    except Exception as e:
        console.print(f"[red]Pass 2 global analysis failed: {escape(str(e))}[/red]")
        console.print("[yellow]Falling back to raw Pass 1 output.[/yellow]")
        debug_log("error", "Pass 2 failed, using Pass 1 output", {
            "error_type": type(e).__name__,
            "error_message": str(e),
        })
        return Pass2Result(text=pass1_text, error=str(e))

    console.print(f"[green]Received mapping for {len(mapping)} symbols.[/green]")
    debug_log("info", "Pass 2 mapping received", {"mapping": mapping})

    conflicts: list[tuple[str, str]] = []
    if not single_sweep:
        conflicts = find_rename_conflicts(mapping)
        if conflicts:
            listed = ", ".join(f"{later} (inside new name of {earlier})" for earlier, later in conflicts)
            console.print(
                f"[yellow]Warning: {len(conflicts)} rename(s) also match earlier replacements: {escape(listed)}. "
                "Use --single-sweep to apply the mapping in one pass.[/yellow]"
            )
            debug_log("warning", "Order-dependent renames in mapping", {"conflicts": conflicts})

    console.print("Applying global naming consistency...")
    final_text = apply_rename_mapping(pass1_text, mapping, single_sweep=single_sweep)
    return Pass2Result(text=final_text, mapping=mapping, conflicts=conflicts)
