"""CLI interface for namesweep."""

import asyncio
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from namesweep import __version__
from namesweep import debug
from namesweep.config import Config, LLMProvider
from namesweep.core.chunker import read_source_lines
from namesweep.core.languages import detect_language
from namesweep.core.pipeline import run_pass1, run_pass2
from namesweep.debug import debug_log, setup_debug_logger
from namesweep.llm import AnthropicClient, OpenAIClient

console = Console()


def create_llm_client(config: Config, model: str):
    """Create LLM client for one model based on configuration."""
    if config.llm_provider in (LLMProvider.GEMINI, LLMProvider.OPENAI):
        return OpenAIClient(
            api_key=config.llm_api_key,
            model=model,
            base_url=config.llm_base_url,
            max_tokens=config.llm_max_tokens,
            temperature=config.llm_temperature,
        )
    elif config.llm_provider == LLMProvider.ANTHROPIC:
        return AnthropicClient(
            api_key=config.llm_api_key,
            model=model,
            base_url=config.llm_base_url,
            max_tokens=config.llm_max_tokens,
            temperature=config.llm_temperature,
        )
    else:
        raise ValueError(f"Unsupported LLM provider: {config.llm_provider}")


def pass1_output_path(file_path: Path) -> Path:
    """Path of the Pass 1 artifact, e.g. app.js -> app.pass1.js."""
    return file_path.with_suffix(".pass1" + file_path.suffix)


def final_output_path(file_path: Path) -> Path:
    """Path of the final artifact, e.g. app.js -> app.final.js."""
    return file_path.with_suffix(".final" + file_path.suffix)


async def process_file(
    file_path: Path,
    config: Config,
    show_progress: bool = True,
) -> dict:
    """Run both passes over a single file and write both artifacts.

    Args:
        file_path: Path to the source file
        config: Configuration
        show_progress: Whether to draw the Pass 1 progress bar

    Returns:
        Processing statistics
    """
    debug_log("info", "=" * 80)
    debug_log("info", f"Starting processing file: {file_path}")

    stats = {
        "file": str(file_path),
        "lines": 0,
        "chunks": 0,
        "failed_chunks": 0,
        "mapping_size": 0,
        "pass2_applied": False,
    }

    pass1_client = None
    pass2_client = None

    try:
        language = detect_language(file_path, config.language)
        lines = read_source_lines(file_path)
        stats["lines"] = len(lines)
        debug_log("info", "Source loaded", {"lines": len(lines), "language": language.name})

        pass1_client = create_llm_client(config, config.pass1_model)
        pass2_client = create_llm_client(config, config.pass2_model)

        pass1 = await run_pass1(
            lines,
            pass1_client,
            chunk_size=config.chunk_size,
            language=language,
            show_progress=show_progress,
        )
        stats["chunks"] = len(pass1.outcomes)
        stats["failed_chunks"] = len(pass1.failed_chunks)

        pass1_path = pass1_output_path(file_path)
        pass1_path.write_text(pass1.text, encoding="utf-8")
        stats["pass1_output"] = str(pass1_path)
        console.print(f"[green]Pass 1 saved to {pass1_path}[/green]")
        debug_log("info", f"Saved Pass 1 output to: {pass1_path}")

        pass2 = await run_pass2(
            pass1.text,
            pass2_client,
            language=language,
            single_sweep=config.rename_single_sweep,
        )
        stats["mapping_size"] = len(pass2.mapping)
        stats["pass2_applied"] = pass2.applied
        if pass2.error:
            stats["pass2_error"] = pass2.error

        final_path = final_output_path(file_path)
        final_path.write_text(pass2.text, encoding="utf-8")
        stats["final_output"] = str(final_path)
        console.print(f"[green]Final code saved to {final_path}[/green]")
        debug_log("info", f"Saved final output to: {final_path}")

    except Exception as e:
        import traceback
        debug_log("error", "Fatal error processing file", {
            "error_type": type(e).__name__,
            "error_message": str(e),
            "traceback": traceback.format_exc(),
        })
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise
    finally:
        for client in (pass1_client, pass2_client):
            if client is not None:
                await client.close()
        debug_log("info", "LLM clients closed")

    debug_log("info", "Processing complete", {"stats": stats})
    return stats


def print_summary(stats: dict) -> None:
    """Print the processing summary table."""
    table = Table(title="Processing Summary")
    table.add_column("Item")
    table.add_column("Value")

    table.add_row("File", stats["file"])
    table.add_row("Lines", str(stats["lines"]))
    table.add_row("Chunks", str(stats["chunks"]))
    table.add_row("Failed chunks", str(stats["failed_chunks"]))
    table.add_row("Mapping entries", str(stats["mapping_size"]))
    table.add_row("Pass 2 applied", "✓" if stats["pass2_applied"] else "✗")
    table.add_row("Pass 1 output", stats.get("pass1_output", "-"))
    table.add_row("Final output", stats.get("final_output", "-"))

    console.print(table)


@click.command()
@click.version_option(version=__version__)
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--provider",
    type=click.Choice([provider.value for provider in LLMProvider]),
    help="LLM provider (default: gemini)",
)
@click.option("--pass1-model", help="Fast model for the chunked rewrite")
@click.option("--pass2-model", help="Strong model for the global consistency pass")
@click.option("--api-key", help="API key (or set the provider's *_API_KEY env)")
@click.option("--base-url", help="Custom API base URL")
@click.option("--chunk-size", type=click.IntRange(min=1), help="Source lines per Pass 1 request (default: 150)")
@click.option("--language", help="Source language (default: inferred from file suffix)")
@click.option("--single-sweep", is_flag=True, help="Apply the Pass 2 mapping in one pass instead of pair by pair")
@click.option("--debug", "debug_enabled", is_flag=True, help="Enable debug logging to file")
@click.option("--debug-file", type=click.Path(path_type=Path), help="Debug log file path (default: namesweep_debug_TIMESTAMP.log)")
def main(
    input_path: Path,
    provider: Optional[str],
    pass1_model: Optional[str],
    pass2_model: Optional[str],
    api_key: Optional[str],
    base_url: Optional[str],
    chunk_size: Optional[int],
    language: Optional[str],
    single_sweep: bool,
    debug_enabled: bool,
    debug_file: Optional[Path],
):
    """Rename obfuscated identifiers in INPUT_PATH using two LLM passes.

    Pass 1 rewrites the file chunk by chunk with a fast model and saves
    <name>.pass1<ext>. Pass 2 asks a stronger model to unify names that drifted
    between chunks and saves <name>.final<ext>.
    """
    if debug_enabled:
        setup_debug_logger(debug_file)
        console.print(f"[yellow]Debug logging enabled: {debug.debug_log_file}[/yellow]")

    # Only override env/.env values when CLI args are explicitly provided
    config_kwargs = {}
    if provider:
        config_kwargs["llm_provider"] = LLMProvider(provider)
    if pass1_model:
        config_kwargs["pass1_model"] = pass1_model
    if pass2_model:
        config_kwargs["pass2_model"] = pass2_model
    if api_key:
        config_kwargs["llm_api_key"] = api_key
    if base_url:
        config_kwargs["llm_base_url"] = base_url
    if chunk_size:
        config_kwargs["chunk_size"] = chunk_size
    if language:
        config_kwargs["language"] = language
    if single_sweep:
        config_kwargs["rename_single_sweep"] = True

    config = Config(**config_kwargs)

    debug_log("info", "Configuration loaded", {
        "input_path": str(input_path),
        "llm_provider": config.llm_provider.value,
        "llm_base_url": config.llm_base_url,
        "pass1_model": config.pass1_model,
        "pass2_model": config.pass2_model,
        "chunk_size": config.chunk_size,
        "language": config.language,
        "rename_single_sweep": config.rename_single_sweep,
    })

    # Validate API key
    if not config.llm_api_key:
        console.print(
            f"[red]Error: API key required. Set {config.api_key_env_var} environment variable or use --api-key[/red]"
        )
        debug_log("error", "API key not found")
        raise SystemExit(1)

    try:
        detect_language(input_path, config.language)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--language") from e

    stats = asyncio.run(process_file(input_path, config))
    print_summary(stats)

    if debug_enabled:
        console.print(f"\n[yellow]Debug log saved to: {debug.debug_log_file}[/yellow]")


if __name__ == "__main__":
    main()
