"""Source languages understood by the prompts."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class SourceLanguage:
    """Prompt wording and comment syntax for one source language."""
    name: str
    display_name: str
    fence_tag: str
    comment_prefix: str
    suffixes: tuple[str, ...]


JAVASCRIPT = SourceLanguage("javascript", "JS", "javascript", "//", (".js", ".mjs", ".cjs", ".jsx"))
TYPESCRIPT = SourceLanguage("typescript", "TypeScript", "typescript", "//", (".ts", ".tsx", ".mts", ".cts"))
PYTHON = SourceLanguage("python", "Python", "python", "#", (".py",))

LANGUAGES = {lang.name: lang for lang in (JAVASCRIPT, TYPESCRIPT, PYTHON)}
DEFAULT_LANGUAGE = JAVASCRIPT


def detect_language(file_path: Path, override: Optional[str] = None) -> SourceLanguage:
    """Pick the language for a file.

    Args:
        file_path: Input file; its suffix is used when no override is given
        override: Explicit language name from configuration

    Returns:
        The matching SourceLanguage, JavaScript for unknown suffixes

    Raises:
        ValueError: If override is not a known language name
    """
    if override:
        try:
            return LANGUAGES[override.lower()]
        except KeyError:
            known = ", ".join(sorted(LANGUAGES))
            raise ValueError(f"Unknown language '{override}'. Known languages: {known}") from None

    suffix = file_path.suffix.lower()
    for lang in LANGUAGES.values():
        if suffix in lang.suffixes:
            return lang
    return DEFAULT_LANGUAGE
