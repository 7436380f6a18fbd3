"""Removal of markdown code fences around model responses.

Models asked for "code only" still tend to wrap their answer in a fenced block.
Only the following shapes are recognised:

    opening: ``` or ```<tag> at the very start, followed by a newline,
             where <tag> is one of FENCE_TAGS (case-insensitive)
    closing: ``` on the final non-blank line

Anything else is passed through untouched.
"""

from typing import Optional

FENCE = "```"

FENCE_TAGS = frozenset({
    "javascript",
    "js",
    "jsx",
    "json",
    "typescript",
    "ts",
    "tsx",
    "python",
    "py",
})


def _opening_fence_end(text: str) -> Optional[int]:
    """Return the index just past a recognised opening fence line, if any."""
    if not text.startswith(FENCE):
        return None
    newline = text.find("\n")
    if newline == -1:
        return None
    tag = text[len(FENCE):newline].strip()
    if tag and tag.lower() not in FENCE_TAGS:
        return None
    return newline + 1


def _closing_fence_start(text: str) -> Optional[int]:
    """Return the index where a trailing closing fence (and its newline) begins."""
    stripped = text.rstrip()
    if stripped == FENCE:
        return 0
    if stripped.endswith("\n" + FENCE):
        return len(stripped) - len(FENCE) - 1
    return None


def strip_code_fence(text: str) -> str:
    """Strip a leading opening fence and a trailing closing fence.

    Each side is handled independently, so a response that only lost its closing
    fence is still cleaned.

    >>> strip_code_fence("```javascript\\nlet x = 1;\\n```")
    'let x = 1;'
    """
    body = text
    start = _opening_fence_end(body)
    if start is not None:
        body = body[start:]
    end = _closing_fence_start(body)
    if end is not None:
        body = body[:end]
    return body
