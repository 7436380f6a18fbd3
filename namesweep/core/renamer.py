"""Parsing and applying the Pass 2 rename mapping."""

import json
import re

from namesweep.core.fences import strip_code_fence

# Characters that continue an identifier, Unicode letters included.
# `$` counts so that `a` is not matched inside `$a`.
_IDENT_CHAR = r"[\w$]"


def _whole_word_pattern(name: str) -> str:
    return rf"(?<!{_IDENT_CHAR}){re.escape(name)}(?!{_IDENT_CHAR})"


def parse_rename_mapping(response: str) -> dict[str, str]:
    """Parse a model response into an old name -> new name mapping.

    Args:
        response: Raw Pass 2 response, optionally fenced

    Returns:
        Mapping in the order the model listed it, without identity pairs

    Raises:
        ValueError: If the response is not a JSON object of non-blank string keys
            to string values
    """
    data = json.loads(strip_code_fence(response).strip())
    if not isinstance(data, dict):
        raise ValueError(f"Rename mapping must be a JSON object, got {type(data).__name__}")

    mapping: dict[str, str] = {}
    for old_name, new_name in data.items():
        if not old_name.strip():
            raise ValueError("Rename mapping contains a blank key")
        if not isinstance(new_name, str):
            raise ValueError(
                f"Rename mapping value for '{old_name}' must be a string, got {type(new_name).__name__}"
            )
        if old_name != new_name:
            mapping[old_name] = new_name
    return mapping


def find_rename_conflicts(mapping: dict[str, str]) -> list[tuple[str, str]]:
    """Find pairs whose sequential application depends on order.

    A conflict (earlier_old, later_old) means a later key occurs as a whole word in
    the new name of an earlier pair, so applying the pairs one after another also
    rewrites text that the earlier pair just produced.
    """
    conflicts = []
    items = list(mapping.items())
    for position, (earlier_old, earlier_new) in enumerate(items):
        for later_old, _ in items[position + 1:]:
            if re.search(_whole_word_pattern(later_old), earlier_new):
                conflicts.append((earlier_old, later_old))
    return conflicts


def apply_rename_mapping(text: str, mapping: dict[str, str], single_sweep: bool = False) -> str:
    """Replace every whole-word occurrence of each old name with its new name.

    Args:
        text: Text to rewrite
        mapping: Old name -> new name
        single_sweep: Match all keys in one pass over the original text instead of
            applying pairs one after another in mapping order

    Returns:
        Rewritten text
    """
    if not mapping:
        return text

    if single_sweep:
        # Longest first so a key is never shadowed by one of its prefixes.
        names = sorted(mapping, key=len, reverse=True)
        pattern = re.compile("|".join(_whole_word_pattern(name) for name in names))
        return pattern.sub(lambda match: mapping[match.group(0)], text)

    for old_name, new_name in mapping.items():
        text = re.sub(_whole_word_pattern(old_name), lambda _match, new=new_name: new, text)
    return text
