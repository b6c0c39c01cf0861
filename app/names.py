"""Company name cleanup: line splitting, trimming and case-insensitive dedup."""

from __future__ import annotations

import re
from typing import Iterable, List

_LINE_BREAK = re.compile(r"\r?\n")


def deduplicate_names(names: Iterable[str]) -> List[str]:
    """Keep the first occurrence of each name, comparing lowercased forms."""
    seen: set[str] = set()
    out: List[str] = []
    for name in names:
        key = name.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(name)
    return out


def parse_names(text: str, deduplicate: bool) -> List[str]:
    """
    Turn raw textarea content (one name per line) into a cleaned list.

    Blank lines are dropped. Order is preserved.
    """
    lines = [line.strip() for line in _LINE_BREAK.split(text)]
    lines = [line for line in lines if line]

    if not deduplicate:
        return lines
    return deduplicate_names(lines)
