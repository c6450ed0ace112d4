from __future__ import annotations
from typing import List, Optional, Sequence


def synthetic_names(count: int) -> List[str]:
    """Default column names ``x1 .. xN``."""
    return [f"x{position}" for position in range(1, count + 1)]


def header_names(tokens: Sequence[str], count: int, strip_chars: Optional[str]) -> List[str]:
    """
    Turn header tokens into column names for ``count`` retained columns.

    Tokens are trimmed with ``strip_chars`` (``None`` keeps them as read). A token
    that is missing or empty gets the synthetic name of its position, and
    repeated names are made unique.

    :param tokens: Header fields, already filtered by the keep mask.
    :param count: Number of retained columns.
    :param strip_chars: Characters trimmed from both ends of each token.
    :returns: ``count`` unique names.
    """
    names: List[str] = []
    for position in range(1, count + 1):
        token = tokens[position - 1] if position <= len(tokens) else ""
        if strip_chars is not None:
            token = token.strip(strip_chars)
        names.append(token or f"x{position}")
    return dedupe_column_names(names)


def dedupe_column_names(names: Sequence[str]) -> List[str]:
    """
    Make names unique by appending ``_1``, ``_2`` … to repeats.

    Example:
        Input:  ["id", "name", "name", "amount", "name"]
        Output: ["id", "name", "name_1", "amount", "name_2"]

    A generated name never collides with a name used verbatim elsewhere in the list.
    """
    taken = set(names)
    repeats: dict[str, int] = {}
    seen: set[str] = set()
    deduped: List[str] = []
    for name in names:
        if name not in seen:
            seen.add(name)
            deduped.append(name)
            continue
        suffix = repeats.get(name, 0)
        candidate = name
        while candidate in taken:
            suffix += 1
            candidate = f"{name}_{suffix}"
        repeats[name] = suffix
        taken.add(candidate)
        seen.add(candidate)
        deduped.append(candidate)
    return deduped
