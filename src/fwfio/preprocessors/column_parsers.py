from __future__ import annotations
from typing import Any, List, Optional, Sequence

from ..errors import ValidationError
from ..types import ColumnParser


def _try_int(token: str) -> Optional[int]:
    # digit-group underscores are Python literal syntax, not file data
    if "_" in token:
        return None
    try:
        return int(token)
    except ValueError:
        return None


def _try_float(token: str) -> Optional[float]:
    if "_" in token:
        return None
    try:
        return float(token)
    except ValueError:
        return None


def parse_value(parser: ColumnParser, raw: str) -> Any:
    """Convert one sliced field according to ``parser``."""
    if parser is ColumnParser.RAW:
        return raw
    if parser is ColumnParser.STR:
        return raw.strip()
    if parser is ColumnParser.NASTR:
        stripped = raw.strip()
        return stripped or None
    if parser is ColumnParser.INT:
        return _try_int(raw)
    if parser is ColumnParser.FLOAT:
        return _try_float(raw)
    raise ValidationError(f"Unsupported column parser: {parser!r}")


def resolve_parsers(parsers: Any, count: int) -> List[ColumnParser]:
    """
    Expand the ``parsers`` option to one parser per retained column.

    Accepts ``None`` (``str`` everywhere), a single parser, or a sequence with
    exactly ``count`` entries. Entries may be enum members or their names.
    """
    if parsers is None:
        return [ColumnParser.STR] * count
    if isinstance(parsers, (str, ColumnParser)):
        return [ColumnParser.coerce(parsers)] * count
    resolved = [ColumnParser.coerce(p) for p in parsers]
    if len(resolved) != count:
        raise ValidationError(f"Expected {count} column parsers, got {len(resolved)}")
    return resolved


def parse_column(parser: ColumnParser, values: Sequence[str]) -> List[Any]:
    return [parse_value(parser, value) for value in values]
