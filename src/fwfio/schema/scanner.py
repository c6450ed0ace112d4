from __future__ import annotations
import logging
from typing import List, Optional, Set

from ..errors import ValidationError
from ..types import DEFAULT_BLANK, Range
from ..utils.encoding import Source, open_source
from ..utils.line_source import LineSource
from .ranges import ranges_to_widths

logger = logging.getLogger(__name__)


class ColumnScanner:
    """
    Accumulates whitespace alignment over sample lines.

    Only positions that are blank in every sampled line are treated as column
    separators; any single line may line up by accident.

    :param blank: Characters counted as blank.
    """

    def __init__(self, blank: str = DEFAULT_BLANK):
        self.blank = frozenset(blank)
        self.common_blanks: Optional[Set[int]] = None
        self.max_width = 0
        self.lines_seen = 0

    def add_line(self, line: str) -> None:
        """Fold one sample line into the running intersection."""
        line_blanks = {position for position, char in enumerate(line, start=1) if char in self.blank}
        if self.common_blanks is None:
            self.common_blanks = line_blanks
        else:
            self.common_blanks &= line_blanks
        self.max_width = max(self.max_width, len(line))
        self.lines_seen += 1

    def ranges(self) -> List[Range]:
        """
        Convert the separators seen so far into data ranges.

        Runs of adjacent separators collapse; each stretch of non-separator
        positions between two separators becomes one ``(lo, hi)`` range. The last
        column is closed at the longest line seen.
        """
        if self.max_width == 0:
            return []
        markers = sorted(self.common_blanks or ())
        if not markers or markers[-1] < self.max_width:
            markers.append(self.max_width + 1)
        found: List[Range] = []
        last_blank = 0
        for marker in markers:
            if marker > last_blank + 1:
                found.append((last_blank + 1, marker - 1))
            last_blank = marker
        return found


def scan_handle(handle, blank: str = DEFAULT_BLANK, skip: int = 0, max_rows: int = 0,
                skip_blank: bool = True) -> List[Range]:
    """Scan an open text handle from its current position; see :func:`scan`."""
    if max_rows < 0:
        raise ValidationError(f"max_rows must be >= 0, got {max_rows}")
    source = LineSource(handle, skip_blank=skip_blank)
    source.skip(skip)
    scanner = ColumnScanner(blank)
    for line in source:
        scanner.add_line(line)
        if max_rows and scanner.lines_seen >= max_rows:
            break
    found = scanner.ranges()
    logger.debug("Inferred %d column(s) from %d line(s): %s", len(found), scanner.lines_seen, found)
    return found


def scan(source: Source, blank: str = DEFAULT_BLANK, *, skip: int = 0, max_rows: int = 0,
         skip_blank: bool = True, encoding_priority: List[str] | None = None) -> List[Range]:
    """
    Infer column ranges of a fixed-width file from whitespace alignment.

    :param source: Path or open text stream.
    :param blank: Characters treated as blank.
    :param skip: Lines discarded before sampling.
    :param max_rows: Lines sampled; ``0`` samples to the end of the stream.
    :param skip_blank: Whether empty lines are passed over instead of sampled.
    :param encoding_priority: Encodings tried when ``source`` is a path.
    :returns: 1-based inclusive ``(lo, hi)`` ranges; empty when nothing was sampled.
    """
    with open_source(source, encoding_priority) as handle:
        return scan_handle(handle, blank, skip=skip, max_rows=max_rows, skip_blank=skip_blank)


def scan_widths(source: Source, blank: str = DEFAULT_BLANK, **opts) -> List[int]:
    """Like :func:`scan` but returns the contiguous width vector, separators included."""
    found = scan(source, blank, **opts)
    if not found:
        return []
    widths, _ = ranges_to_widths(found)
    return widths
