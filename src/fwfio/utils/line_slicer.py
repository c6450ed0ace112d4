from __future__ import annotations
from typing import Sequence

from ..types import ParsedLine


def slice_line(line: str, widths: Sequence[int]) -> ParsedLine:
    """
    Split a line into consecutive fields of the given widths.

    Widths are counted in code points. When the line ends inside a column the
    column keeps whatever text remains (possibly empty) and the line is flagged
    as malformed, unless that column is the last one: a missing tail of the
    final column is how lines without trailing padding normally end.

    :param str line: Line text without its line terminator.
    :param widths: Column widths, left to right.
    :returns: ``ParsedLine(fields, malformed)`` with one field per width.
    :rtype: ParsedLine
    """
    fields = []
    malformed = False
    line_length = len(line)
    last_index = len(widths) - 1
    cursor = 0
    for index, width in enumerate(widths):
        end = cursor + width
        if end > line_length:
            end = line_length
            if index != last_index:
                malformed = True
        fields.append(line[cursor:end])
        cursor = end
    return ParsedLine(fields, malformed)
