"""Fixed-width text writer.

Column widths are computed from the data itself: each column is as wide as its
longest rendered value or header name, plus the separator. Columns shorter than
the tallest one render their missing trailing rows as ``na_string``.
"""
from __future__ import annotations
import os
from typing import Any, List, Mapping, Optional, Sequence, TextIO, Tuple

import polars as pl

from .base import BaseOutput
from ..errors import ValidationError
from ..types import Table
from ..utils.encoding import Source, open_sink


def render(value: Any, na_string: str) -> str:
    return na_string if value is None else str(value)


def column_widths(columns: Sequence[Sequence[Any]], names: Optional[Sequence[Any]] = None,
                  na_string: str = "") -> List[int]:
    """
    Width needed to render each column, separator excluded.

    The width is the longest of: the header name, any rendered value, and
    ``na_string`` when the column is shorter than the tallest column.

    :raises ValidationError: If ``names`` does not match the column count.
    """
    if names is not None and len(names) != len(columns):
        raise ValidationError(f"Got {len(names)} names for {len(columns)} columns")
    tallest = max((len(column) for column in columns), default=0)
    widths = []
    for index, column in enumerate(columns):
        width = len(render(names[index], na_string)) if names is not None else 0
        for value in column:
            width = max(width, len(render(value, na_string)))
        if len(column) < tallest:
            width = max(width, len(na_string))
        widths.append(width)
    return widths


def format_line(values: Sequence[str], widths: Sequence[int], pad_char: str = " ") -> str:
    """Left-justify each value in its width; the last value is written unpadded."""
    if not values:
        return "\n"
    padded = [value + pad_char * (width - len(value)) for value, width in zip(values[:-1], widths)]
    return "".join(padded) + values[-1] + "\n"


def _transpose(rows: Sequence[Sequence[Any]]) -> List[List[Any]]:
    """Turn rows into columns; short rows leave ``None`` in the trailing cells."""
    rows = list(rows)
    width = max((len(row) for row in rows), default=0)
    return [[row[index] if index < len(row) else None for row in rows] for index in range(width)]


def _columns_and_names(data: Any, names: Optional[Sequence[Any]],
                       rows: bool = False) -> Tuple[List[Sequence[Any]], Optional[List[Any]]]:
    if rows and isinstance(data, (Table, pl.DataFrame, Mapping)):
        raise ValidationError(f"rows=True only applies to a plain sequence of rows, not {type(data).__name__}")
    if isinstance(data, Table):
        return list(data.columns), list(names) if names is not None else list(data.names)
    if isinstance(data, pl.DataFrame):
        columns = [series.to_list() for series in data.get_columns()]
        return columns, list(names) if names is not None else list(data.columns)
    if isinstance(data, Mapping):
        return list(data.values()), list(names) if names is not None else list(data.keys())
    if isinstance(data, (str, bytes)) or not isinstance(data, Sequence):
        raise ValidationError(f"Cannot write {type(data).__name__}; expected a table or a sequence of columns")
    if rows:
        if any(isinstance(row, (str, bytes)) or not isinstance(row, Sequence) for row in data):
            raise ValidationError("rows=True expects every row to be a sequence of values")
        return _transpose(data), list(names) if names is not None else None
    return list(data), list(names) if names is not None else None


def _check_format_opts(separator_width: int, pad_char: str) -> None:
    if isinstance(separator_width, bool) or not isinstance(separator_width, int) or separator_width < 0:
        raise ValidationError(f"separator_width must be a non-negative integer, got {separator_width!r}")
    if not isinstance(pad_char, str) or len(pad_char) != 1:
        raise ValidationError(f"pad_char must be a single character, got {pad_char!r}")


def write_lines(handle: TextIO, columns: Sequence[Sequence[Any]], names: Optional[Sequence[Any]],
                separator_width: int = 1, pad_char: str = " ", na_string: str = "") -> int:
    """Write the header (if any) and all rows to ``handle``; returns the data row count."""
    if not columns:
        return 0
    widths = [width + separator_width for width in column_widths(columns, names, na_string)]
    if names is not None:
        handle.write(format_line([render(name, na_string) for name in names], widths, pad_char))
    tallest = max(len(column) for column in columns)
    for index in range(tallest):
        values = [render(column[index], na_string) if index < len(column) else na_string
                  for column in columns]
        handle.write(format_line(values, widths, pad_char))
    return tallest


class FWFOutput(BaseOutput):
    """Fixed-width output plugin.

    :param dest: Path (truncated on open) or writable text stream.
    :param separator_width: Spaces between columns.
    :param pad_char: Fill character.
    :param na_string: Text written for ``None`` and for missing trailing rows.
    :param write_header: Emit the table's column names as the first line.
    """

    def __init__(self, dest: Source, *, separator_width: int = 1, pad_char: str = " ",
                 na_string: str = "", write_header: bool = True, **opts: Any):
        super().__init__(dest, **opts)
        _check_format_opts(separator_width, pad_char)
        self.separator_width = separator_width
        self.pad_char = pad_char
        self.na_string = na_string
        self.write_header = write_header
        self._owns_handle = False
        self.handle: Optional[TextIO] = None
        self.rows_written = 0

    def open(self) -> None:
        if hasattr(self.dest, "write"):
            self.handle = self.dest
            return
        self.handle = open(os.fspath(self.dest), "w", encoding="utf-8", newline="")
        self._owns_handle = True

    def write_table(self, table: Table) -> None:
        if self.handle is None:
            raise RuntimeError("FWFOutput.open() must be called before write_table()")
        names = table.names if self.write_header else None
        self.rows_written += write_lines(self.handle, table.columns, names, self.separator_width,
                                         self.pad_char, self.na_string)

    def close(self) -> None:
        if self._owns_handle and self.handle is not None:
            self.handle.close()
        self._owns_handle = False
        self.handle = None


def write(sink: Source, data: Any, names: Optional[Sequence[Any]] = None, *, separator_width: int = 1,
          pad_char: str = " ", na_string: str = "", rows: bool = False) -> None:
    """
    Write columnar data as aligned fixed-width text.

    :param sink: Path (opened in write/truncate mode and closed afterwards) or text stream.
    :param data: :class:`Table`, polars DataFrame, mapping of name to values, or a
        sequence of columns. Columns may differ in length.
    :param names: Header names; taken from ``data`` when it carries them. ``None``
        with plain columns writes no header.
    :param separator_width: Number of ``pad_char`` between columns.
    :param pad_char: Fill character.
    :param na_string: Rendered for ``None`` values and missing trailing rows.
    :param rows: Treat a plain sequence in ``data`` as rows rather than columns;
        short rows are padded with ``na_string``.
    :raises ValidationError: On invalid options or a names/columns mismatch; nothing is written.
    """
    _check_format_opts(separator_width, pad_char)
    columns, resolved_names = _columns_and_names(data, names, rows)
    # fail before the sink is truncated
    column_widths(columns, resolved_names, na_string)
    with open_sink(sink) as handle:
        write_lines(handle, columns, resolved_names, separator_width, pad_char, na_string)
