from __future__ import annotations
from typing import Optional, Sequence, TextIO

from .line_slicer import slice_line
from ..types import ParsedLine


class LineSource:
    """
    Sequential line reader shared by the reader and the column scanner.

    Wraps an open text handle. Line terminators (``\\n``, ``\\r\\n``) are removed;
    a final line without a terminator is returned like any other. An empty line
    directly before end of stream is the trailing terminator and never a record.

    :param handle: Text handle positioned at the first line to consume.
    :param skip_blank: When true, empty lines are passed over. Lines holding only
        whitespace are not empty and are returned.
    """

    def __init__(self, handle: TextIO, skip_blank: bool = True):
        self.handle = handle
        self.skip_blank = skip_blank
        self._peeked: Optional[str] = None

    def _pull(self) -> str:
        if self._peeked is not None:
            raw, self._peeked = self._peeked, None
            return raw
        return self.handle.readline()

    def _at_end(self) -> bool:
        if self._peeked is None:
            self._peeked = self.handle.readline()
        return self._peeked == ""

    def skip(self, count: int) -> None:
        """Discard ``count`` lines unconditionally, blank or not."""
        for _ in range(count):
            if not self._pull():
                return

    def _read_raw(self) -> Optional[str]:
        raw = self._pull()
        if raw == "":
            return None
        if raw.endswith("\n"):
            raw = raw[:-1]
        if raw.endswith("\r"):
            raw = raw[:-1]
        # an empty final line terminates the stream rather than being a record
        if raw == "" and self._at_end():
            return None
        return raw

    def next_line(self) -> Optional[str]:
        """Return the next line honoring ``skip_blank``, or ``None`` at end of stream."""
        line = self._read_raw()
        while self.skip_blank and line == "":
            line = self._read_raw()
        return line

    def next_fields(self, widths: Sequence[int]) -> Optional[ParsedLine]:
        """Slice the next line into ``widths``; ``None`` once the stream is exhausted."""
        line = self.next_line()
        if line is None:
            return None
        return slice_line(line, widths)

    def __iter__(self):
        while True:
            line = self.next_line()
            if line is None:
                return
            yield line
