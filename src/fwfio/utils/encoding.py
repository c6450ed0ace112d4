from __future__ import annotations
import os
from contextlib import contextmanager
from typing import Iterator, List, TextIO, Union

Source = Union[str, "os.PathLike[str]", TextIO]

_DEFAULT_ENCODINGS = ["utf-8-sig", "utf-8", "cp1252", "latin-1"]
_DECODE_CHUNK = 1 << 16


def is_stream(source) -> bool:
    return hasattr(source, "readline")


def open_text_auto(path: str, encodings: List[str] | None = None) -> TextIO:
    """
    Open a text file with the first encoding from ``encodings`` that decodes it.

    Each candidate must decode the whole file, read in chunks; the handle is
    rewound before it is returned. Falls back to utf-8 with replacement characters.

    :param path: File to open.
    :param encodings: Encodings to try in order.
    :return: Open text handle; line endings are left untranslated.
    :raises OSError: If the file cannot be opened.
    """
    encs = encodings or _DEFAULT_ENCODINGS
    for enc in encs:
        try:
            fh = open(path, "r", encoding=enc, newline="")
        except LookupError:
            continue
        try:
            while fh.read(_DECODE_CHUNK):
                pass
            fh.seek(0)
            return fh
        except UnicodeDecodeError:
            fh.close()
            continue
    return open(path, "r", encoding="utf-8", errors="replace", newline="")


@contextmanager
def open_source(source: Source, encodings: List[str] | None = None) -> Iterator[TextIO]:
    """Yield a readable text handle; paths are opened here and always closed on exit."""
    if is_stream(source):
        yield source  # caller owns the stream
        return
    fh = open_text_auto(os.fspath(source), encodings)
    try:
        yield fh
    finally:
        fh.close()


@contextmanager
def open_sink(sink: Source, encoding: str = "utf-8") -> Iterator[TextIO]:
    """Yield a writable text handle; paths are truncated, written and always closed."""
    if hasattr(sink, "write"):
        yield sink
        return
    fh = open(os.fspath(sink), "w", encoding=encoding, newline="")
    try:
        yield fh
    finally:
        fh.close()
