"""
FWFInput: Reads fixed-width formatted (FWF) files into a column-major :class:`Table`.

The layout is one of: an explicit width vector, a set of 1-based inclusive
``(start, end)`` ranges, a JSON field spec, or ``"auto"`` / :class:`AutoLayout`
to infer the columns from whitespace alignment (two passes over the source).

:class FWFInput: Input class for FWF files.
:func read: Convenience wrapper returning the parsed table.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .base import BaseInput
from ..errors import MalformedLineError, ValidationError
from ..preprocessors.column_parsers import parse_column, resolve_parsers
from ..schema.fwf_schema_importer import FWFSpec, parse_fwf_spec
from ..schema.ranges import ranges_to_widths, validate_widths
from ..schema.scanner import scan, scan_handle
from ..types import DEFAULT_BLANK, AutoLayout, ColumnParser, ErrorPolicy, Table
from ..utils.encoding import is_stream, open_source
from ..utils.line_source import LineSource
from ..utils.names import header_names, synthetic_names

logger = logging.getLogger(__name__)


def emit_error(message: str, policy: ErrorPolicy, line_number: int = 0) -> None:
    """Route a malformed-line event through the error policy."""
    if policy is ErrorPolicy.FAIL:
        raise MalformedLineError(message, line_number)
    if policy is ErrorPolicy.WARN:
        logger.warning(message)


@dataclass
class ResolvedLayout:
    widths: List[int]
    keep: Optional[List[bool]] = None
    names: Optional[List[str]] = None
    parsers: Optional[List[ColumnParser]] = None

    @property
    def retained(self) -> List[int]:
        if self.keep is None:
            return list(range(len(self.widths)))
        return [index for index, kept in enumerate(self.keep) if kept]


def _is_auto(layout: Any) -> bool:
    return isinstance(layout, AutoLayout) or (isinstance(layout, str) and layout.lower() == "auto")


def _from_ranges(ranges: Sequence[Sequence[int]]) -> ResolvedLayout:
    widths, keep = ranges_to_widths(ranges)
    if not widths:
        raise ValidationError("At least one column range is required")
    return ResolvedLayout(widths=widths, keep=keep)


def resolve_layout(layout: Any, keep: Optional[Sequence[bool]] = None) -> ResolvedLayout:
    """
    Turn a non-auto layout argument into widths plus an optional keep mask.

    :raises ValidationError: If the layout is empty or inconsistent with ``keep``.
    """
    if isinstance(layout, dict):
        layout = parse_fwf_spec(layout)
    if isinstance(layout, FWFSpec):
        if keep is not None:
            raise ValidationError("A keep mask can only be combined with explicit widths")
        resolved = _from_ranges(layout.ranges)
        resolved.names = list(layout.names)
        resolved.parsers = list(layout.parsers)
        return resolved
    if isinstance(layout, (str, bytes)) or not isinstance(layout, Sequence):
        raise ValidationError(f"Unsupported layout: {layout!r}")
    if layout and all(isinstance(item, int) for item in layout):
        widths = validate_widths(layout)
        if keep is None:
            return ResolvedLayout(widths=widths)
        keep = [bool(flag) for flag in keep]
        if len(keep) != len(widths):
            raise ValidationError(
                f"Keep mask has {len(keep)} entries but there are {len(widths)} widths")
        return ResolvedLayout(widths=widths, keep=keep)
    if keep is not None:
        raise ValidationError("A keep mask can only be combined with explicit widths")
    if not layout:
        raise ValidationError("At least one column width is required")
    return _from_ranges(layout)


class FWFInput(BaseInput):
    """
    Input class for FWF (fixed-width formatted) files.

    Recognized ``self.opts`` keys:

    * ``header`` – first line holds column names (default ``True``)
    * ``header_strip`` – characters trimmed from header tokens (``None`` keeps them)
    * ``skip`` – lines discarded before the header / data
    * ``max_rows`` – data lines to read, ``0`` reads everything
    * ``skip_blank`` – pass over empty lines (default ``True``)
    * ``keep`` – boolean mask over explicit widths
    * ``parsers`` – one :class:`ColumnParser` for all columns or one per retained column
    * ``error_policy`` – ``fail`` | ``warn`` | ``ignore`` (default ``warn``)
    * ``encoding_priority`` – encodings tried when ``source`` is a path

    :param source: Path or open text stream.
    :param layout: Widths, ranges, field spec, or ``"auto"``.
    """

    def __init__(self, source: Any, layout: Any = "auto", **opts: Any):
        super().__init__(source, **opts)
        self.layout = layout

    def _validated_opts(self) -> Dict[str, Any]:
        opts = {
            "header": bool(self.opts.get("header", True)),
            "header_strip": self.opts.get("header_strip", DEFAULT_BLANK),
            "skip": self.opts.get("skip", 0),
            "max_rows": self.opts.get("max_rows", 0),
            "skip_blank": bool(self.opts.get("skip_blank", True)),
            "error_policy": ErrorPolicy.coerce(self.opts.get("error_policy", ErrorPolicy.WARN)),
        }
        for key in ("skip", "max_rows"):
            if not isinstance(opts[key], int) or opts[key] < 0:
                raise ValidationError(f"'{key}' must be a non-negative integer, got {opts[key]!r}")
        return opts

    def _encodings(self) -> Optional[List[str]]:
        if isinstance(self.layout, FWFSpec) and self.layout.encoding:
            return [self.layout.encoding]
        if isinstance(self.layout, dict) and self.layout.get("encoding"):
            return [self.layout["encoding"]]
        return self.opts.get("encoding_priority")

    def _scan_layout(self, opts: Dict[str, Any]) -> ResolvedLayout:
        """First pass of an auto read: infer ranges from the source itself."""
        if self.opts.get("keep") is not None:
            raise ValidationError("A keep mask can only be combined with explicit widths")
        auto = self.layout if isinstance(self.layout, AutoLayout) else AutoLayout()
        sample_rows = auto.max_rows
        if not sample_rows and opts["max_rows"]:
            sample_rows = opts["max_rows"] + (1 if opts["header"] else 0)
        scan_opts = dict(skip=opts["skip"], max_rows=sample_rows, skip_blank=opts["skip_blank"])
        if is_stream(self.source):
            seekable = getattr(self.source, "seekable", None)
            if seekable is None or not seekable():
                raise ValidationError("Automatic layout detection needs a path or a seekable stream")
            start = self.source.tell()
            ranges = scan_handle(self.source, auto.blank, **scan_opts)
            self.source.seek(start)
        else:
            ranges = scan(self.source, auto.blank, encoding_priority=self._encodings(), **scan_opts)
        if not ranges:
            raise ValidationError(f"No columns could be inferred from {self.source!r}")
        return _from_ranges(ranges)

    def read_table(self) -> Table:
        """
        Read the source according to the layout and options.

        Malformed header or data lines go through the error policy; under
        ``warn`` and ``ignore`` their partial fields are kept.

        :return: Column-major table; row count equals data lines read.
        :raises ValidationError: On invalid layout or options, before reading data.
        :raises MalformedLineError: Under the ``fail`` policy.
        """
        opts = self._validated_opts()
        if _is_auto(self.layout):
            layout = self._scan_layout(opts)
        else:
            layout = resolve_layout(self.layout, self.opts.get("keep"))
        retained = layout.retained
        parsers = resolve_parsers(
            self.opts["parsers"] if self.opts.get("parsers") is not None else layout.parsers,
            len(retained),
        )
        policy = opts["error_policy"]
        with open_source(self.source, self._encodings()) as handle:
            line_source = LineSource(handle, skip_blank=opts["skip_blank"])
            line_source.skip(opts["skip"])
            if opts["header"]:
                parsed = line_source.next_fields(layout.widths)
                if parsed is None or parsed.malformed:
                    emit_error("Header was required and is malformed", policy, 0)
                tokens = [parsed.fields[index] for index in retained] if parsed else []
                names = header_names(tokens, len(retained), opts["header_strip"])
            else:
                names = synthetic_names(len(retained))
            if layout.names is not None:
                names = layout.names

            raw_columns: List[List[str]] = [[] for _ in retained]
            malformed_rows: List[int] = []
            row = 0
            while opts["max_rows"] == 0 or row < opts["max_rows"]:
                parsed = line_source.next_fields(layout.widths)
                if parsed is None:
                    break
                row += 1
                if parsed.malformed:
                    malformed_rows.append(row)
                    emit_error(f"Malformed actual data line number {row}", policy, row)
                for column, index in zip(raw_columns, retained):
                    column.append(parsed.fields[index])

        columns = [parse_column(parser, values) for parser, values in zip(parsers, raw_columns)]
        return Table(names=names, columns=columns, malformed_rows=malformed_rows)


def read(source: Any, layout: Any, **opts: Any) -> Table:
    """
    Read a fixed-width file or stream.

    :param source: Path or open text stream.
    :param layout: Width vector (``[3, 5, 2]``), ranges (``[(1, 3), (5, 9)]``),
        a field spec (dict or :class:`FWFSpec`), ``"auto"`` or :class:`AutoLayout`.
    :param opts: See :class:`FWFInput`.
    :return: The parsed table.
    """
    return FWFInput(source, layout, **opts).read_table()
