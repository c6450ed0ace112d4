"""Read and write fixed-width format (FWF) text files."""
from __future__ import annotations

__version__ = "0.3.0"

from .errors import MalformedLineError, ValidationError
from .types import DEFAULT_BLANK, AutoLayout, ColumnParser, ErrorPolicy, Table
from .schema.ranges import ranges_to_widths
from .schema.scanner import scan, scan_widths
from .schema.fwf_schema_importer import FWFSpec, load_fwf_spec
from .inputs.fwf_input import FWFInput, read
from .outputs.fwf_output import FWFOutput, column_widths, write
from .preprocessors.type_coercion import impute

__all__ = [
    "__version__",
    "AutoLayout",
    "ColumnParser",
    "DEFAULT_BLANK",
    "ErrorPolicy",
    "FWFInput",
    "FWFOutput",
    "FWFSpec",
    "MalformedLineError",
    "Table",
    "ValidationError",
    "column_widths",
    "impute",
    "load_fwf_spec",
    "ranges_to_widths",
    "read",
    "scan",
    "scan_widths",
    "write",
]
