"""Parquet output writer.

Writes one ``<table_name>.parquet`` file plus ``_manifest.json`` under
``dest``. Default mode is vectorized via ``polars``; ``mode='arrow'`` builds the
Arrow table directly and hands it to ``pyarrow.parquet.write_table`` with bounded row groups.

Manifest counters: ``rows``, ``columns``, ``malformed_rows`` (1-based data row
numbers that were short for the layout).
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Literal

import pyarrow as pa
import pyarrow.parquet as pq

from .base import BaseOutput
from ..errors import ValidationError
from ..types import Table


class PQOutput(BaseOutput):
    """Parquet output writer.

    :param dest: Output directory path (created if missing).
    :param mode: ``vectorized`` or ``arrow``.
    :param chunk_size: Row group size in ``arrow`` mode.
    :param compression: Parquet compression codec (default ``snappy``).
    :param table_name: Base name of the written file.
    """

    def __init__(
        self,
        dest: str,
        *,
        mode: str = "vectorized",
        chunk_size: int = 50_000,
        compression: str = "snappy",
        table_name: str = "data",
        **kwargs: Any,
    ):
        super().__init__(dest, **kwargs)
        allowed_comp: set[str] = {"snappy", "gzip", "brotli", "zstd", "lz4", "uncompressed"}
        if compression not in allowed_comp:
            raise ValidationError(f"Unsupported compression '{compression}'. Allowed: {sorted(allowed_comp)}")
        self.compression: Literal["snappy", "gzip", "brotli", "zstd", "lz4", "uncompressed"] = compression  # type: ignore[assignment]
        self.mode = mode.lower()
        if self.mode not in {"vectorized", "arrow"}:
            raise ValidationError("mode must be 'vectorized' or 'arrow'")
        self.chunk_size = chunk_size
        self.table_name = Path(table_name).stem or "data"
        self.counters: Dict[str, Any] = {"rows": 0, "columns": 0, "malformed_rows": []}

    def open(self) -> None:  # type: ignore[override]
        self.output_dir = Path(self.dest)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write_table(self, table: Table) -> None:  # type: ignore[override]
        target = self.output_dir / f"{self.table_name}.parquet"
        if self.mode == "vectorized":
            table.to_polars().write_parquet(target, compression=self.compression)
        else:
            compression = None if self.compression == "uncompressed" else self.compression
            pq.write_table(pa.Table.from_pydict(table.to_dict()), target, compression=compression, row_group_size=self.chunk_size)
        self.counters["rows"] += table.row_count
        self.counters["columns"] = len(table.names)
        self.counters["malformed_rows"].extend(table.malformed_rows)

    def close(self) -> None:
        manifest_path = self.output_dir / "_manifest.json"
        manifest_path.write_text(json.dumps(self.counters, indent=2), encoding="utf-8")
