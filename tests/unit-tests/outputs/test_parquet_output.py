import json
from pathlib import Path

import polars as pl
import pyarrow.parquet as pq
import pytest

from fwfio.errors import ValidationError
from fwfio.outputs.parquet_output import PQOutput
from fwfio.types import Table


def _table() -> Table:
    return Table(names=["id", "name"], columns=[[1, 2, None], ["a", "b", "c"]], malformed_rows=[3])


def test_vectorized_write_and_manifest(tmp_out: Path):
    out = PQOutput(str(tmp_out), table_name="people.txt")
    out.open()
    out.write_table(_table())
    out.close()

    df = pl.read_parquet(tmp_out / "people.parquet")
    assert df.columns == ["id", "name"]
    assert df["id"].to_list() == [1, 2, None]
    manifest = json.loads((tmp_out / "_manifest.json").read_text(encoding="utf-8"))
    assert manifest == {"rows": 3, "columns": 2, "malformed_rows": [3]}


def test_arrow_mode_uses_row_groups(tmp_out: Path):
    out = PQOutput(str(tmp_out), mode="arrow", chunk_size=2, compression="uncompressed")
    out.open()
    out.write_table(_table())
    out.close()

    parquet_file = pq.ParquetFile(tmp_out / "data.parquet")
    assert parquet_file.metadata.num_rows == 3
    assert parquet_file.metadata.num_row_groups == 2
    assert parquet_file.read().column("name").to_pylist() == ["a", "b", "c"]


def test_rejects_unknown_options(tmp_out: Path):
    with pytest.raises(ValidationError, match="compression"):
        PQOutput(str(tmp_out), compression="zip")
    with pytest.raises(ValidationError, match="mode"):
        PQOutput(str(tmp_out), mode="streaming")
