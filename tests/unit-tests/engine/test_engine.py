import polars as pl
import pytest

from fwfio.engine.engine import Engine
from fwfio.types import Table


class DummyInput:
    def __init__(self, source, **opts):
        self.opts = opts

    def read_table(self):
        return Table(names=["n"], columns=[["1", "2"]])


class DummyOutput:
    instances = []

    def __init__(self, dest, **opts):
        self.dest = dest
        self.opts = opts
        self.events = []
        self.tables = []
        DummyOutput.instances.append(self)

    def open(self):
        self.events.append("open")

    def write_table(self, table):
        self.events.append("write")
        self.tables.append(table)

    def close(self):
        self.events.append("close")


@pytest.fixture
def dummy_engine(monkeypatch):
    DummyOutput.instances.clear()
    monkeypatch.setattr("fwfio.engine.engine.get_input_cls", lambda kind: DummyInput)
    monkeypatch.setattr("fwfio.engine.engine.get_output_cls", lambda kind: DummyOutput)
    return Engine("fwf", "parquet", preprocessors=["impute"], output_opts={"mode": "arrow"})


def test_run_applies_preprocessors_and_lifecycle(dummy_engine):
    table = dummy_engine.run("source", "dest")
    out = DummyOutput.instances[-1]
    assert out.events == ["open", "write", "close"]
    assert out.opts == {"mode": "arrow"}
    assert table.columns == [[1, 2]]


def test_output_closed_when_write_fails(dummy_engine, monkeypatch):
    def boom(self, table):
        raise OSError("disk full")

    monkeypatch.setattr(DummyOutput, "write_table", boom)
    with pytest.raises(OSError):
        dummy_engine.run("source", "dest")
    assert DummyOutput.instances[-1].events == ["open", "close"]


def test_engine_end_to_end_parquet(people_path, tmp_out):
    eng = Engine("fwf", "parquet", preprocessors=["impute"], layout="auto",
                 output_opts={"table_name": str(people_path)})
    eng.run(str(people_path), str(tmp_out))
    df = pl.read_parquet(tmp_out / "people.parquet")
    assert df["id"].to_list() == [1, 2, 3]
    assert df["amount"].to_list() == [10.5, 7.0, 120.25]
    assert df["name"].to_list() == ["Alice", "Bob", "Christine"]


def test_engine_end_to_end_fwf(people_path, tmp_path):
    target = tmp_path / "aligned.txt"
    Engine("fwf", "fwf", layout=[(1, 2), (5, 13), (15, 20)]).run(people_path, target)
    assert target.read_text(encoding="utf-8").splitlines() == [
        "id name      amount",
        "1  Alice     10.5",
        "2  Bob       7",
        "3  Christine 120.25",
    ]
