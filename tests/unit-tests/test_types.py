import pytest

from fwfio.errors import ValidationError
from fwfio.types import AutoLayout, ColumnParser, DEFAULT_BLANK, ErrorPolicy, Table


def test_table_mapping_access():
    table = Table(names=["a", "b"], columns=[["1", "2"], ["x", "y"]])
    assert table["b"] == ["x", "y"]
    assert "a" in table and "z" not in table
    assert list(table) == ["a", "b"]
    assert len(table) == 2
    assert table.row_count == 2
    with pytest.raises(KeyError):
        table["z"]


def test_table_rows_view_and_polars():
    table = Table(names=["a", "b"], columns=[[1, 2], ["x", None]])
    assert list(table.rows()) == [{"a": 1, "b": "x"}, {"a": 2, "b": None}]
    df = table.to_polars()
    assert df.shape == (2, 2)
    assert df["b"].to_list() == ["x", None]


def test_table_rejects_mismatched_names():
    with pytest.raises(ValidationError):
        Table(names=["a"], columns=[])


def test_error_policy_coerce():
    assert ErrorPolicy.coerce("WARN") is ErrorPolicy.WARN
    assert ErrorPolicy.coerce("error") is ErrorPolicy.FAIL
    assert ErrorPolicy.coerce(ErrorPolicy.IGNORE) is ErrorPolicy.IGNORE


def test_column_parser_coerce():
    assert ColumnParser.coerce("Float") is ColumnParser.FLOAT


def test_auto_layout_defaults():
    auto = AutoLayout()
    assert auto.blank == DEFAULT_BLANK
    assert auto.max_rows == 0
