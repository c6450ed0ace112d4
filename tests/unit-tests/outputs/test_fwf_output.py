import io

import polars as pl
import pytest

from fwfio.errors import ValidationError
from fwfio.inputs.fwf_input import read
from fwfio.outputs.fwf_output import FWFOutput, column_widths, format_line, write
from fwfio.types import Table


def _written(*args, **kwargs) -> str:
    sink = io.StringIO()
    write(sink, *args, **kwargs)
    return sink.getvalue()


def test_short_column_renders_na():
    out = _written([["1", "22"], ["x"]], separator_width=1, na_string="NA")
    assert out == "1  x\n22 NA\n"


def test_header_and_widths():
    out = _written([["1", "22"], ["abc", "d"]], ["id", "v"])
    assert out == "id v\n1  abc\n22 d\n"


def test_column_widths_rules():
    assert column_widths([["1", "22"], ["x"]], None, "NA") == [2, 2]
    assert column_widths([["1"], ["x"]], ["long_name", "y"], "NA") == [9, 1]
    assert column_widths([[None, "a"]], None, "MISSING") == [7]


def test_separator_zero_and_pad_char():
    assert _written([["a", "bb"], ["1", "2"]], separator_width=0) == "a 1\nbb2\n"
    assert _written([["a"], ["1"]], separator_width=2, pad_char=".") == "a..1\n"


def test_none_values_render_as_na():
    assert _written([["a", None], ["1", "2"]], na_string="-") == "a 1\n- 2\n"


def test_non_string_values_are_rendered():
    assert _written([[1, 22], [2.5, True]]) == "1  2.5\n22 True\n"


def test_table_mapping_and_dataframe_inputs():
    table = Table(names=["k", "v"], columns=[["a", "b"], ["1", "2"]])
    expected = "k v\na 1\nb 2\n"
    assert _written(table) == expected
    assert _written({"k": ["a", "b"], "v": ["1", "2"]}) == expected
    assert _written(pl.DataFrame({"k": ["a", "b"], "v": ["1", "2"]})) == expected
    assert _written(table, ["K", "V"]) == "K V\na 1\nb 2\n"


def test_no_columns_writes_nothing():
    assert _written([]) == ""


@pytest.mark.parametrize("kwargs, message", [
    ({"separator_width": -1}, "separator_width"),
    ({"separator_width": True}, "separator_width"),
    ({"pad_char": ".."}, "pad_char"),
    ({"pad_char": ""}, "pad_char"),
])
def test_invalid_options(kwargs, message):
    with pytest.raises(ValidationError, match=message):
        _written([["a"]], **kwargs)


def test_names_mismatch_leaves_existing_file(tmp_path):
    target = tmp_path / "out.txt"
    target.write_text("keep me\n", encoding="utf-8")
    with pytest.raises(ValidationError, match="names"):
        write(target, [["a"], ["b"]], ["only_one"])
    assert target.read_text(encoding="utf-8") == "keep me\n"


def test_write_to_path(tmp_path):
    target = tmp_path / "out.txt"
    write(target, [["a", "b"]], ["col"])
    assert target.read_text(encoding="utf-8") == "col\na\nb\n"


def test_write_then_read_round_trip():
    names = ["id", "name"]
    columns = [["1", "22", "333"], ["a", "bb"]]
    sink = io.StringIO()
    write(sink, columns, names, na_string="")
    assert sink.getvalue() == "id  name\n1   a\n22  bb\n333 \n"

    widths = [w + 1 for w in column_widths(columns, names, "")]
    table = read(io.StringIO(sink.getvalue()), widths)
    assert table.names == names
    assert table.columns == [["1", "22", "333"], ["a", "bb", ""]]
    assert table.malformed_rows == []


def test_write_row_major_sequence():
    data = [["1", "a"], ["22", "bb"], ["333"]]
    out = _written(data, ["id", "name"], rows=True)
    assert out == "id  name\n1   a\n22  bb\n333 \n"
    assert _written(data, rows=True, na_string="NA") == "1   a\n22  bb\n333 NA\n"


def test_rows_flag_rejects_tables_and_scalar_rows():
    with pytest.raises(ValidationError, match="rows=True"):
        _written({"a": ["1"]}, rows=True)
    with pytest.raises(ValidationError, match="rows=True"):
        _written(Table(names=["a"], columns=[["1"]]), rows=True)
    with pytest.raises(ValidationError, match="rows=True"):
        _written(["ab", "cd"], rows=True)


def test_format_line():
    assert format_line(["a", "b"], [3, 3]) == "a  b\n"
    assert format_line([], []) == "\n"


def test_fwf_output_lifecycle(tmp_path):
    target = tmp_path / "plugin.txt"
    out = FWFOutput(str(target), na_string="NA")
    out.open()
    out.write_table(Table(names=["a", "b"], columns=[["1", None], ["x", "y"]]))
    out.close()
    assert target.read_text(encoding="utf-8") == "a  b\n1  x\nNA y\n"
    assert out.rows_written == 2


def test_fwf_output_stream_without_header():
    sink = io.StringIO()
    out = FWFOutput(sink, write_header=False)
    out.open()
    out.write_table(Table(names=["a"], columns=[["1", "2"]]))
    out.close()
    assert sink.getvalue() == "1\n2\n"
    assert not sink.closed


def test_fwf_output_write_before_open():
    with pytest.raises(RuntimeError):
        FWFOutput(io.StringIO()).write_table(Table(names=[], columns=[]))
