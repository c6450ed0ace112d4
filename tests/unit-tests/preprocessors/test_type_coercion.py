import re

from fwfio.preprocessors.type_coercion import Imputation, impute
from fwfio.types import Table


def test_impute_integers():
    assert impute(["1", "-2", "30"]) == [1, -2, 30]


def test_impute_floats_when_any_value_is_not_integer():
    assert impute(["1", "2.5", ""]) == [1.0, 2.5, None]


def test_impute_leaves_strings():
    assert impute(["1", "abc", "NA"], na="NA") == ["1", "abc", None]


def test_impute_handles_none_and_literal_na():
    assert impute([None, "NA", "7"], na="NA") == [None, None, 7]


def test_impute_with_pattern():
    na = re.compile(r"(?i)n/?a|-+")
    assert impute(["3", "N/A", "---", "na", "4"], na=na) == [3, None, None, None, 4]


def test_impute_keeps_underscored_digits_as_text():
    assert impute(["1_0", "2"]) == ["1_0", "2"]
    assert impute(["1_0.5", "2.5"]) == ["1_0.5", "2.5"]


def test_impute_all_missing():
    assert impute(["", None]) == [None, None]


def test_impute_non_string_values():
    assert impute([1.5, "2"]) == [1.5, 2.0]


def test_imputation_preprocessor_processes_every_column():
    table = Table(names=["a", "b"], columns=[["1", ""], ["x", "2.0"]], malformed_rows=[2])
    out = Imputation(na="").process_table(table)
    assert out.columns == [[1, None], ["x", "2.0"]]
    assert out.malformed_rows == [2]
    assert table.columns == [["1", ""], ["x", "2.0"]]
