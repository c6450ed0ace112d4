import pytest

from fwfio.errors import ValidationError
from fwfio.preprocessors.column_parsers import parse_column, parse_value, resolve_parsers
from fwfio.types import ColumnParser


@pytest.mark.parametrize("parser, raw, expected", [
    (ColumnParser.RAW, " a ", " a "),
    (ColumnParser.STR, " a ", "a"),
    (ColumnParser.NASTR, "   ", None),
    (ColumnParser.NASTR, " b", "b"),
    (ColumnParser.INT, " 42 ", 42),
    (ColumnParser.INT, "4.2", None),
    (ColumnParser.FLOAT, "4.2 ", 4.2),
    (ColumnParser.FLOAT, "", None),
    (ColumnParser.INT, "1_000", None),
    (ColumnParser.FLOAT, "1_0.5", None),
])
def test_parse_value(parser, raw, expected):
    assert parse_value(parser, raw) == expected


def test_resolve_parsers_defaults_and_broadcast():
    assert resolve_parsers(None, 2) == [ColumnParser.STR, ColumnParser.STR]
    assert resolve_parsers("INT", 2) == [ColumnParser.INT, ColumnParser.INT]
    assert resolve_parsers(["raw", ColumnParser.FLOAT], 2) == [ColumnParser.RAW, ColumnParser.FLOAT]


def test_resolve_parsers_errors():
    with pytest.raises(ValidationError, match="Expected 3"):
        resolve_parsers(["raw"], 3)
    with pytest.raises(ValidationError, match="Unknown column parser"):
        resolve_parsers(["date"], 1)


def test_parse_column():
    assert parse_column(ColumnParser.INT, ["1", "x"]) == [1, None]
