from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, NamedTuple, Tuple

import polars as pl

from .errors import ValidationError

Range = Tuple[int, int]

# Characters treated as blank when inferring column separators or trimming headers.
DEFAULT_BLANK = " \t\n\v\f\r"


class ErrorPolicy(Enum):
    """Reaction to malformed header or data lines."""

    FAIL = "fail"
    WARN = "warn"
    IGNORE = "ignore"

    @classmethod
    def coerce(cls, value: "ErrorPolicy | str") -> "ErrorPolicy":
        if isinstance(value, cls):
            return value
        token = str(value).strip().lower()
        if token == "error":
            return cls.FAIL
        try:
            return cls(token)
        except ValueError:
            raise ValidationError(f"Unknown error policy '{value}'. Allowed: fail, warn, ignore")


class ColumnParser(Enum):
    """Conversion applied to each raw field of a retained column.

    * ``raw`` – the sliced text, untouched
    * ``str`` – whitespace stripped
    * ``nastr`` – whitespace stripped, empty values become ``None``
    * ``int`` – ``int`` or ``None`` when the value does not parse
    * ``float`` – ``float`` or ``None`` when the value does not parse
    """

    RAW = "raw"
    STR = "str"
    NASTR = "nastr"
    INT = "int"
    FLOAT = "float"

    @classmethod
    def coerce(cls, value: "ColumnParser | str") -> "ColumnParser":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValidationError(f"Unknown column parser '{value}'. Allowed: {allowed}")


class ParsedLine(NamedTuple):
    fields: List[str]
    malformed: bool


@dataclass(frozen=True)
class AutoLayout:
    """Request column inference from whitespace alignment.

    :param blank: Characters considered blank when looking for separators.
    :param max_rows: Lines sampled by the scan (``0`` samples the whole data window).
    """

    blank: str = DEFAULT_BLANK
    max_rows: int = 0


@dataclass
class Table:
    """Column-major result of a read.

    ``names[i]`` labels ``columns[i]``; every column holds ``row_count`` values.
    """

    names: List[str]
    columns: List[List[Any]]
    malformed_rows: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.names) != len(self.columns):
            raise ValidationError(
                f"Table has {len(self.names)} names but {len(self.columns)} columns")

    def __getitem__(self, name: str) -> List[Any]:
        try:
            return self.columns[self.names.index(name)]
        except ValueError:
            raise KeyError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    @property
    def row_count(self) -> int:
        return max((len(column) for column in self.columns), default=0)

    def rows(self) -> Iterator[Dict[str, Any]]:
        """Yield one dict per row; columns shorter than the table yield ``None``."""
        for index in range(self.row_count):
            yield {
                name: (column[index] if index < len(column) else None)
                for name, column in zip(self.names, self.columns)
            }

    def to_dict(self) -> Dict[str, List[Any]]:
        return {name: list(column) for name, column in zip(self.names, self.columns)}

    def to_polars(self):
        return pl.DataFrame(
            [pl.Series(name, column, strict=False) for name, column in zip(self.names, self.columns)]
        )
