# src/fwfio/preprocessors/type_coercion.py

from __future__ import annotations
from typing import Any, List, Pattern, Sequence, Union

from .base import Preprocessor

NaRule = Union[str, Pattern[str]]


def _is_na(value: Any, na: NaRule) -> bool:
    if value is None:
        return True
    if not isinstance(value, str):
        return False
    if isinstance(na, str):
        return value == na
    return na.fullmatch(value) is not None


def _parses(cast, token: str) -> bool:
    if "_" in token:
        return False
    try:
        cast(token)
    except (TypeError, ValueError):
        return False
    return True


def impute(values: Sequence[Any], na: NaRule = "") -> List[Any]:
    """Best-effort whole-column numeric cast.

    Values that are ``None`` or match ``na`` (a literal string, or a compiled
    pattern that must match the whole value) become ``None``. The remaining
    values are converted to ``int`` if all of them parse as integers, else to
    ``float`` if all of them parse as floats; otherwise they are kept as strings.
    """
    present = [str(value) for value in values if not _is_na(value, na)]
    if all(_parses(int, value) for value in present):
        cast = int
    elif all(_parses(float, value) for value in present):
        cast = float
    else:
        cast = str
    return [None if _is_na(value, na) else cast(str(value)) for value in values]


class Imputation(Preprocessor):
    """Column preprocessor running :func:`impute` on every column.

    :param na: Literal missing-value marker or compiled pattern.
    """

    def __init__(self, na: NaRule = "") -> None:
        self.na = na

    def apply(self, values: Sequence[Any]) -> List[Any]:
        return impute(values, self.na)
