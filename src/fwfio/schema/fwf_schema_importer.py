from __future__ import annotations
import json
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..errors import ValidationError
from ..types import ColumnParser, Range
from .jsonschema_validator import Validator
from .ranges import validate_ranges


@dataclass
class FWFSpec:
    """Column layout declared by a JSON field spec."""

    names: List[str]
    ranges: List[Range]
    parsers: List[ColumnParser]
    encoding: Optional[str] = None


def calculate_field_length(field: Dict[str, Any]) -> int:
    """
    Calculate the length of a field based on its specification.

    :param dict field: The field specification dictionary.
    :returns: The length of the field.
    :rtype: int
    :raises ValidationError: If both 'length' and 'end' are specified, or neither is specified,
                             or if 'end' is less than 'start'.
    """
    length = field.get("length")
    end = field.get("end")
    if length is not None and end is not None:
        raise ValidationError(f"Field '{field['name']}' cannot have both 'length' and 'end'.")
    if length is not None:
        return length
    if end is not None:
        field_length = end - field["start"] + 1
        if field_length < 1:
            raise ValidationError(f"Field '{field['name']}' has invalid 'end' < 'start'.")
        return field_length
    raise ValidationError(f"Field '{field['name']}' must have either 'length' or 'end'.")


def parse_fwf_spec(document: Dict[str, Any]) -> FWFSpec:
    """
    Build an :class:`FWFSpec` from a decoded spec document.

    Expected keys:
        - encoding (str, optional): Encoding of the data file.
        - fields (list of dict): In file order, each with
            - name (str): Column name.
            - start (int): 1-based start position.
            - length (int) or end (int, 1-based inclusive), not both.
            - parser (str, optional): One of raw, str, nastr, int, float. Defaults to str.

    :raises ValidationError: If the document is malformed or the fields overlap.
    """
    Validator().validate(document)
    names: List[str] = []
    ranges: List[Range] = []
    parsers: List[ColumnParser] = []
    for field in document["fields"]:
        start = field["start"]
        names.append(field["name"])
        ranges.append((start, start + calculate_field_length(field) - 1))
        parsers.append(ColumnParser.coerce(field.get("parser", ColumnParser.STR)))
    if len(set(names)) != len(names):
        raise ValidationError("Field names in an FWF spec must be unique.")
    return FWFSpec(names=names, ranges=validate_ranges(ranges), parsers=parsers,
                   encoding=document.get("encoding"))


def load_fwf_spec(path: str | os.PathLike) -> FWFSpec:
    """Read and parse a JSON field spec file; a top-level ``x-fwf`` block is also accepted."""
    with open(path, "r", encoding="utf-8") as f:
        document = json.load(f)
    if isinstance(document, dict) and "x-fwf" in document:
        document = document["x-fwf"]
    return parse_fwf_spec(document)
