from __future__ import annotations
from typing import Any, Dict

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from ..errors import ValidationError
from ..types import ColumnParser

# Shape of an ``x-fwf`` field spec document.
FWF_SPEC_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["fields"],
    "properties": {
        "encoding": {"type": "string"},
        "fields": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["name", "start"],
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "start": {"type": "integer", "minimum": 1},
                    "length": {"type": "integer", "minimum": 1},
                    "end": {"type": "integer", "minimum": 1},
                    "parser": {"enum": [p.value for p in ColumnParser]},
                },
            },
        },
    },
}


class Validator:
    def __init__(self, schema: Dict[str, Any] | None = None):
        self._validator = Draft202012Validator(schema or FWF_SPEC_SCHEMA)

    def validate(self, document: Any) -> None:
        """Raise :class:`ValidationError` describing the first problem in ``document``."""
        error = best_match(self._validator.iter_errors(document))
        if error is None:
            return
        location = "/".join(str(part) for part in error.path) or "<root>"
        raise ValidationError(f"Invalid FWF spec at {location}: {error.message}")
