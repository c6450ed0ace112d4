from __future__ import annotations
from typing import Any, Type
from ..inputs.base import BaseInput
from ..outputs.base import BaseOutput


def get_input_cls(kind: str) -> Type[BaseInput]:
    """
    Return the input class for the given kind.
    Supported kinds: "fwf" (FWFInput)
    """
    if kind == "fwf":
        from ..inputs.fwf_input import FWFInput
        return FWFInput
    raise KeyError(f"Unknown input kind: {kind}")


def get_output_cls(kind: str) -> Type[BaseOutput]:
    if kind == "parquet":
        from ..outputs.parquet_output import PQOutput
        return PQOutput
    if kind == "fwf":
        from ..outputs.fwf_output import FWFOutput
        return FWFOutput
    raise KeyError(f"Unknown output kind: {kind}")


def get_preprocessors(names, **opts: Any):
    """Instantiate preprocessors by name; unknown names are ignored.

    Recognized ``opts``: ``na`` (missing-value rule for ``impute``).
    """
    if not names:
        return []
    from ..preprocessors.type_coercion import Imputation

    out = []
    for n in names:
        if n == "impute":
            out.append(Imputation(na=opts.get("na", "")))
    return out
