from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable

from ..types import Table


class BaseInput(ABC):
    """
    Abstract base class for all input types.

    :param source: The data source (file path or open text stream).
    :param opts: Additional options for the input type.
    :type opts: Any
    """
    def __init__(self, source: Any, **opts: Any):
        self.source = source
        self.opts = opts

    @abstractmethod
    def read_table(self) -> Table:
        """
        Read the whole source into a column-major table.

        :return: The parsed table.
        :rtype: Table
        """

    def iter_rows(self) -> Iterable[Dict[str, Any]]:
        """Row-oriented view of :meth:`read_table`."""
        return self.read_table().rows()
