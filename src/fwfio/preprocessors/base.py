from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, List, Sequence

from ..types import Table


class Preprocessor(ABC):
    """Abstract column preprocessor interface.

    Implementations receive one column of values and return its transformed
    replacement; :meth:`process_table` applies that to every column.
    """
    @abstractmethod
    def apply(self, values: Sequence[Any]) -> List[Any]:
        """Transform a column.

        :param values: Column values, top to bottom.
        :return: New column of the same length.
        """

    def process_table(self, table: Table) -> Table:
        return Table(
            names=list(table.names),
            columns=[self.apply(column) for column in table.columns],
            malformed_rows=list(table.malformed_rows),
        )
