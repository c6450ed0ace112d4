from __future__ import annotations
import logging
from typing import Any, Dict

from .registry import get_input_cls, get_output_cls, get_preprocessors
from ..types import Table

logger = logging.getLogger(__name__)


class Engine:
    def __init__(
            self,
            input_kind: str = "fwf",
            output_kind: str = "parquet",
            preprocessors: list[str] | None = None,
            output_opts: Dict[str, Any] | None = None,
            na: Any = "",
            **input_opts: Any,
    ) -> None:
        """Wire an input plugin, preprocessors and an output plugin together.

        :param input_kind: Registered input kind (``"fwf"``).
        :param output_kind: Registered output kind (``"parquet"`` or ``"fwf"``).
        :param preprocessors: Ordered list of preprocessor names to apply.
        :param output_opts: Keyword options forwarded to the output class.
        :param na: Missing-value rule handed to the ``impute`` preprocessor.
        :param input_opts: Additional keyword options forwarded to the input class
            (``layout``, ``header``, ``skip`` …).
        """
        self.input_opts = input_opts
        self.output_opts: Dict[str, Any] = dict(output_opts or {})
        self.Input = get_input_cls(input_kind)
        self.Output = get_output_cls(output_kind)
        self.preprocessors = get_preprocessors(preprocessors or [], na=na)

    def _apply_preprocessors(self, table: Table) -> Table:
        for pre in self.preprocessors:
            table = pre.process_table(table)
        return table

    def run(self, source: Any, dest: Any) -> Table:
        """Execute read → preprocess → write.

        :param source: Input location (path or stream).
        :param dest: Output destination.
        :return: The table that was written.
        """
        input_plugin = self.Input(source, **self.input_opts)
        output_plugin = self.Output(dest, **self.output_opts)
        table = self._apply_preprocessors(input_plugin.read_table())
        logger.info("Read %d row(s) x %d column(s) from %s", table.row_count, len(table.names), source)

        output_plugin.open()
        try:
            output_plugin.write_table(table)
        finally:
            output_plugin.close()
        return table
