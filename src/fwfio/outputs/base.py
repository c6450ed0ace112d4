from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any

from ..types import Table


class BaseOutput(ABC):
    """Abstract base for output writers.

    Concrete implementations must provide lifecycle and table handling methods.

    :param dest: Destination path / stream.
    :param opts: Additional implementation-specific options.
    """
    def __init__(self, dest: Any, **opts: Any):
        self.dest = dest
        self.opts = opts

    @abstractmethod
    def open(self) -> None:
        """Initialize resources (directories, files)."""
        ...

    @abstractmethod
    def write_table(self, table: Table) -> None:
        """Persist a whole table.

        :param table: Column-major table to write.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Finalize and release resources, flushing buffers as needed."""
        ...
