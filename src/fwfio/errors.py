from __future__ import annotations


class ValidationError(ValueError):
    """Raised when a layout, option or field spec is invalid.

    Always raised before any line is read or written.
    """


class MalformedLineError(ValueError):
    """Raised under the ``fail`` error policy when a line is too short for its layout.

    :param message: Human readable description.
    :param line_number: Data row number (1-based); ``0`` for the header line.
    """

    def __init__(self, message: str, line_number: int = 0):
        super().__init__(message)
        self.line_number = line_number
