"""Exceptions raised while decoding spectrum files."""

from __future__ import annotations


class FormatError(ValueError):
    """The input is not a well-formed Esprit text export.

    Parameters
    ----------
    message : str
        What went wrong.
    line_number : int, optional
        1-based line number of the offending line.
    """

    def __init__(self, message: str, line_number: int | None = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
