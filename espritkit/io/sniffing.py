"""Cheap detection of the Esprit text export format."""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

SIGNATURE = "Bruker Nano GmbH Berlin, Germany"
PRODUCT_PREFIX = "Esprit"


def _strip_newline(line: str) -> str:
    return line.rstrip("\r\n")


def matches_signature(first: str | None, second: str | None) -> bool:
    """Return True if the two opening lines identify an Esprit export."""
    if first is None or second is None:
        return False
    return first == SIGNATURE and second.startswith(PRODUCT_PREFIX)


def is_bruker_txt(stream: TextIO) -> bool:
    """
    Check whether a text stream looks like an Esprit spectrum export.

    Reads at most two lines. The stream is advanced and not rewound; sniff
    a fresh or rewound stream before decoding.

    Parameters
    ----------
    stream : TextIO
        Readable text stream positioned at its start.

    Returns
    -------
    bool
        True if line 1 is the vendor signature and line 2 starts with the
        product name. False on mismatch, end of stream or read errors.
    """
    try:
        first = stream.readline()
        if not first:
            return False
        second = stream.readline()
        if not second:
            return False
    except (OSError, UnicodeDecodeError, ValueError):
        return False
    return matches_signature(_strip_newline(first), _strip_newline(second))


def is_bruker_txt_file(path: str | Path, encoding: str = "latin-1") -> bool:
    """Sniff a file on disk. Unreadable files are reported as non-matching."""
    try:
        with open(path, "r", encoding=encoding, newline="") as f:
            return is_bruker_txt(f)
    except OSError:
        return False
