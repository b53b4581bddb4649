"""Decoding of Bruker Esprit spectrum text exports.

A file is read in one pass: signature lines, header, channel table.

Examples
--------
>>> from espritkit.io import read_bruker_txt
>>> spec = read_bruker_txt("spectrum.txt")
>>> spec.channel_count, spec.total_counts
(4096, 1523341.0)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, TextIO

from ..config import ReaderSettings
from ..properties import MN_KA_ENERGY
from ..spectrum import EDSSpectrum
from .channels import read_channel_table
from .errors import FormatError
from .header import check_signature, parse_header
from .sniffing import is_bruker_txt

logger = logging.getLogger(__name__)


class _Lines:
    """Line iterator over a text stream that remembers the last line number."""

    def __init__(self, stream: TextIO, line_number: int = 0):
        self._stream = stream
        self.line_number = line_number

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        line = self._stream.readline()
        if not line:
            raise StopIteration
        self.line_number += 1
        return line

    def next_or_none(self) -> str | None:
        try:
            return next(self).rstrip("\r\n")
        except StopIteration:
            return None


def decode_bruker_txt(
    stream: TextIO,
    *,
    path: str | Path | None = None,
    reference_line_energy: float = MN_KA_ENERGY,
) -> EDSSpectrum:
    """
    Decode an Esprit text export from an open text stream.

    The stream is read sequentially and is not closed.

    Parameters
    ----------
    stream : TextIO
        Text stream positioned at the first signature line.
    path : str or Path, optional
        Source path recorded on the result.
    reference_line_energy : float, default=MN_KA_ENERGY
        Energy (eV) recorded alongside the ``Mn FWHM:`` resolution.

    Returns
    -------
    EDSSpectrum
        The decoded spectrum.

    Raises
    ------
    FormatError
        If the signature lines do not match, or a header number or the
        channel count cannot be parsed.
    """
    lines = _Lines(stream)
    first = lines.next_or_none()
    second = lines.next_or_none()
    check_signature(first, second)

    header = parse_header(
        lines,
        first_line_number=lines.line_number + 1,
        reference_line_energy=reference_line_energy,
    )
    counts = read_channel_table(
        lines, header.channel_count, first_line_number=lines.line_number + 1
    )
    return EDSSpectrum(counts, header.properties, path=path)


def _open(path: str | Path, settings: ReaderSettings) -> TextIO:
    return open(path, "r", encoding=settings.encoding, errors=settings.errors, newline="")


def read_bruker_txt(
    path: str | Path, settings: ReaderSettings | None = None
) -> EDSSpectrum:
    """
    Read an Esprit text export from disk.

    Parameters
    ----------
    path : str or Path
        Path to the spectrum file.
    settings : ReaderSettings, optional
        Encoding and decoding options. Defaults to ``ReaderSettings()``.

    Returns
    -------
    EDSSpectrum
        The decoded spectrum, labelled with ``path``.

    Raises
    ------
    FormatError
        If the file is not a well-formed Esprit text export.
    FileNotFoundError
        If ``path`` does not exist.
    """
    settings = settings or ReaderSettings()
    with _open(path, settings) as f:
        try:
            return decode_bruker_txt(
                f, path=path, reference_line_energy=settings.reference_line_energy
            )
        except FormatError as exc:
            logger.debug("Failed to decode %s: %s", path, exc)
            raise


def read_spectrum(
    path: str | Path, settings: ReaderSettings | None = None
) -> EDSSpectrum:
    """
    Read a spectrum file of any supported format.

    The format is detected by sniffing a first handle on the file; the
    file is then decoded from a fresh handle.

    Raises
    ------
    FormatError
        If the file is not in a known format.
    FileNotFoundError
        If ``path`` does not exist.
    """
    settings = settings or ReaderSettings()
    with _open(path, settings) as f:
        recognized = is_bruker_txt(f)
    if recognized:
        return read_bruker_txt(path, settings)
    raise FormatError(
        f"The file {Path(path).name} does not seem to be in one of the known "
        "file formats."
    )
