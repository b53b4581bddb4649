"""Header section of the Esprit text export.

The header is a run of ``Key: value`` lines between the two signature lines
and the ``Energy Counts`` sentinel. Recognized keys are declared once, in
:data:`HEADER_FIELDS`, as an ordered table of prefix strategies: the first
entry whose prefix starts the trimmed line handles it.

Examples
--------
>>> from espritkit.io.header import parse_header
>>> from espritkit.properties import SpectrumProperty
>>> header = parse_header(["Real time: 5000", "Channels: 3", "Energy Counts"])
>>> header.properties[SpectrumProperty.REAL_TIME]
5.0
>>> header.channel_count
3
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, Optional

from ..properties import MN_KA_ENERGY, SpectrumProperty
from .errors import FormatError
from .sniffing import PRODUCT_PREFIX, SIGNATURE, matches_signature

logger = logging.getLogger(__name__)

SENTINEL = "Energy Counts"

_INTEGER = re.compile(r"[+-]?[0-9]+")
# Decimal numbers as written by Esprit, plus the NaN and Infinity spellings.
_NUMBER = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)


@dataclass
class HeaderResult:
    """
    Metadata collected from the header section.

    Attributes
    ----------
    properties : dict
        Recognized properties; later occurrences overwrite earlier ones.
    channel_count : int
        Declared number of channels, 0 when no ``Channels:`` line was seen.
    sentinel_found : bool
        Whether the ``Energy Counts`` line terminated the header.
    reference_line_energy : float
        Energy recorded alongside the ``Mn FWHM:`` resolution.
    """

    properties: dict[SpectrumProperty, float | str] = field(default_factory=dict)
    channel_count: int = 0
    sentinel_found: bool = False
    reference_line_energy: float = MN_KA_ENERGY


def parse_float(text: str, name: str, line_number: int | None = None) -> float:
    """Parse a header number, raising :class:`FormatError` on failure."""
    if not _NUMBER.fullmatch(text):
        raise FormatError(
            f"could not parse {name!r} value {text!r} as a number", line_number
        )
    return float(text)


def parse_channel_count(text: str, line_number: int | None = None) -> int:
    """Parse the ``Channels:`` value as a non-negative integer."""
    if not _INTEGER.fullmatch(text):
        raise FormatError(f"invalid channel count {text!r}", line_number)
    count = int(text)
    if count < 0:
        raise FormatError(f"negative channel count {count}", line_number)
    return count


Handler = Callable[[str, HeaderResult, Optional[int]], None]


@dataclass(frozen=True)
class HeaderField:
    """
    One recognized header key.

    Parameters
    ----------
    prefix : str
        Literal, case-sensitive prefix that selects this field.
    handler : callable or None
        Called as ``handler(value, header, line_number)`` with the trimmed
        remainder of the line. ``None`` marks a key that is deliberately
        ignored.
    """

    prefix: str
    handler: Handler | None = None

    def matches(self, line: str) -> bool:
        return line.startswith(self.prefix)

    def value_of(self, line: str) -> str:
        return line[len(self.prefix):].strip()

    def apply(
        self, line: str, header: HeaderResult, line_number: int | None = None
    ) -> None:
        """Store the value carried by ``line`` into ``header``."""
        if self.handler is not None:
            self.handler(self.value_of(line), header, line_number)

    @property
    def ignored(self) -> bool:
        return self.handler is None


def _numeric(prop: SpectrumProperty, divisor: float = 1.0) -> Handler:
    def handler(value: str, header: HeaderResult, line_number: int | None) -> None:
        header.properties[prop] = parse_float(value, prop.label, line_number) / divisor

    return handler


def _text(prop: SpectrumProperty) -> Handler:
    def handler(value: str, header: HeaderResult, line_number: int | None) -> None:
        header.properties[prop] = value

    return handler


def _resolution(value: str, header: HeaderResult, line_number: int | None) -> None:
    # FWHM is only meaningful together with the line it was measured on
    header.properties[SpectrumProperty.RESOLUTION] = parse_float(
        value, SpectrumProperty.RESOLUTION.label, line_number
    )
    header.properties[SpectrumProperty.RESOLUTION_LINE] = header.reference_line_energy


def _channels(value: str, header: HeaderResult, line_number: int | None) -> None:
    header.channel_count = parse_channel_count(value, line_number)


# Times are written in milliseconds and stored in seconds.
HEADER_FIELDS: tuple[HeaderField, ...] = (
    HeaderField("Date:"),
    HeaderField("Real time:", _numeric(SpectrumProperty.REAL_TIME, 1000.0)),
    HeaderField("Life time:", _numeric(SpectrumProperty.LIVE_TIME, 1000.0)),
    HeaderField("Pulse density:"),
    HeaderField("Primary energy:", _numeric(SpectrumProperty.BEAM_ENERGY)),
    HeaderField("Take off angle:", _numeric(SpectrumProperty.TAKE_OFF_ANGLE)),
    HeaderField("Tilt angle:", _numeric(SpectrumProperty.DETECTOR_TILT)),
    HeaderField("Azimut angle:"),
    HeaderField("Detector type:", _text(SpectrumProperty.DETECTOR_DESCRIPTION)),
    HeaderField("Window type:"),
    HeaderField("Detector thickness:", _numeric(SpectrumProperty.DETECTOR_THICKNESS)),
    HeaderField("Si dead layer:", _numeric(SpectrumProperty.DEAD_LAYER)),
    HeaderField("Calibration, lin.:", _numeric(SpectrumProperty.ENERGY_SCALE)),
    HeaderField("Calibration, abs.:", _numeric(SpectrumProperty.ENERGY_OFFSET)),
    HeaderField("Mn FWHM:", _resolution),
    HeaderField("Fano factor:"),
    HeaderField("Channels:", _channels),
)


def find_field(line: str) -> HeaderField | None:
    """Return the first field whose prefix starts ``line``, if any."""
    for header_field in HEADER_FIELDS:
        if header_field.matches(line):
            return header_field
    return None


def check_signature(first: str | None, second: str | None) -> None:
    """
    Verify the two opening lines.

    Raises
    ------
    FormatError
        If either line is missing or does not match the vendor signature.
    """
    if matches_signature(first, second):
        return
    if first is None or first != SIGNATURE:
        raise FormatError(
            f"expected signature {SIGNATURE!r}, got {first!r}; "
            "this does not appear to be a Bruker text spectrum",
            1,
        )
    raise FormatError(
        f"expected a line starting with {PRODUCT_PREFIX!r}, got {second!r}; "
        "this does not appear to be a Bruker text spectrum",
        2,
    )


def parse_header(
    lines: Iterable[str],
    *,
    first_line_number: int = 3,
    reference_line_energy: float = MN_KA_ENERGY,
) -> HeaderResult:
    """
    Read header lines up to and including the ``Energy Counts`` sentinel.

    Parameters
    ----------
    lines : iterable of str
        Header lines, already past the two signature lines. When an
        iterator is passed, it is left positioned at the first data row.
    first_line_number : int, default=3
        Line number of the first item, used in error messages.
    reference_line_energy : float, default=MN_KA_ENERGY
        Energy (eV) recorded with the ``Mn FWHM:`` resolution.

    Returns
    -------
    HeaderResult
        Collected metadata and channel count.

    Raises
    ------
    FormatError
        If a numeric value or the channel count cannot be parsed.
    """
    header = HeaderResult(reference_line_energy=reference_line_energy)
    iterator: Iterator[str] = iter(lines)
    for line_number, raw in enumerate(iterator, start=first_line_number):
        if raw.startswith(SENTINEL):
            header.sentinel_found = True
            break
        line = raw.strip()
        header_field = find_field(line)
        if header_field is None:
            if line:
                logger.debug("Skipping unrecognized header line %d: %r", line_number, line)
            continue
        header_field.apply(line, header, line_number)
    else:
        logger.debug("Header ended without an %r line", SENTINEL)
    return header
