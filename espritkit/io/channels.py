"""Channel table of the Esprit text export.

Data rows follow the ``Energy Counts`` sentinel, one per channel, as
whitespace-separated columns whose second column is the count. Decoding is
best-effort: a row that cannot be read leaves its channel at zero and the
read carries on with the next row. Earlier readers stopped at the first bad
row, zeroing every channel after it; here only the bad row is lost.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

import numpy as np

logger = logging.getLogger(__name__)

# Runs of horizontal whitespace only.
_FIELD_SEPARATOR = re.compile(r"[ \t\xa0\u1680\u180e\u2000-\u200a\u202f\u205f\u3000]+")


class RowStatus(Enum):
    """Outcome of decoding one data row."""

    OK = "ok"
    SKIP = "skip"
    ERROR = "error"


@dataclass(frozen=True)
class RowResult:
    """
    Result of decoding one data row.

    Attributes
    ----------
    status : RowStatus
        ``OK`` when a count was read, ``SKIP`` for rows with fewer than two
        fields, ``ERROR`` when the count is not a number.
    value : float or None
        The count, for ``OK`` rows.
    message : str or None
        Diagnostic for ``ERROR`` rows.
    """

    status: RowStatus
    value: float | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is RowStatus.OK


def split_row(text: str) -> list[str]:
    """Split a row on runs of horizontal whitespace."""
    return [item for item in _FIELD_SEPARATOR.split(text.strip()) if item]


def parse_row(text: str) -> RowResult:
    """
    Decode the count carried by one data row.

    Parameters
    ----------
    text : str
        The row, with or without surrounding whitespace.

    Returns
    -------
    RowResult
        See :class:`RowResult`. Fields beyond the second are ignored.
    """
    items = split_row(text)
    if len(items) < 2:
        return RowResult(RowStatus.SKIP)
    try:
        return RowResult(RowStatus.OK, value=float(items[1]))
    except ValueError:
        return RowResult(
            RowStatus.ERROR, message=f"could not parse count {items[1]!r}"
        )


def read_channel_table(
    lines: Iterable[str],
    channel_count: int,
    *,
    first_line_number: int | None = None,
) -> np.ndarray:
    """
    Read up to ``channel_count`` data rows into a count array.

    Reading stops after ``channel_count`` rows, at the first blank line or
    at the end of ``lines``. The row position, not its content, selects
    the channel written: skipped and malformed rows still use up a channel.

    Parameters
    ----------
    lines : iterable of str
        Data rows. When an iterator is passed, rows after the last one
        consumed are left unread.
    channel_count : int
        Length of the returned array.
    first_line_number : int, optional
        Line number of the first row, used in log messages.

    Returns
    -------
    np.ndarray
        Float64 array of length ``channel_count``. Channels that were not
        read hold zero.
    """
    counts = np.zeros(channel_count, dtype=np.float64)
    if channel_count == 0:
        return counts

    channel = 0
    for row in lines:
        text = row.strip()
        if not text:
            break
        result = parse_row(text)
        if result.status is RowStatus.OK:
            counts[channel] = result.value
        elif result.status is RowStatus.SKIP:
            logger.debug("Channel %d has no count column: %r", channel, text)
        else:
            where = (
                f"line {first_line_number + channel}"
                if first_line_number is not None
                else f"row {channel}"
            )
            logger.warning("Channel %d left at zero (%s: %s)", channel, where, result.message)
        channel += 1
        if channel >= channel_count:
            break

    if channel < channel_count:
        logger.debug(
            "Channel table ended after %d of %d rows", channel, channel_count
        )
    return counts
