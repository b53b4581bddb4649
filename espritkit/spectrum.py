"""Immutable energy-dispersive X-ray spectrum decoded from an Esprit export."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import numpy as np
import pandas as pd

from .properties import SpectrumProperty

logger = logging.getLogger(__name__)

# Used when the header carries no usable "Calibration, lin.:" line.
DEFAULT_CHANNEL_WIDTH = 10.0


class EDSSpectrum:
    """
    A channel-count histogram together with its acquisition metadata.

    Instances are immutable: ``properties`` is a read-only mapping,
    ``counts`` is a read-only array and attributes cannot be reassigned.

    Parameters
    ----------
    counts : array-like
        Counts per channel. Copied; the caller keeps ownership of the input.
    properties : mapping of SpectrumProperty to float or str, optional
        Acquisition metadata. Copied.
    path : str or Path, optional
        File the spectrum was read from.

    Examples
    --------
    >>> from espritkit import read_bruker_txt
    >>> spec = read_bruker_txt("spectrum.txt")
    >>> spec.channel_count
    4096
    >>> spec.numeric(SpectrumProperty.LIVE_TIME)
    60.0
    """

    __slots__ = ("_counts", "_properties", "_path")

    def __init__(
        self,
        counts: Any,
        properties: Mapping[SpectrumProperty, float | str] | None = None,
        *,
        path: str | Path | None = None,
    ):
        data = np.array(counts, dtype=np.float64)
        if data.ndim != 1:
            raise ValueError(
                f"Channel counts must be one-dimensional, got shape {data.shape}"
            )
        data.setflags(write=False)

        props = dict(properties or {})
        for key in props:
            if not isinstance(key, SpectrumProperty):
                raise TypeError(f"Unsupported property key: {key!r}")

        # a view of a locked base cannot be made writeable again
        object.__setattr__(self, "_counts", data.view())
        object.__setattr__(self, "_properties", MappingProxyType(props))
        object.__setattr__(self, "_path", Path(path) if path is not None else None)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def counts(self) -> np.ndarray:
        """Read-only array of counts, one entry per channel."""
        return self._counts

    @property
    def properties(self) -> Mapping[SpectrumProperty, float | str]:
        """Read-only metadata mapping."""
        return self._properties

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def id(self) -> str:
        """File stem, or ``"in-memory"`` when not read from a file."""
        return self._path.stem if self._path is not None else "in-memory"

    @property
    def channel_count(self) -> int:
        return len(self._counts)

    # ------------------------------------------------------------------
    # Metadata access
    # ------------------------------------------------------------------

    def get(self, prop: SpectrumProperty, default: Any = None) -> Any:
        return self._properties.get(prop, default)

    def numeric(self, prop: SpectrumProperty) -> float:
        """
        Return a numeric property value.

        Raises
        ------
        KeyError
            If the property is absent.
        TypeError
            If the property holds text.
        """
        value = self._properties[prop]
        if isinstance(value, str):
            raise TypeError(f"{prop.label} is a text property: {value!r}")
        return float(value)

    def metadata_frame(self) -> pd.DataFrame:
        """
        Tabulate the metadata.

        Returns
        -------
        pd.DataFrame
            One row per property present, with columns
            ``['property', 'value', 'unit']``, in declaration order.
        """
        rows = [
            {"property": prop.label, "value": self._properties[prop], "unit": prop.unit}
            for prop in SpectrumProperty
            if prop in self._properties
        ]
        return pd.DataFrame(rows, columns=["property", "value", "unit"])

    # ------------------------------------------------------------------
    # Energy calibration
    # ------------------------------------------------------------------

    @property
    def channel_width(self) -> float:
        """Energy width of one channel in eV."""
        value = self._properties.get(SpectrumProperty.ENERGY_SCALE)
        if value is None:
            return DEFAULT_CHANNEL_WIDTH
        width = float(value)
        if not (math.isfinite(width) and width > 0):
            logger.warning(
                "Ignoring energy scale %r eV/channel, using %g",
                value,
                DEFAULT_CHANNEL_WIDTH,
            )
            return DEFAULT_CHANNEL_WIDTH
        return width

    @property
    def zero_offset(self) -> float:
        """Energy of the lower edge of channel 0 in eV."""
        return float(self._properties.get(SpectrumProperty.ENERGY_OFFSET, 0.0))

    def min_energy_for_channel(self, channel: int) -> float:
        return self.zero_offset + channel * self.channel_width

    def avg_energy_for_channel(self, channel: int) -> float:
        return self.zero_offset + (channel + 0.5) * self.channel_width

    def max_energy_for_channel(self, channel: int) -> float:
        return self.zero_offset + (channel + 1) * self.channel_width

    def channel_for_energy(self, energy: float) -> int:
        """
        Index of the channel containing ``energy`` (eV).

        The result is not bounded to ``[0, channel_count)``.
        """
        return int((energy - self.zero_offset) / self.channel_width)

    @property
    def energies(self) -> np.ndarray:
        """Lower-edge energy (eV) of every channel."""
        return self.zero_offset + np.arange(self.channel_count) * self.channel_width

    # ------------------------------------------------------------------
    # Counts
    # ------------------------------------------------------------------

    @property
    def total_counts(self) -> float:
        return float(self._counts.sum())

    def integrate(self, min_energy: float, max_energy: float) -> float:
        """
        Integrate counts between two energies.

        Channels only partially covered by ``[min_energy, max_energy)``
        contribute in proportion to the covered fraction.

        Parameters
        ----------
        min_energy, max_energy : float
            Integration window in eV.

        Returns
        -------
        float
            Integrated counts.
        """
        n = self.channel_count
        lo = self.channel_for_energy(min_energy)
        hi = self.channel_for_energy(max_energy)
        width = self.channel_width
        total = float(self._counts[min(max(lo, 0), n):min(max(hi, 0), n)].sum())
        if 0 <= lo < n:
            total -= self._counts[lo] * (min_energy - self.min_energy_for_channel(lo)) / width
        if 0 <= hi < n:
            total += self._counts[hi] * (max_energy - self.min_energy_for_channel(hi)) / width
        return total

    def to_dataframe(self) -> pd.DataFrame:
        """
        Return the spectrum as a DataFrame.

        Returns
        -------
        pd.DataFrame
            Columns ``['channel', 'energy', 'counts']``.
        """
        return pd.DataFrame(
            {
                "channel": np.arange(self.channel_count),
                "energy": self.energies,
                "counts": self._counts,
            }
        )

    def __len__(self) -> int:
        return self.channel_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EDSSpectrum):
            return NotImplemented
        if self._properties.keys() != other._properties.keys():
            return False
        for key, value in self._properties.items():
            if not _same_value(value, other._properties[key]):
                return False
        return np.array_equal(self._counts, other._counts, equal_nan=True)

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"EDSSpectrum(id={self.id!r}, channels={self.channel_count}, "
            f"properties={len(self._properties)})"
        )


def _same_value(a: float | str, b: float | str) -> bool:
    """Equality that treats two NaN floats as equal."""
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b
