"""Recognized spectrum metadata keys and their display units."""

from __future__ import annotations

from enum import Enum

# Mn K-alpha line energy in eV, the reference line for detector resolution.
MN_KA_ENERGY = 5898.7


class SpectrumProperty(Enum):
    """Metadata keys an Esprit text export can populate.

    Each member carries a human-readable ``label``, a display ``unit`` and
    whether the value is ``numeric`` or free text.

    Examples
    --------
    >>> SpectrumProperty.LIVE_TIME.label
    'Live time'
    >>> SpectrumProperty.LIVE_TIME.unit
    's'
    """

    REAL_TIME = ("Real time", "s", True)
    LIVE_TIME = ("Live time", "s", True)
    BEAM_ENERGY = ("Beam energy", "keV", True)
    TAKE_OFF_ANGLE = ("Take off angle", "°", True)
    DETECTOR_TILT = ("Detector tilt", "°", True)
    DETECTOR_DESCRIPTION = ("Detector description", "", False)
    DETECTOR_THICKNESS = ("Detector thickness", "mm", True)
    DEAD_LAYER = ("Dead layer", "µm", True)
    ENERGY_SCALE = ("Energy scale", "eV/channel", True)
    ENERGY_OFFSET = ("Energy offset", "eV", True)
    RESOLUTION = ("Resolution", "eV", True)
    RESOLUTION_LINE = ("Resolution measurement energy", "eV", True)

    def __init__(self, label: str, unit: str, numeric: bool):
        self.label = label
        self.unit = unit
        self.numeric = numeric

    def __repr__(self) -> str:
        return f"SpectrumProperty.{self.name}"
