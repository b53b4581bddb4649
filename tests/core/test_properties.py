"""Tests for the spectrum property keys."""

from __future__ import annotations

from espritkit import MN_KA_ENERGY, SpectrumProperty


class TestSpectrumProperty:

    def test_twelve_recognized_keys(self):
        assert len(SpectrumProperty) == 12

    def test_labels_and_units(self):
        assert SpectrumProperty.REAL_TIME.label == "Real time"
        assert SpectrumProperty.REAL_TIME.unit == "s"
        assert SpectrumProperty.BEAM_ENERGY.unit == "keV"
        assert SpectrumProperty.ENERGY_SCALE.unit == "eV/channel"

    def test_only_description_is_text(self):
        text = [p for p in SpectrumProperty if not p.numeric]
        assert text == [SpectrumProperty.DETECTOR_DESCRIPTION]

    def test_mn_ka_energy(self):
        assert 5890 < MN_KA_ENERGY < 5910
