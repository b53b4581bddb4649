"""Unit tests for reader settings serialization (JSON/YAML)."""

from __future__ import annotations

from pathlib import Path

import pytest

from espritkit import MN_KA_ENERGY, ReaderSettings


class TestDictRoundtrip:

    def test_defaults(self):
        settings = ReaderSettings()
        assert settings.encoding == "latin-1"
        assert settings.reference_line_energy == MN_KA_ENERGY
        assert settings.pattern == "*.txt"

    def test_roundtrip(self):
        settings = ReaderSettings(encoding="utf-8", pattern="*.TXT")
        assert ReaderSettings.from_dict(settings.to_dict()) == settings

    def test_partial_dict_uses_defaults(self):
        settings = ReaderSettings.from_dict({"encoding": "cp1252"})
        assert settings.encoding == "cp1252"
        assert settings.errors == "strict"

    def test_unknown_key_raises(self):
        with pytest.raises(ValueError, match="Unknown reader settings"):
            ReaderSettings.from_dict({"encodng": "utf-8"})


class TestFileSerialization:

    def test_json_roundtrip(self, tmp_path: Path):
        path = tmp_path / "reader.json"
        settings = ReaderSettings(errors="replace")
        settings.to_json(path)
        assert ReaderSettings.from_json(path) == settings
        assert ReaderSettings.from_file(path) == settings

    def test_yaml_roundtrip(self, tmp_path: Path):
        path = tmp_path / "reader.yaml"
        settings = ReaderSettings(reference_line_energy=5900.0)
        settings.to_yaml(path)
        assert ReaderSettings.from_yaml(path) == settings
        assert ReaderSettings.from_file(path) == settings

    def test_empty_yaml(self, tmp_path: Path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert ReaderSettings.from_yaml(path) == ReaderSettings()
