"""Reader settings, serializable to JSON or YAML.

Examples
--------
>>> from espritkit.config import ReaderSettings
>>> settings = ReaderSettings(encoding="utf-8")
>>> settings.to_json("reader.json")
>>> ReaderSettings.from_json("reader.json") == settings
True
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from .properties import MN_KA_ENERGY


@dataclass(frozen=True)
class ReaderSettings:
    """
    Options controlling how spectrum files are opened and decoded.

    Parameters
    ----------
    encoding : str, default="latin-1"
        Text encoding of the files. Esprit writes single-byte Windows text.
    errors : str, default="strict"
        Decoding error handler passed to :func:`open`.
    reference_line_energy : float, default=MN_KA_ENERGY
        Energy (eV) recorded alongside the ``Mn FWHM:`` resolution.
    pattern : str, default="*.txt"
        Glob used by the batch CLI to find spectrum files.
    """

    encoding: str = "latin-1"
    errors: str = "strict"
    reference_line_energy: float = MN_KA_ENERGY
    pattern: str = "*.txt"

    def to_dict(self) -> dict:
        """Serialize the settings to a dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> ReaderSettings:
        """
        Build settings from a dictionary.

        Missing keys take their default values.

        Raises
        ------
        ValueError
            If ``d`` contains unknown keys.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ValueError(
                f"Unknown reader settings: {unknown}. Available: {sorted(known)}"
            )
        return cls(**d)

    def to_json(self, path: str | Path) -> None:
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_json(cls, path: str | Path) -> ReaderSettings:
        with open(path) as f:
            return cls.from_dict(json.load(f))

    def to_yaml(self, path: str | Path) -> None:
        """Save the settings to a YAML file.

        Requires ``pyyaml`` to be installed.
        """
        import yaml

        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)

    @classmethod
    def from_yaml(cls, path: str | Path) -> ReaderSettings:
        """Load settings from a YAML file.

        Requires ``pyyaml`` to be installed.
        """
        import yaml

        with open(path) as f:
            return cls.from_dict(yaml.safe_load(f) or {})

    @classmethod
    def from_file(cls, path: str | Path) -> ReaderSettings:
        """Load settings from a ``.json``, ``.yaml`` or ``.yml`` file."""
        if Path(path).suffix in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json(path)
