"""Shared pytest fixtures for espritkit tests."""
from __future__ import annotations

import io
from pathlib import Path

import pytest

HEADER_LINES = [
    "Bruker Nano GmbH Berlin, Germany",
    "Esprit 1.9",
    "",
    "Date: 03.11.2011 14:52:10",
    "Real time: 60340",
    "Life time: 60000",
    "Pulse density: 5431",
    "Primary energy: 20",
    "Take off angle: 35",
    "Tilt angle: 0",
    "Azimut angle: 45",
    "Detector type: XFlash 5010",
    "Window type: slew AP3.3",
    "Detector thickness: 0.45",
    "Si dead layer: 0.029",
    "Calibration, lin.: 10.0",
    "Calibration, abs.: -475.1",
    "Mn FWHM: 130.5",
    "Fano factor: 0.116",
    "Channels: 8",
    "",
    "Energy Counts",
]

COUNTS = [0.0, 3.0, 12.0, 150.0, 1024.0, 87.0, 9.0, 1.0]


def make_bruker_text(
    header: list[str] | None = None,
    counts: list[float] | None = None,
    *,
    trailer: str = "\n",
) -> str:
    """
    Build the text of an Esprit export.

    Data rows carry the channel energy then the count, separated by
    whitespace as Esprit writes them.
    """
    header = HEADER_LINES if header is None else header
    counts = COUNTS if counts is None else counts
    rows = [f"{-475.1 + 10.0 * i:.1f}\t{c:g}" for i, c in enumerate(counts)]
    return "\n".join([*header, *rows]) + trailer


@pytest.fixture
def bruker_text() -> str:
    """Text of a complete 8-channel Esprit export."""
    return make_bruker_text()


@pytest.fixture
def bruker_stream(bruker_text: str) -> io.StringIO:
    return io.StringIO(bruker_text)


@pytest.fixture
def bruker_file(tmp_path: Path, bruker_text: str) -> Path:
    """Path to a complete 8-channel Esprit export written as latin-1."""
    path = tmp_path / "sample_01.txt"
    path.write_text(bruker_text, encoding="latin-1")
    return path


@pytest.fixture
def bruker_dir(tmp_path: Path) -> Path:
    """Directory with two Esprit exports and one unrelated text file."""
    d = tmp_path / "spectra"
    d.mkdir()
    (d / "a.txt").write_text(make_bruker_text(), encoding="latin-1")
    (d / "b.txt").write_text(
        make_bruker_text(counts=[1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0]),
        encoding="latin-1",
    )
    (d / "notes.txt").write_text("2000\t100\n2001\t200\n")
    return d


@pytest.fixture
def make_text():
    """Factory building Esprit export text from header lines and counts."""
    return make_bruker_text
