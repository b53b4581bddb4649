"""Command-line interface for espritkit.

Provides three subcommands:

- ``info``: Decode one spectrum and print its metadata.
- ``export``: Write one spectrum as a ``channel,energy,counts`` CSV.
- ``convert``: Batch decode a directory of spectra into a CSV count matrix.

Examples
--------
.. code-block:: bash

    espritkit info spectrum.txt
    espritkit export spectrum.txt --output spectrum.csv
    espritkit convert --input-dir data/ --output counts.csv
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import pandas as pd
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .config import ReaderSettings
from .io.errors import FormatError
from .io.readers import read_bruker_txt
from .io.sniffing import is_bruker_txt_file
from .spectrum import EDSSpectrum

logger = logging.getLogger(__name__)
console = Console()

app = typer.Typer(
    name="espritkit",
    help="espritkit: reader for Bruker Esprit EDS spectrum text exports.",
    add_completion=False,
    rich_markup_mode="rich",
)


class _State:
    settings: ReaderSettings = ReaderSettings()


state = _State()


@app.callback()
def main(
    config: Annotated[
        Optional[Path], typer.Option(help="JSON/YAML reader settings.")
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log decoding diagnostics.")
    ] = False,
) -> None:
    """Read Bruker Esprit EDS spectrum text exports."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    state.settings = (
        ReaderSettings.from_file(config) if config is not None else ReaderSettings()
    )


def _load(path: Path) -> EDSSpectrum:
    try:
        return read_bruker_txt(path, state.settings)
    except (FormatError, OSError) as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1)


@app.command()
def info(
    path: Annotated[Path, typer.Argument(help="Spectrum text file.")],
) -> None:
    """Print the metadata and channel summary of one spectrum."""
    spec = _load(path)

    table = Table(title=spec.id, show_lines=False)
    table.add_column("Property", style="bold")
    table.add_column("Value", justify="right")
    table.add_column("Unit")
    for row in spec.metadata_frame().itertuples(index=False):
        table.add_row(row.property, str(row.value), row.unit)
    table.add_row("Channels", str(spec.channel_count), "")
    table.add_row("Total counts", f"{spec.total_counts:g}", "")
    if spec.channel_count:
        table.add_row(
            "Energy range",
            f"{spec.zero_offset:g} to {spec.max_energy_for_channel(spec.channel_count - 1):g}",
            "eV",
        )
    console.print(table)


@app.command()
def export(
    path: Annotated[Path, typer.Argument(help="Spectrum text file.")],
    output: Annotated[Path, typer.Option(help="Output CSV file.")],
) -> None:
    """Write one spectrum as a channel, energy, counts CSV."""
    spec = _load(path)
    spec.to_dataframe().to_csv(output, index=False)
    console.print(f"Wrote {spec.channel_count} channels to {output}")


@app.command()
def convert(
    input_dir: Annotated[
        Path, typer.Option(help="Directory containing spectrum text files.")
    ],
    output: Annotated[
        Path, typer.Option(help="Output CSV file for the count matrix.")
    ],
) -> None:
    """Batch decode spectra to a CSV matrix (rows: spectra, columns: energy)."""
    spectrum_files = sorted(input_dir.glob(state.settings.pattern))
    if not spectrum_files:
        console.print(
            f"[red]Error:[/red] No {state.settings.pattern} files found in {input_dir}"
        )
        raise typer.Exit(code=1)

    rows: list[pd.Series] = []
    n_skipped = 0
    n_failed = 0

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Decoding spectra...", total=len(spectrum_files))
        for path in spectrum_files:
            progress.update(task, description=f"Decoding {path.name}")
            if not is_bruker_txt_file(path, encoding=state.settings.encoding):
                n_skipped += 1
                logger.info("Skipping %s: not a Bruker text spectrum", path.name)
                progress.advance(task)
                continue
            try:
                spec = read_bruker_txt(path, state.settings)
                rows.append(pd.Series(spec.counts, index=spec.energies, name=spec.id))
            except (FormatError, OSError) as exc:
                n_failed += 1
                logger.warning("Failed to decode %s: %s", path.name, exc)
            progress.advance(task)

    if not rows:
        console.print("[red]Error:[/red] No spectra were successfully decoded.")
        raise typer.Exit(code=1)

    matrix = pd.concat(rows, axis=1).T.fillna(0.0)
    matrix.index.name = "ID"
    matrix.to_csv(output)

    # Summary
    console.print()
    table = Table(title="Conversion Summary", show_lines=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Spectra decoded", str(len(rows)))
    table.add_row("Skipped (other formats)", str(n_skipped))
    table.add_row("Failed", str(n_failed))
    table.add_row("Channels (columns)", str(matrix.shape[1]))
    table.add_row("Output", str(output))
    console.print(table)


if __name__ == "__main__":
    app()
