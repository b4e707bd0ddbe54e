"""
Command-line interface for ame2020.

Usage:
    ame2020 convert mass.mas20.txt           # JSON to stdout
    ame2020 convert mass.mas20.txt -f csv -o masses.csv
    ame2020 check mass.mas20.txt             # Validate the whole table
    ame2020 lookup mass.mas20.txt 26 30      # Fe-56
    ame2020 download                         # Fetch the table from ANL
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from .config import Config, setup_logging
from .exceptions import AmeError
from .export import to_dataframe, to_json
from .layout import HEADER_LINES
from .models import Measurement
from .reader import Iter
from .table import MassTable, download_ame2020

__all__ = [
    "cli",
]


def format_measurement(measurement: Measurement, precision: int = 3, unit: str = "") -> str:
    """
    Format a measurement as 'value +/- uncertainty unit'.

    Example:
        >>> format_measurement(Measurement(8071.31806, 0.00044), 2, 'keV')
        '8071.32 +/- 0.00 keV'
        >>> format_measurement(Measurement.absent())
        'N/A'
    """
    if not measurement.is_present:
        return "N/A"
    text = f"{measurement.value:.{precision}f}"
    if measurement.uncertainty is not None:
        text += f" +/- {measurement.uncertainty:.{precision}f}"
    if unit:
        text += f" {unit}"
    if measurement.estimated:
        text += " (estimated)"
    return text


def validate_output_path(path_str: str) -> bool:
    """
    Validate an output path to prevent path traversal.

    Args:
        path_str: The path string to validate.

    Returns:
        True if path is safe, False otherwise.
    """
    path = Path(path_str)

    if '..' in path.parts:
        return False

    try:
        resolved = str(path.resolve())
    except (OSError, ValueError):
        return False

    # Don't allow writing to system directories
    forbidden_prefixes = ['/etc', '/bin', '/sbin', '/usr', '/var']
    return not any(resolved.startswith(prefix) for prefix in forbidden_prefixes)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


header_lines_option = click.option(
    '--header-lines', type=int, default=HEADER_LINES, show_default=True,
    help='Number of preamble lines before the first record',
)


@click.group()
@click.version_option(version="0.1.0", prog_name="ame2020")
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              default=None, help='Logging verbosity (default: AME2020_LOG_LEVEL or INFO)')
def cli(log_level: str | None):
    """
    Read the Atomic Mass Evaluation 2020 mass table.

    Examples:

        ame2020 convert mass.mas20.txt > masses.json

        ame2020 lookup mass.mas20.txt 82 126   # Pb-208
    """
    setup_logging(log_level or Config.LOG_LEVEL)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', type=click.Path(), default=None, help='Output file (default: stdout)')
@click.option('--format', '-f', 'fmt', type=click.Choice(['json', 'csv']), default='json',
              help='Output format')
@header_lines_option
def convert(file: str, output: str | None, fmt: str, header_lines: int):
    """
    Convert a mass table to JSON or CSV.

    Absent values are written as null (JSON) or left empty (CSV).
    """
    if output and not validate_output_path(output):
        _fail("Invalid output path (path traversal not allowed)")

    try:
        with open(file, "rb") as f:
            nuclides = list(Iter(f, header_lines=header_lines))
    except AmeError as e:
        _fail(str(e))

    if fmt == 'json':
        text = to_json(nuclides)
    else:
        text = to_dataframe(nuclides).to_csv(index=False)

    if output is None:
        click.echo(text)
    else:
        Path(output).write_text(text)
        click.echo(f"Saved {len(nuclides)} nuclides to {output}", err=True)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@header_lines_option
def check(file: str, header_lines: int):
    """
    Parse the whole table and report the first malformed line, if any.
    """
    with open(file, "rb") as f:
        records = Iter(f, header_lines=header_lines)
        estimated = 0
        for item in records.results():
            if isinstance(item, AmeError):
                click.echo(f"{file}: {records.records} records OK before error", err=True)
                _fail(str(item))
            if item.is_estimated:
                estimated += 1

    click.echo(f"{file}: {records.records} records OK ({estimated} with estimated masses)")


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.argument('z', type=int)
@click.argument('n', type=int)
@click.option('--json', 'output_json', is_flag=True, help='Output as JSON')
@header_lines_option
def lookup(file: str, z: int, n: int, output_json: bool, header_lines: int):
    """
    Look up a nuclide by Z (protons) and N (neutrons).

    Examples:

        ame2020 lookup mass.mas20.txt 26 30   # Iron-56

        ame2020 lookup mass.mas20.txt 0 1     # free neutron
    """
    table = MassTable(file, header_lines=header_lines)
    try:
        nuc = table.get_nuclide(z, n)
    except AmeError as e:
        _fail(str(e))

    if output_json:
        click.echo(json.dumps(nuc.to_dict(), indent=2))
        return

    click.echo(f"\n{nuc.name} (Z={z}, N={n}, A={nuc.mass_number})")
    click.echo("=" * 40)
    click.echo(f"  Origin:            {nuc.origin.value}"
               + (f" ({nuc.origin_code})" if nuc.origin_code else ""))
    click.echo(f"  Mass excess:       {format_measurement(nuc.mass_excess, 3, 'keV')}")
    click.echo(f"  Binding energy/A:  {format_measurement(nuc.binding_energy_per_a, 3, 'keV')}")
    click.echo(f"  Beta-decay energy: {format_measurement(nuc.beta_decay_energy, 3, 'keV')}")
    click.echo(f"  Atomic mass:       {format_measurement(nuc.atomic_mass, 3, 'micro-u')}")
    click.echo()


@cli.command()
@click.option('--output', '-o', type=click.Path(), default=None,
              help='Where to save the table (default: AME2020_DATA_DIR/mass.mas20.txt)')
def download(output: str | None):
    """
    Download the AME2020 mass table from ANL or its mirrors.
    """
    if output and not validate_output_path(output):
        _fail("Invalid output path (path traversal not allowed)")

    try:
        path = download_ame2020(Path(output) if output else None)
    except RuntimeError as e:
        _fail(str(e))

    click.echo(f"AME2020 mass table available at {path}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
