"""
AME2020 (Atomic Mass Evaluation 2020) mass table.

Downloads the official table and gives file-level access to its records.
Reference: Wang et al., Chinese Physics C 45, 030003 (2021)
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pandas as pd

from .config import Config, get_logger
from .exceptions import DataFileNotFoundError, NuclideNotFoundError
from .export import to_dataframe, to_json
from .layout import HEADER_LINES
from .models import Nuclide
from .reader import Iter
from .utils import download_with_mirrors

logger = get_logger("table")

__all__ = [
    "MassTable",
    "download_ame2020",
    "AME2020_MIRRORS",
]

AME2020_MIRRORS = [
    "https://www.anl.gov/sites/www/files/2021-03/mass.mas20.txt",
    "https://www.anl.gov/sites/www/files/2021-04/mass_1.mas20.txt",
    # IAEA AMDC mirror
    "https://www-nds.iaea.org/amdc/ame2020/mass_1.mas20.txt",
]


def download_ame2020(output_path: Path | None = None) -> Path:
    """
    Download the AME2020 mass table from ANL or mirrors.

    Args:
        output_path: Where to save the file. Defaults to DATA_DIR/mass.mas20.txt

    Returns:
        Path to the downloaded file.

    Raises:
        RuntimeError: If download fails from all mirrors.
    """
    if output_path is None:
        output_path = Config.DATA_DIR / "mass.mas20.txt"

    def validate_ame_markers(content: str) -> tuple[bool, str]:
        """Check for the column titles of the mass table."""
        if "MASS EXCESS" in content[:10000].upper():
            return (True, "")
        return (False, "Content doesn't appear to be AME2020 data")

    validators = [
        lambda c: (len(c) >= 1000, f"File too small ({len(c)} bytes)"),
        lambda c: ("<html" not in c[:500].lower(), "Received HTML instead of data"),
        validate_ame_markers,
    ]

    return download_with_mirrors(
        mirrors=AME2020_MIRRORS,
        output_path=output_path,
        validators=validators,
        data_name="AME2020",
    )


class MassTable:
    """
    An AME2020 ``mass_1.mas20.txt`` file.

    The whole file is parsed on first access and cached. Any malformed line
    aborts parsing with the error for that line.

    Usage:
        >>> table = MassTable("data/mass.mas20.txt")
        >>> fe56 = table.get_nuclide(z=26, n=30)
        >>> fe56.name
        'Fe-56'
    """

    def __init__(self, filepath: Path | str, header_lines: int = HEADER_LINES):
        self.filepath = Path(filepath)
        self.header_lines = header_lines
        self._nuclides: list[Nuclide] | None = None

    def __repr__(self) -> str:
        state = f"{len(self._nuclides)} nuclides" if self._nuclides is not None else "not parsed"
        return f"MassTable({str(self.filepath)!r}, {state})"

    def parse(self) -> list[Nuclide]:
        """
        Parse the file and return all nuclides in file order.

        Raises:
            DataFileNotFoundError: If the file does not exist.
            AmeError: The first read or parse error in the file.
        """
        if self._nuclides is not None:
            return self._nuclides

        if not self.filepath.exists():
            raise DataFileNotFoundError(
                str(self.filepath),
                "Run 'ame2020 download' or fetch it from "
                "https://www.anl.gov/phy/atomic-mass-data-resources",
            )

        with open(self.filepath, "rb") as f:
            nuclides = list(Iter(f, header_lines=self.header_lines))

        logger.info(f"Read {len(nuclides)} nuclides from {self.filepath}")
        self._nuclides = nuclides
        return nuclides

    def __len__(self) -> int:
        return len(self.parse())

    def __iter__(self) -> Iterator[Nuclide]:
        return iter(self.parse())

    def get_nuclide(self, z: int, n: int) -> Nuclide:
        """
        Get data for a specific nuclide by Z and N.

        Raises:
            NuclideNotFoundError: If the nuclide is not in the table. The error
                lists the N values that do exist for this Z.
        """
        nuc = self.get_nuclide_or_none(z, n)
        if nuc is None:
            suggestions = [iso.neutron_number for iso in self.get_element(z)]
            raise NuclideNotFoundError(z, n, suggestions=suggestions)
        return nuc

    def get_nuclide_or_none(self, z: int, n: int) -> Nuclide | None:
        """Like get_nuclide, but return None if the nuclide is not in the table."""
        for nuc in self.parse():
            if nuc.proton_number == z and nuc.neutron_number == n:
                return nuc
        return None

    def get_element(self, z: int) -> list[Nuclide]:
        """Get all isotopes of an element by Z, ordered by N."""
        isotopes = [nuc for nuc in self.parse() if nuc.proton_number == z]
        return sorted(isotopes, key=lambda nuc: nuc.neutron_number)

    def to_dataframe(self) -> pd.DataFrame:
        return to_dataframe(self.parse())

    def to_csv(self, output_path: Path | str) -> None:
        """Export parsed data to CSV."""
        df = self.to_dataframe()
        df.to_csv(output_path, index=False)
        logger.info(f"Exported {len(df)} nuclides to {output_path}")

    def to_json(self, output_path: Path | str, indent: int | None = 2) -> None:
        """Export parsed data to JSON."""
        nuclides = self.parse()
        Path(output_path).write_text(to_json(nuclides, indent=indent))
        logger.info(f"Exported {len(nuclides)} nuclides to {output_path}")
