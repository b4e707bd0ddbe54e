"""
Shared pytest fixtures for ame2020 tests.

Builds synthetic AME2020 data lines column by column from
``ame2020.layout.COLUMNS`` so tests never need the real mass table.
"""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ame2020.layout import COLUMNS, HEADER_LINES

# Verbatim neutron record from mass_1.mas20.txt (134 characters wide)
NEUTRON_LINE = (
    "0  1    1    0    1  n         8071.31806     0.00044       0.0        0.0     "
    "B-    782.3470     0.0004    1 008664.91590     0.00047"
)

# Hydrogen-1: stable, so its beta-decay energy is the '*' placeholder
HYDROGEN_FIELDS = {
    "neutron_excess": "-1",
    "neutron_number": "0",
    "proton_number": "1",
    "mass_number": "1",
    "element_symbol": "H",
    "origin_code": "",
    "mass_excess": "7288.971064",
    "mass_excess_unc": "0.000013",
    "binding_energy_per_a": "0.0",
    "binding_energy_per_a_unc": "0.0",
    "beta_decay_mode": "B-",
    "beta_decay_energy": "*",
    "beta_decay_energy_unc": "",
    "atomic_mass_int": "1",
    "atomic_mass": "007825.031898",
    "atomic_mass_unc": "0.000014",
}

# Oganesson-294: every quantity estimated from systematics
OGANESSON_FIELDS = {
    "neutron_excess": "58",
    "neutron_number": "176",
    "proton_number": "118",
    "mass_number": "294",
    "element_symbol": "Og",
    "origin_code": "-a",
    "mass_excess": "302270#",
    "mass_excess_unc": "490#",
    "binding_energy_per_a": "7052#",
    "binding_energy_per_a_unc": "2#",
    "beta_decay_mode": "B-",
    "beta_decay_energy": "-17790#",
    "beta_decay_energy_unc": "710#",
    "atomic_mass_int": "294",
    "atomic_mass": "324502#",
    "atomic_mass_unc": "526#",
}

LINE_WIDTH = 135


def build_line(fields: dict[str, str]) -> str:
    """Right-justify each field into its column range."""
    buf = [" "] * LINE_WIDTH
    for name, text in fields.items():
        start, end = COLUMNS[name]
        if len(text) > end - start:
            raise ValueError(f"{name}: {text!r} does not fit in {end - start} columns")
        buf[start:end] = text.rjust(end - start)
    return "".join(buf).rstrip()


def build_preamble(count: int = HEADER_LINES) -> list[str]:
    """A stand-in for the AME2020 preamble, column titles last."""
    lines = ["1    a0dsskgw A T O M I C   M A S S   A D J U S T M E N T"]
    lines += [f"0   preamble text line {i}" for i in range(1, max(count - 3, 0) + 1)]
    lines += [
        "1    N-Z    N    Z   A  EL    O     MASS EXCESS(keV)     BINDING ENERGY/A (keV)"
        "        BETA-DECAY ENERGY(keV)       ATOMIC MASS(micro-u)",
        "0",
    ]
    return lines[:count]


@pytest.fixture
def make_line():
    """Factory: H-1 line with any fields overridden."""
    def _make(base: dict[str, str] | None = None, **overrides: str) -> str:
        fields = dict(HYDROGEN_FIELDS if base is None else base)
        fields.update(overrides)
        return build_line(fields)
    return _make


@pytest.fixture
def hydrogen_line() -> str:
    return build_line(HYDROGEN_FIELDS)


@pytest.fixture
def oganesson_line() -> str:
    return build_line(OGANESSON_FIELDS)


@pytest.fixture
def make_source():
    """Factory: in-memory binary file holding a preamble followed by data lines."""
    def _make(data_lines: list[str], header_lines: int = HEADER_LINES, newline: str = "\n") -> io.BytesIO:
        lines = build_preamble(header_lines) + list(data_lines)
        text = newline.join(lines) + (newline if lines else "")
        return io.BytesIO(text.encode("utf-8"))
    return _make


@pytest.fixture
def table_file(tmp_path, make_source, hydrogen_line, oganesson_line):
    """A small mass table on disk: n-1, H-1, Og-294."""
    path = tmp_path / "mass.mas20.txt"
    path.write_bytes(make_source([NEUTRON_LINE, hydrogen_line, oganesson_line]).getvalue())
    return path
