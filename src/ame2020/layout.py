"""
Fixed-column layout of the AME2020 mass table (``mass_1.mas20.txt``).

The file has no field separators. Every field lives at a constant column
range documented in the file's own preamble by the Fortran format::

    a1,i3,i5,i5,i5,1x,a3,a4,1x,f14.6,f12.6,f13.5,1x,f10.5,1x,a2,f13.5,f11.5,1x,i3,1x,f13.6,f12.6

Ranges below are half-open ``(start, end)`` offsets, 0-indexed, so that
``line[start:end]`` yields the raw field text.

Only this layout is supported. The rounded table and earlier evaluations
(AME2016, AME2012) shift columns and will be rejected or mis-decoded.
"""

from __future__ import annotations

__all__ = [
    "HEADER_LINES",
    "MIN_RECORD_WIDTH",
    "PLACEHOLDER",
    "ESTIMATE_MARKER",
    "COLUMNS",
    "INTEGER_FIELDS",
    "MEASUREMENT_FIELDS",
]

# Preamble (format legend, references) plus the two column-title lines
HEADER_LINES = 36

# Marks a quantity that cannot be calculated (e.g. beta-decay energy of the neutron drip line)
PLACEHOLDER = "*"

# Replaces the decimal point of values derived from systematics rather than measurement
ESTIMATE_MARKER = "#"

COLUMNS: dict[str, tuple[int, int]] = {
    "page_feed": (0, 1),
    "neutron_excess": (1, 4),
    "neutron_number": (4, 9),
    "proton_number": (9, 14),
    "mass_number": (14, 19),
    "element_symbol": (20, 23),
    "origin_code": (23, 27),
    "mass_excess": (28, 42),
    "mass_excess_unc": (42, 54),
    "binding_energy_per_a": (54, 67),
    "binding_energy_per_a_unc": (68, 78),
    "beta_decay_mode": (79, 81),
    "beta_decay_energy": (81, 94),
    "beta_decay_energy_unc": (94, 105),
    "atomic_mass_int": (106, 109),
    "atomic_mass": (110, 123),
    "atomic_mass_unc": (123, 135),
}

# The published file writes the last uncertainty one column short of f12.6,
# so data lines end at 134. A record must reach into that final column.
MIN_RECORD_WIDTH = COLUMNS["atomic_mass_unc"][0] + 1

INTEGER_FIELDS = ("neutron_number", "proton_number", "mass_number")

# (value column, uncertainty column) per measured quantity
MEASUREMENT_FIELDS: dict[str, tuple[str, str]] = {
    "mass_excess": ("mass_excess", "mass_excess_unc"),
    "binding_energy_per_a": ("binding_energy_per_a", "binding_energy_per_a_unc"),
    "beta_decay_energy": ("beta_decay_energy", "beta_decay_energy_unc"),
    "atomic_mass": ("atomic_mass", "atomic_mass_unc"),
}
