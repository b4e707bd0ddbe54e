"""
Structured export of parsed nuclides.

JSON keeps the record shape of ``Nuclide.to_dict`` (absent numbers become
``null``) and reads back losslessly. DataFrames flatten each measurement into
value, uncertainty and estimated columns, with NaN where a value is absent.
"""

from __future__ import annotations

import json
from typing import Iterable

import numpy as np
import pandas as pd

from .layout import MEASUREMENT_FIELDS
from .models import Nuclide

__all__ = [
    "to_json",
    "from_json",
    "to_dataframe",
    "DATAFRAME_COLUMNS",
]

# Units of each measured quantity, used as column suffixes
_UNITS = {
    "mass_excess": "keV",
    "binding_energy_per_a": "keV",
    "beta_decay_energy": "keV",
    "atomic_mass": "micro_u",
}

DATAFRAME_COLUMNS = (
    ["Z", "N", "A", "Element", "origin", "origin_code", "beta_decay_mode"]
    + [
        col
        for quantity, unit in _UNITS.items()
        for col in (f"{quantity}_{unit}", f"{quantity}_unc_{unit}", f"{quantity}_estimated")
    ]
)


def to_json(nuclides: Iterable[Nuclide], indent: int | None = 2) -> str:
    """Encode nuclides as a JSON array."""
    return json.dumps([nuc.to_dict() for nuc in nuclides], indent=indent)


def from_json(text: str) -> list[Nuclide]:
    """
    Decode a JSON array produced by ``to_json``.

    Raises:
        ValueError: If the text is not a JSON array or a record is inconsistent.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of nuclides, got {type(data).__name__}")
    return [Nuclide.from_dict(item) for item in data]


def _as_float(value: float | None) -> float:
    return np.nan if value is None else value


def to_dataframe(nuclides: Iterable[Nuclide]) -> pd.DataFrame:
    """
    Flatten nuclides into a DataFrame, one row per nuclide.

    Columns are listed in ``DATAFRAME_COLUMNS``. Integer columns use pandas'
    nullable ``Int64`` so an empty table keeps its dtypes.
    """
    rows = []
    for nuc in nuclides:
        row = {
            "Z": nuc.proton_number,
            "N": nuc.neutron_number,
            "A": nuc.mass_number,
            "Element": nuc.element_symbol,
            "origin": nuc.origin.value,
            "origin_code": nuc.origin_code,
            "beta_decay_mode": nuc.beta_decay_mode,
        }
        for quantity in MEASUREMENT_FIELDS:
            unit = _UNITS[quantity]
            measurement = getattr(nuc, quantity)
            row[f"{quantity}_{unit}"] = _as_float(measurement.value)
            row[f"{quantity}_unc_{unit}"] = _as_float(measurement.uncertainty)
            row[f"{quantity}_estimated"] = measurement.estimated
        rows.append(row)

    df = pd.DataFrame(rows, columns=DATAFRAME_COLUMNS)
    for col in ["Z", "N", "A"]:
        df[col] = df[col].astype("Int64")
    return df
