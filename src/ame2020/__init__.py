"""
ame2020 - Parser for the Atomic Mass Evaluation 2020 mass table.

Reads the fixed-column ``mass_1.mas20.txt`` file into typed ``Nuclide``
records with mass excess, binding energy per nucleon, beta-decay energy and
atomic mass, each carried as a value, an uncertainty and an estimated flag.

Quick Start:
    >>> from ame2020 import Iter
    >>> with open("mass_1.mas20.txt", "rb") as f:
    ...     nuclides = list(Iter(f))
    >>> nuclides[0].name
    'n-1'

The rounded table (``mass_1.rd20``) and earlier evaluations use other column
layouts and are not supported.

Reference:
    AME2020: Wang et al., Chinese Physics C 45, 030003 (2021)
        DOI: 10.1088/1674-1137/abddb0
"""

from .models import Measurement, Nuclide, Origin
from .parser import is_header, parse_record
from .reader import Iter, collect, read_lines
from .table import MassTable, download_ame2020
from .export import from_json, to_dataframe, to_json
from .exceptions import (
    AmeError,
    ParseError,
    RecordTooShortError,
    InvalidIntegerError,
    InvalidNumberError,
    ColumnEncodingError,
    SymbolMismatchError,
    MassNumberMismatchError,
    SourceReadError,
    DataFileNotFoundError,
    NuclideNotFoundError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "Iter",
    "collect",
    "read_lines",
    "parse_record",
    "is_header",
    "Nuclide",
    "Measurement",
    "Origin",
    # File access and export
    "MassTable",
    "download_ame2020",
    "to_json",
    "from_json",
    "to_dataframe",
    # Exceptions
    "AmeError",
    "ParseError",
    "RecordTooShortError",
    "InvalidIntegerError",
    "InvalidNumberError",
    "ColumnEncodingError",
    "SymbolMismatchError",
    "MassNumberMismatchError",
    "SourceReadError",
    "DataFileNotFoundError",
    "NuclideNotFoundError",
]
