"""
Record parser for the AME2020 mass table.

Turns one physical line of ``mass_1.mas20.txt`` into a validated ``Nuclide``.
Slicing is purely positional over the UTF-8 bytes of the line (see
``ame2020.layout``); there is no attempt to re-align columns when whitespace
differs from the published layout, so a shifted line fails
loudly instead of producing plausible garbage.

Parsing is fail-fast: the first malformed field aborts the whole record.
"""

from __future__ import annotations

import math
import re

from .config import Config
from .exceptions import (
    ColumnEncodingError,
    InvalidIntegerError,
    InvalidNumberError,
    MassNumberMismatchError,
    ParseError,
    RecordTooShortError,
    SymbolMismatchError,
)
from .layout import (
    COLUMNS,
    ESTIMATE_MARKER,
    HEADER_LINES,
    MEASUREMENT_FIELDS,
    MIN_RECORD_WIDTH,
    PLACEHOLDER,
)
from .models import Measurement, Nuclide, Origin

__all__ = [
    "is_header",
    "parse_record",
]

# Pre-compiled patterns; int()/float() alone would accept '1_000', 'nan', 'inf'
_INTEGER_PATTERN = re.compile(r"[0-9]+")
_NUMBER_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_SYMBOL_PATTERN = re.compile(r"[A-Za-z]{1,3}")


def is_header(index: int, header_lines: int = HEADER_LINES) -> bool:
    """
    Classify a line by its 0-based position.

    Args:
        index: 0-based line index in the source.
        header_lines: Number of preamble lines before the first record.

    Returns:
        True if the line belongs to the preamble and carries no data.
    """
    return index < header_lines


def _column(record: bytes, name: str) -> str:
    start, end = COLUMNS[name]
    raw = record[start:end]
    try:
        return raw.decode("utf-8").strip()
    except UnicodeDecodeError as e:
        raise ColumnEncodingError(name, raw.decode("utf-8", errors="replace")) from e


def _parse_integer(record: bytes, name: str) -> int:
    text = _column(record, name)
    if not _INTEGER_PATTERN.fullmatch(text):
        raise InvalidIntegerError(name, text)
    return int(text)


def _parse_number(name: str, text: str) -> tuple[float | None, bool]:
    """Decode one numeric column into (value, estimated)."""
    if text == PLACEHOLDER:
        return None, False

    estimated = ESTIMATE_MARKER in text
    numeric = text
    if estimated:
        # '#' stands in place of the decimal point
        replacement = "" if "." in text else "."
        numeric = text.replace(ESTIMATE_MARKER, replacement)

    if not _NUMBER_PATTERN.fullmatch(numeric):
        raise InvalidNumberError(name, text)
    value = float(numeric)
    if not math.isfinite(value):
        raise InvalidNumberError(name, text)
    return value, estimated


def _parse_measurement(record: bytes, quantity: str) -> Measurement:
    value_col, unc_col = MEASUREMENT_FIELDS[quantity]
    value_text = _column(record, value_col)
    unc_text = _column(record, unc_col)

    value, estimated = _parse_number(value_col, value_text)
    if value is None and unc_text in ("", PLACEHOLDER):
        uncertainty = None
    else:
        uncertainty, _ = _parse_number(unc_col, unc_text)

    return Measurement(value=value, uncertainty=uncertainty, estimated=estimated)


def _parse_atomic_mass(record: bytes) -> Measurement:
    # The mass is split into whole u (i3) and micro-u (f13.6) columns
    whole_u = _parse_integer(record, "atomic_mass_int")
    micro_u = _parse_measurement(record, "atomic_mass")
    if micro_u.value is None:
        return micro_u
    return Measurement(
        value=whole_u * 1e6 + micro_u.value,
        uncertainty=micro_u.uncertainty,
        estimated=micro_u.estimated,
    )


def _decode(line: str) -> Nuclide:
    # Columns are byte offsets into the UTF-8 encoded line
    record = line.encode("utf-8")
    if len(record) < MIN_RECORD_WIDTH:
        raise RecordTooShortError(line, MIN_RECORD_WIDTH)

    n = _parse_integer(record, "neutron_number")
    z = _parse_integer(record, "proton_number")
    a = _parse_integer(record, "mass_number")

    symbol = _column(record, "element_symbol")
    expected = Config.get_element_symbol(z)
    if not _SYMBOL_PATTERN.fullmatch(symbol) or symbol != expected:
        raise SymbolMismatchError(expected=expected, found=symbol, proton_number=z)

    if a != n + z:
        raise MassNumberMismatchError(expected=n + z, found=a, raw_text=_column(record, "mass_number"))

    # Remaining columns in left-to-right order
    origin_code = _column(record, "origin_code")
    mass_excess = _parse_measurement(record, "mass_excess")
    binding_energy_per_a = _parse_measurement(record, "binding_energy_per_a")
    beta_decay_mode = _column(record, "beta_decay_mode")
    beta_decay_energy = _parse_measurement(record, "beta_decay_energy")
    atomic_mass = _parse_atomic_mass(record)

    return Nuclide(
        neutron_number=n,
        proton_number=z,
        mass_number=a,
        element_symbol=symbol,
        origin=Origin.ESTIMATED if mass_excess.estimated else Origin.MEASURED,
        origin_code=origin_code,
        mass_excess=mass_excess,
        binding_energy_per_a=binding_energy_per_a,
        beta_decay_mode=beta_decay_mode,
        beta_decay_energy=beta_decay_energy,
        atomic_mass=atomic_mass,
    )


def parse_record(line: str, line_number: int | None = None) -> Nuclide:
    """
    Decode one AME2020 data line.

    Args:
        line: A single line of text without its line delimiter.
        line_number: 1-based position in the source, attached to any error.

    Returns:
        The decoded Nuclide.

    Raises:
        RecordTooShortError: If the line is narrower than the layout, in bytes.
        ColumnEncodingError: If a column boundary splits a multi-byte character.
        InvalidIntegerError: If N, Z, A or the whole-u mass column is not an integer.
        SymbolMismatchError: If the element symbol does not belong to Z.
        MassNumberMismatchError: If A != N + Z.
        InvalidNumberError: If a measured-value column is malformed.

    Example:
        >>> nuc = parse_record(line)
        >>> nuc.name
        'n-1'
    """
    try:
        return _decode(line)
    except ParseError as e:
        if line_number is not None:
            e.at_line(line_number)
        raise
