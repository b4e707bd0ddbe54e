"""
Custom exceptions for the ame2020 package.

Every parse failure names the offending line, the field it happened in and
the raw column text, so a misaligned or corrupted table can be located
without re-reading the file by hand.
"""

__all__ = [
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


class AmeError(Exception):
    """Base exception for all ame2020 errors."""
    pass


class ParseError(AmeError):
    """
    Raised when a data line cannot be decoded into a Nuclide.

    Attributes:
        field: Name of the column that failed (see ``ame2020.layout.COLUMNS``).
        raw_text: The column text (or whole line) that failed.
        line_number: 1-based line number in the source, if known.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        raw_text: str = "",
        line_number: int | None = None,
    ):
        self.field = field
        self.raw_text = raw_text
        self.line_number = line_number
        self.reason = message
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line_number is None:
            return self.reason
        return f"line {self.line_number}: {self.reason}"

    def at_line(self, line_number: int) -> "ParseError":
        """Attach the source line number and return self."""
        self.line_number = line_number
        self.args = (self._format(),)
        return self


class RecordTooShortError(ParseError):
    """Raised when a line is narrower than the fixed column layout requires."""

    def __init__(self, raw_text: str, min_width: int, line_number: int | None = None):
        self.width = len(raw_text.encode("utf-8"))
        self.min_width = min_width
        super().__init__(
            f"record is {self.width} bytes wide, at least {min_width} required",
            raw_text=raw_text,
            line_number=line_number,
        )


class InvalidIntegerError(ParseError):
    """Raised when an integer column (N, Z, A) holds non-numeric text."""

    def __init__(self, field: str, raw_text: str, line_number: int | None = None):
        super().__init__(
            f"invalid integer in {field}: {raw_text!r}",
            field=field,
            raw_text=raw_text,
            line_number=line_number,
        )


class InvalidNumberError(ParseError):
    """Raised when a measured-value column holds malformed numeric text."""

    def __init__(self, field: str, raw_text: str, line_number: int | None = None):
        super().__init__(
            f"invalid number in {field}: {raw_text!r}",
            field=field,
            raw_text=raw_text,
            line_number=line_number,
        )


class ColumnEncodingError(ParseError):
    """Raised when a column boundary falls inside a multi-byte character."""

    def __init__(self, field: str, raw_text: str, line_number: int | None = None):
        super().__init__(
            f"column {field} does not hold valid UTF-8: {raw_text!r}",
            field=field,
            raw_text=raw_text,
            line_number=line_number,
        )


class SymbolMismatchError(ParseError):
    """
    Raised when the element symbol does not belong to the proton number.

    This almost always means the columns are misaligned.

    Attributes:
        expected: Canonical symbol for ``proton_number`` (None if Z is unknown).
        found: Symbol read from the element column.
        proton_number: Z read from the proton column.
    """

    def __init__(
        self,
        expected: str | None,
        found: str,
        proton_number: int,
        line_number: int | None = None,
    ):
        self.expected = expected
        self.found = found
        self.proton_number = proton_number
        if expected is None:
            message = f"no element symbol is known for Z={proton_number}, found {found!r}"
        else:
            message = f"element symbol {found!r} does not match Z={proton_number} ({expected})"
        super().__init__(
            message,
            field="element_symbol",
            raw_text=found,
            line_number=line_number,
        )


class MassNumberMismatchError(ParseError):
    """
    Raised when the mass number column disagrees with N + Z.

    Attributes:
        expected: N + Z computed from the neutron and proton columns.
        found: A read from the mass number column.
    """

    def __init__(self, expected: int, found: int, raw_text: str = "", line_number: int | None = None):
        self.expected = expected
        self.found = found
        super().__init__(
            f"mass number A={found} but N+Z={expected}",
            field="mass_number",
            raw_text=raw_text,
            line_number=line_number,
        )


class SourceReadError(AmeError):
    """
    Raised when the underlying line source fails to produce a line.

    Wraps the original ``OSError`` or ``UnicodeDecodeError``, which is also
    available as ``__cause__``.
    """

    def __init__(self, cause: Exception, line_number: int | None = None):
        self.cause = cause
        self.line_number = line_number
        where = f"line {line_number}" if line_number is not None else "source"
        super().__init__(f"read error at {where}: {type(cause).__name__}: {cause}")


class DataFileNotFoundError(AmeError):
    """Raised when the mass table file is not found."""

    def __init__(self, filepath: str, suggestion: str | None = None):
        self.filepath = filepath
        message = f"Data file not found: {filepath}"
        if suggestion:
            message += f"\n{suggestion}"
        super().__init__(message)


class NuclideNotFoundError(AmeError):
    """
    Raised when a requested nuclide is not in the table.

    Attributes:
        z: Proton number that was requested.
        n: Neutron number that was requested.
        suggestions: N values that do exist for this Z.
    """

    def __init__(self, z: int, n: int, suggestions: list[int] | None = None):
        self.z = z
        self.n = n
        self.suggestions = suggestions or []

        message = f"No data found for nuclide with Z={z}, N={n} (A={z+n})"
        if self.suggestions:
            suggestion_str = ", ".join(f"N={s}" for s in self.suggestions[:5])
            message += f". Available N values for Z={z}: {suggestion_str}"

        super().__init__(message)
