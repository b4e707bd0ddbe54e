"""
Lazy reading of AME2020 mass tables.

``Iter`` drives any line-producing source through the record parser and
yields one ``Nuclide`` per data line. The caller owns the source: nothing here
opens, buffers beyond one line, or closes it.

Usage:
    >>> from ame2020 import Iter
    >>> with open("mass_1.mas20.txt", "rb") as f:
    ...     nuclides = list(Iter(f))

Once a line fails to parse the iterator is exhausted. A misaligned table has
almost certainly lost column synchronization for every following line, so no
attempt is made to resume.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from .config import get_logger
from .exceptions import AmeError, ParseError, SourceReadError
from .layout import HEADER_LINES
from .models import Nuclide
from .parser import is_header, parse_record

logger = get_logger("reader")

__all__ = [
    "read_lines",
    "Iter",
    "collect",
]


def read_lines(source: Iterable[bytes] | Iterable[str]) -> Iterator[tuple[int, str]]:
    """
    Yield ``(index, text)`` for every line of ``source``.

    Args:
        source: A binary or text file object, or any iterable of ``bytes`` or
            ``str`` lines. Bytes are decoded as UTF-8.

    Yields:
        0-based line index and the line text with its delimiter removed.

    Raises:
        SourceReadError: If the source fails to read or a line is not valid UTF-8.
    """
    lines = iter(source)
    index = 0
    while True:
        try:
            raw = next(lines)
        except StopIteration:
            return
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(e, line_number=index + 1) from e

        if isinstance(raw, (bytes, bytearray)):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise SourceReadError(e, line_number=index + 1) from e

        yield index, raw.rstrip("\r\n")
        index += 1


class Iter:
    """
    Single-pass iterator of Nuclide records.

    Args:
        source: Line source positioned at the start of the table (see
            ``read_lines``).
        header_lines: Number of preamble lines to discard. Defaults to the
            AME2020 preamble length.

    Iterating raises the first ``AmeError`` encountered; afterwards the
    iterator is exhausted. Use ``results()`` to receive the error as a value
    instead.

    Attributes:
        records: Number of records parsed so far.
        error: The error that ended iteration, if any.
    """

    def __init__(self, source: Iterable[bytes] | Iterable[str], header_lines: int = HEADER_LINES):
        self._lines = read_lines(source)
        self._header_lines = header_lines
        self._done = False
        self.records = 0
        self.error: AmeError | None = None

    def __iter__(self) -> "Iter":
        return self

    def __next__(self) -> Nuclide:
        if self._done:
            raise StopIteration

        while True:
            try:
                index, line = next(self._lines)
            except StopIteration:
                self._finish()
                raise
            except SourceReadError as e:
                self._fail(e)
                raise

            if is_header(index, self._header_lines):
                if index == self._header_lines - 1:
                    logger.debug(f"Skipped {self._header_lines} header lines")
                continue

            try:
                nuclide = parse_record(line, line_number=index + 1)
            except ParseError as e:
                self._fail(e)
                raise

            self.records += 1
            return nuclide

    def results(self) -> Iterator[Nuclide | AmeError]:
        """
        Yield each Nuclide, or the error that ended the sequence.

        An error, when present, is always the last item.
        """
        while True:
            try:
                nuclide = next(self)
            except StopIteration:
                return
            except AmeError as e:
                yield e
                return
            yield nuclide

    def _finish(self) -> None:
        self._done = True
        logger.info(f"Parsed {self.records} nuclides")

    def _fail(self, error: AmeError) -> None:
        self._done = True
        self.error = error
        self._lines.close()
        logger.warning(f"Stopped after {self.records} nuclides: {error}")


def collect(source: Iterable[bytes] | Iterable[str], header_lines: int = HEADER_LINES) -> list[Nuclide]:
    """
    Parse a whole table, or raise the first error.

    Example:
        >>> import io
        >>> collect(io.BytesIO(b""))
        []
    """
    return list(Iter(source, header_lines=header_lines))
