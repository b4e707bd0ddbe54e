"""Tests for the line source adapter and the Iter sequence driver."""

import io

import pytest

from ame2020.exceptions import (
    AmeError,
    InvalidIntegerError,
    RecordTooShortError,
    SourceReadError,
    SymbolMismatchError,
)
from ame2020.layout import HEADER_LINES
from ame2020.models import Nuclide
from ame2020.reader import Iter, collect, read_lines

from conftest import NEUTRON_LINE, build_preamble


class CountingSource:
    """Line source that records how many lines were pulled."""

    def __init__(self, lines):
        self._lines = list(lines)
        self.pulls = 0

    def __iter__(self):
        for line in self._lines:
            self.pulls += 1
            yield line


class FailingSource:
    """Line source whose read fails after a number of lines."""

    def __init__(self, lines, error):
        self._lines = list(lines)
        self._error = error

    def __iter__(self):
        yield from self._lines
        raise self._error


class TestReadLines:
    """Tests for read_lines."""

    def test_bytes_lines(self):
        source = io.BytesIO(b"first\nsecond\n")
        assert list(read_lines(source)) == [(0, "first"), (1, "second")]

    def test_text_lines(self):
        source = io.StringIO("first\nsecond")
        assert list(read_lines(source)) == [(0, "first"), (1, "second")]

    def test_crlf_stripped(self):
        source = io.BytesIO(b"first\r\nsecond\r\n")
        assert [text for _, text in read_lines(source)] == ["first", "second"]

    def test_plain_iterable(self):
        assert list(read_lines(["a", b"b"])) == [(0, "a"), (1, "b")]

    def test_inner_whitespace_kept(self):
        assert list(read_lines(["  a  \n"])) == [(0, "  a  ")]

    def test_empty_source(self):
        assert list(read_lines(io.BytesIO(b""))) == []

    def test_non_utf8(self):
        lines = read_lines(io.BytesIO(b"ok\n\xff\xfe\n"))
        assert next(lines) == (0, "ok")
        with pytest.raises(SourceReadError) as exc_info:
            next(lines)
        assert exc_info.value.line_number == 2
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    def test_os_error_passthrough(self):
        error = OSError("disk on fire")
        with pytest.raises(SourceReadError) as exc_info:
            list(read_lines(FailingSource(["a"], error)))
        assert exc_info.value.cause is error
        assert exc_info.value.__cause__ is error
        assert "disk on fire" in str(exc_info.value)


class TestIterEndToEnd:
    """End-to-end scenarios from source to records."""

    def test_empty_source(self):
        assert list(Iter(io.BytesIO(b""))) == []

    def test_only_header(self, make_source):
        it = Iter(make_source([]))
        assert list(it) == []
        assert it.error is None

    def test_partial_header(self, make_source):
        """A source ending inside the preamble is empty, not malformed."""
        assert list(Iter(make_source([], header_lines=10))) == []

    def test_header_lines_never_surface(self, make_source):
        """Preamble lines would fail to parse if they reached the parser."""
        source = make_source([NEUTRON_LINE])
        results = list(Iter(source).results())
        assert len(results) == 1
        assert isinstance(results[0], Nuclide)

    def test_single_light_nuclide(self, make_source, hydrogen_line):
        results = list(Iter(make_source([hydrogen_line])).results())
        assert len(results) == 1
        nuc = results[0]
        assert isinstance(nuc, Nuclide)
        assert nuc.proton_number == 1
        assert nuc.neutron_number == 0
        assert nuc.mass_number == 1
        assert nuc.element_symbol == "H"

    def test_symbol_mismatch_ends_sequence(self, make_source, make_line, hydrogen_line):
        source = make_source([make_line(element_symbol="Li"), hydrogen_line])
        results = list(Iter(source).results())
        assert len(results) == 1
        assert isinstance(results[0], SymbolMismatchError)
        assert results[0].line_number == HEADER_LINES + 1

    def test_multiple_records_in_order(self, make_source, hydrogen_line, oganesson_line):
        nuclides = collect(make_source([NEUTRON_LINE, hydrogen_line, oganesson_line]))
        assert [nuc.name for nuc in nuclides] == ["n-1", "H-1", "Og-294"]

    def test_crlf_source(self, make_source, hydrogen_line):
        nuclides = list(Iter(make_source([NEUTRON_LINE, hydrogen_line], newline="\r\n")))
        assert [nuc.name for nuc in nuclides] == ["n-1", "H-1"]

    def test_text_source(self, make_source, hydrogen_line):
        text = make_source([hydrogen_line]).getvalue().decode("utf-8")
        assert len(list(Iter(io.StringIO(text)))) == 1

    def test_header_override(self, make_source, hydrogen_line):
        source = make_source([hydrogen_line], header_lines=2)
        assert len(list(Iter(source, header_lines=2))) == 1

    def test_no_header(self, hydrogen_line):
        assert len(list(Iter([hydrogen_line], header_lines=0))) == 1

    def test_wrong_header_size_is_an_error(self, make_source, hydrogen_line):
        """With too small a header count, preamble text reaches the parser."""
        source = make_source([hydrogen_line], header_lines=HEADER_LINES)
        with pytest.raises(RecordTooShortError):
            list(Iter(source, header_lines=HEADER_LINES - 1))


class TestIterFailFast:
    """Tests that the sequence stops at the first error."""

    @pytest.mark.parametrize("k", [0, 1, 3])
    def test_error_at_position_k(self, make_source, make_line, hydrogen_line, k):
        lines = [hydrogen_line] * k + [make_line(neutron_number="?")] + [hydrogen_line] * 5
        results = list(Iter(make_source(lines)).results())
        assert len(results) == k + 1
        assert all(isinstance(r, Nuclide) for r in results[:k])
        assert isinstance(results[k], InvalidIntegerError)

    def test_no_pulls_after_error(self, make_line, hydrogen_line):
        bad = make_line(mass_number="9")
        source = CountingSource([hydrogen_line, bad, hydrogen_line, hydrogen_line])
        it = Iter(source, header_lines=0)
        list(it.results())
        assert source.pulls == 2
        with pytest.raises(StopIteration):
            next(it)
        assert source.pulls == 2

    def test_raises_then_exhausted(self, make_line, hydrogen_line):
        it = Iter([hydrogen_line, make_line(element_symbol="He"), hydrogen_line], header_lines=0)
        assert isinstance(next(it), Nuclide)
        with pytest.raises(SymbolMismatchError):
            next(it)
        with pytest.raises(StopIteration):
            next(it)
        assert isinstance(it.error, SymbolMismatchError)
        assert it.records == 1

    def test_collect_raises_first_error(self, make_source, make_line, hydrogen_line):
        source = make_source([hydrogen_line, "short", make_line(element_symbol="He")])
        with pytest.raises(RecordTooShortError) as exc_info:
            collect(source)
        assert exc_info.value.line_number == HEADER_LINES + 2

    def test_read_error_surfaced(self, hydrogen_line):
        error = OSError("connection reset")
        it = Iter(FailingSource([hydrogen_line], error), header_lines=0)
        results = list(it.results())
        assert isinstance(results[0], Nuclide)
        assert isinstance(results[1], SourceReadError)
        assert len(results) == 2

    def test_non_utf8_surfaced(self, hydrogen_line):
        source = io.BytesIO(hydrogen_line.encode() + b"\n\xff\n")
        results = list(Iter(source, header_lines=0).results())
        assert isinstance(results[-1], SourceReadError)
        assert isinstance(results[-1], AmeError)

    def test_non_utf8_in_header(self):
        """Header lines are still read, so undecodable bytes there surface too."""
        source = io.BytesIO(b"\xff\n")
        with pytest.raises(SourceReadError):
            list(Iter(source))


class TestIterProtocol:
    """Tests for iterator behaviour."""

    def test_iter_returns_self(self):
        it = Iter([])
        assert iter(it) is it

    def test_single_pass(self, hydrogen_line):
        it = Iter([hydrogen_line], header_lines=0)
        assert len(list(it)) == 1
        assert list(it) == []

    def test_exhausted_stays_exhausted(self):
        it = Iter([], header_lines=0)
        for _ in range(3):
            with pytest.raises(StopIteration):
                next(it)

    def test_stop_early_needs_no_cleanup(self, hydrogen_line):
        source = CountingSource([hydrogen_line] * 10)
        it = Iter(source, header_lines=0)
        next(it)
        assert source.pulls == 1
        assert it.records == 1

    def test_preamble_fixture_size(self):
        assert len(build_preamble()) == HEADER_LINES
