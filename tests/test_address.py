"""
Unit tests for A1 address translation.

Tests cover:
- column_letter / column_index: bijective base-26 column names
- build_range: every range shape, argument validation
- qualify_range: sheet-name prefixing and quoting
- Range: parsing and formatting of open and closed ranges
"""

import pytest

from simplesheets.exceptions import InvalidArgumentError
from simplesheets.spreadsheet.address import (
    MAX_COLUMN_INDEX,
    Range,
    build_range,
    column_index,
    column_letter,
    qualify_range,
)


class TestColumnLetter:
    """Test Suite for column_letter."""

    @pytest.mark.parametrize(
        "index,letters",
        [
            (0, "A"),
            (1, "B"),
            (25, "Z"),
            (26, "AA"),
            (27, "AB"),
            (51, "AZ"),
            (52, "BA"),
            (701, "ZZ"),
            (702, "AAA"),
            (703, "AAB"),
            (18277, "ZZZ"),
        ],
    )
    def test_known_values(self, index, letters):
        assert column_letter(index) == letters

    def test_upper_bound_is_three_letters(self):
        assert MAX_COLUMN_INDEX == 18277
        assert len(column_letter(MAX_COLUMN_INDEX)) == 3

    @pytest.mark.parametrize("index", [-1, 18278, 100000])
    def test_out_of_range(self, index):
        with pytest.raises(InvalidArgumentError, match="between 0 and 18277"):
            column_letter(index)

    def test_rejects_non_integers(self):
        with pytest.raises(InvalidArgumentError):
            column_letter(1.5)  # type: ignore
        with pytest.raises(InvalidArgumentError):
            column_letter(True)  # type: ignore

    def test_invalid_argument_is_value_error(self):
        """Callers catching ValueError also catch address errors."""
        with pytest.raises(ValueError):
            column_letter(-1)


class TestColumnIndex:
    """Test Suite for column_index."""

    @pytest.mark.parametrize(
        "letters,index",
        [("A", 0), ("Z", 25), ("AA", 26), ("ZZ", 701), ("AAA", 702), ("ZZZ", 18277)],
    )
    def test_known_values(self, letters, index):
        assert column_index(letters) == index

    def test_round_trip_full_domain(self):
        """Decoding inverts encoding for every encodable column."""
        for i in range(MAX_COLUMN_INDEX + 1):
            assert column_index(column_letter(i)) == i

    @pytest.mark.parametrize("letters", ["", "AAAA", "A1", "a", "Ä", " A", "-"])
    def test_invalid_letters(self, letters):
        with pytest.raises(InvalidArgumentError):
            column_index(letters)


class TestBuildRange:
    """Test Suite for build_range."""

    def test_rectangle(self):
        assert build_range(5, 0, 5, 1) == "A5:B5"
        assert build_range(5, 0, 10, 1) == "A5:B10"

    def test_whole_row(self):
        assert build_range(5, None, 5, None) == "5:5"
        assert build_range(5, None, 10, None) == "5:10"

    def test_single_cell(self):
        assert build_range(5, 0, None, None) == "A5"
        assert build_range(5, 0) == "A5"

    def test_row_only_start(self):
        assert build_range(5) == "5"

    def test_empty(self):
        assert build_range() == ""

    def test_mixed_forms_preserved(self):
        assert build_range(5, 0, 10, None) == "A5:10"
        assert build_range(5, None, 10, 1) == "5:B10"

    def test_open_ended_rows(self):
        assert build_range(2, 0, None, 2) == "A2:C"

    def test_multi_letter_columns(self):
        assert build_range(1, 26, 100, 701) == "AA1:ZZ100"

    def test_row_zero_rejected(self):
        with pytest.raises(InvalidArgumentError, match="row_start"):
            build_range(0, 0, 1, 1)

    def test_negative_column_rejected(self):
        with pytest.raises(InvalidArgumentError, match="col_end"):
            build_range(1, 0, 1, -1)

    def test_end_row_rejected(self):
        with pytest.raises(InvalidArgumentError, match="row_end"):
            build_range(1, 0, 0, 1)

    def test_column_past_capacity_rejected(self):
        with pytest.raises(InvalidArgumentError):
            build_range(1, 18278)


class TestQualifyRange:
    """Test Suite for qualify_range."""

    def test_plain_name(self):
        assert qualify_range("Data", "A1:B2") == "Data!A1:B2"

    def test_name_with_space_is_quoted(self):
        assert qualify_range("My Sheet", "1:1") == "'My Sheet'!1:1"

    def test_embedded_quote_is_doubled(self):
        assert qualify_range("Bob's", "A1") == "'Bob''s'!A1"

    def test_empty_range_is_whole_sheet(self):
        assert qualify_range("Data") == "Data"
        assert qualify_range("My Sheet", "") == "'My Sheet'"


class TestRange:
    """Test Suite for Range class."""

    def test_defaults_are_open(self):
        r = Range()
        assert r.row is None
        assert r.col is None
        assert r.row_end is None
        assert r.col_end is None
        assert r.to_a1() == ""

    def test_invalid_coordinates(self):
        with pytest.raises(InvalidArgumentError):
            Range(row=0)
        with pytest.raises(InvalidArgumentError):
            Range(col=-1)
        with pytest.raises(InvalidArgumentError):
            Range(row=1, col=0, row_end=1, col_end=MAX_COLUMN_INDEX + 1)

    @pytest.mark.parametrize(
        "notation,coords",
        [
            ("A5", (5, 0, None, None)),
            ("5", (5, None, None, None)),
            ("A5:B10", (5, 0, 10, 1)),
            ("5:10", (5, None, 10, None)),
            ("A5:10", (5, 0, 10, None)),
            ("5:B10", (5, None, 10, 1)),
            ("A:C", (None, 0, None, 2)),
            ("A2:C", (2, 0, None, 2)),
            ("ZZZ1", (1, 18277, None, None)),
        ],
    )
    def test_from_a1_shapes(self, notation, coords):
        r = Range.from_a1(notation)
        assert (r.row, r.col, r.row_end, r.col_end) == coords
        assert r.to_a1() == notation

    def test_from_a1_empty(self):
        assert Range.from_a1("") == Range()
        assert Range.from_a1("   ") == Range()

    def test_from_a1_case_and_whitespace(self):
        assert Range.from_a1("  a1:b10 ") == Range(1, 0, 10, 1)

    @pytest.mark.parametrize("notation", ["1A", "A1:B2:C3", "A0", "AAAA1", "A1:", ":B2", "A-1"])
    def test_from_a1_invalid(self, notation):
        with pytest.raises(InvalidArgumentError):
            Range.from_a1(notation)

    def test_is_single_cell(self):
        assert Range.from_a1("B5").is_single_cell()
        assert not Range.from_a1("5").is_single_cell()
        assert not Range.from_a1("B5:B5").is_single_cell()

    def test_equality_and_repr(self):
        assert Range.from_a1("A1:B10") == Range(1, 0, 10, 1)
        assert Range.from_a1("A1:B10") != Range.from_a1("A1:C10")
        assert repr(Range.from_a1("A1:B10")) == "Range('A1:B10')"
