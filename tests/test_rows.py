"""
Unit tests for row transcoding (cell arrays <-> records <-> DataFrames).
"""

import pandas as pd
import pytest

from simplesheets.exceptions import InvalidArgumentError, MissingHeaderError
from simplesheets.spreadsheet.headers import HeaderIndex, build_header_index
from simplesheets.spreadsheet.rows import to_frame, to_record, to_row_array


@pytest.fixture
def abc_headers() -> HeaderIndex:
    return build_header_index(["A", "B", "C"])


@pytest.fixture
def sparse_headers() -> HeaderIndex:
    headers = HeaderIndex()
    headers.add_header("A", 0)
    headers.add_header("C", 2)
    return headers


class TestToRecord:
    """Test Suite for to_record."""

    def test_empty_values_omitted(self, abc_headers):
        assert to_record(["x", "", "y"], abc_headers) == {"A": "x", "C": "y"}

    def test_whitespace_values_omitted(self, abc_headers):
        assert to_record(["x", "   ", None], abc_headers) == {"A": "x"}

    def test_columns_without_header_dropped(self, sparse_headers):
        assert to_record(["x", "lost", "y", "also lost"], sparse_headers) == {"A": "x", "C": "y"}

    def test_short_row(self, abc_headers):
        assert to_record(["x"], abc_headers) == {"A": "x"}

    def test_empty_row(self, abc_headers):
        assert to_record([], abc_headers) == {}

    def test_values_kept_verbatim(self, abc_headers):
        assert to_record([" padded ", 3], abc_headers) == {"A": " padded ", "B": 3}


class TestToRowArray:
    """Test Suite for to_row_array."""

    def test_gap_left_unset(self, sparse_headers):
        row = to_row_array({"A": "x", "C": "y"}, sparse_headers)
        assert row == ["x", None, "y"]
        assert len(row) == 3

    def test_sized_by_rightmost_column_not_key_count(self):
        headers = HeaderIndex()
        headers.add_header("Far", 7)
        row = to_row_array({"Far": "v"}, headers)
        assert len(row) == 8
        assert row[7] == "v"
        assert row[:7] == [None] * 7

    def test_key_order_irrelevant(self, abc_headers):
        assert to_row_array({"C": 3, "A": 1}, abc_headers) == [1, None, 3]

    def test_missing_header(self, abc_headers):
        with pytest.raises(MissingHeaderError, match="Nope"):
            to_row_array({"A": "x", "Nope": "y"}, abc_headers)

    def test_missing_header_is_invalid_argument(self, abc_headers):
        with pytest.raises(InvalidArgumentError):
            to_row_array({"Nope": "y"}, abc_headers)

    def test_empty_record(self, abc_headers):
        assert to_row_array({}, abc_headers) == []

    def test_record_round_trip(self, abc_headers):
        record = {"A": "1", "C": "3"}
        assert to_record(to_row_array(record, abc_headers), abc_headers) == record


class TestToFrame:
    """Test Suite for to_frame."""

    def test_columns_follow_header_order(self, abc_headers):
        frame = to_frame([["1", "2", "3"], ["4", "", "6"]], abc_headers)
        assert list(frame.columns) == ["A", "B", "C"]
        assert frame.iloc[0].tolist() == ["1", "2", "3"]
        assert frame.iloc[1, 0] == "4"
        assert frame.iloc[1, 1] is None
        assert frame.iloc[1, 2] == "6"

    def test_short_rows_padded(self, abc_headers):
        frame = to_frame([["1"]], abc_headers)
        assert frame.iloc[0].tolist() == ["1", None, None]

    def test_unnamed_columns_dropped(self, sparse_headers):
        frame = to_frame([["x", "lost", "y"]], sparse_headers)
        assert list(frame.columns) == ["A", "C"]
        assert frame.iloc[0].tolist() == ["x", "y"]

    def test_no_rows(self, abc_headers):
        frame = to_frame([], abc_headers)
        assert isinstance(frame, pd.DataFrame)
        assert frame.empty
        assert list(frame.columns) == ["A", "B", "C"]
