"""
A1 address translation.

This module converts between numeric cell coordinates and the A1 notation
accepted by the Google Sheets values API:
- column_letter / column_index: 0-indexed column <-> letters (A, Z, AA, ZZZ)
- build_range: optional row/column coordinates -> range text ("A5:B10", "5:5")
- qualify_range: prefix a range with its sheet name
- Range: value object pairing the coordinates with parsing via from_a1()

Rows are 1-indexed (row 1 is the header row); columns are 0-indexed.
"""

import re
from typing import Optional

from simplesheets.exceptions import InvalidArgumentError


# Three-letter capacity: A..Z, AA..ZZ, AAA..ZZZ
MAX_COLUMN_INDEX = 18277
MAX_COLUMN_LETTERS = 3

_COLUMN_RE = re.compile(r"^[A-Z]{1,3}$")
_ENDPOINT_RE = re.compile(r"^([A-Z]*)(\d*)$")
_PLAIN_SHEET_NAME_RE = re.compile(r"^[A-Za-z0-9_]+$")


def column_letter(index: int) -> str:
    """Convert a 0-indexed column number to its letters.

    Columns use bijective base-26: there is no zero digit, so each position
    is found by subtracting one before taking the remainder.

    Args:
        index: Column number (0 = A, 25 = Z, 26 = AA, 18277 = ZZZ)

    Returns:
        Column letters in A1 notation

    Raises:
        InvalidArgumentError: If index is outside 0..18277
    """
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidArgumentError(f"Column index must be an integer, got {index!r}")
    if index < 0 or index > MAX_COLUMN_INDEX:
        raise InvalidArgumentError(
            f"Column index must be between 0 and {MAX_COLUMN_INDEX}, inclusive (got {index})"
        )

    # Convert 0-indexed to 1-indexed for A1 notation
    remaining = index + 1
    result = ""
    while remaining > 0:
        remaining -= 1
        result = chr(65 + (remaining % 26)) + result
        remaining //= 26
    return result


def column_index(letters: str) -> int:
    """Convert column letters back to a 0-indexed column number.

    Args:
        letters: One to three uppercase letters (A, Z, AA, ZZZ)

    Returns:
        Column number (A = 0, Z = 25, AA = 26)

    Raises:
        InvalidArgumentError: If letters is empty, longer than three
            characters, or contains anything other than A-Z
    """
    if not isinstance(letters, str) or not _COLUMN_RE.match(letters):
        raise InvalidArgumentError(
            f"Column letters must be 1 to {MAX_COLUMN_LETTERS} uppercase letters, got {letters!r}"
        )

    value = 0
    for char in letters:
        value = value * 26 + (ord(char) - 64)
    # Convert from 1-indexed to 0-indexed
    return value - 1


def _check_row(row: Optional[int], label: str) -> None:
    if row is None:
        return
    if isinstance(row, bool) or not isinstance(row, int) or row < 1:
        raise InvalidArgumentError(f"{label} must be an integer >= 1, got {row!r}")


def _check_column(col: Optional[int], label: str) -> None:
    if col is None:
        return
    if isinstance(col, bool) or not isinstance(col, int) or col < 0:
        raise InvalidArgumentError(f"{label} must be an integer >= 0, got {col!r}")


def _endpoint(row: Optional[int], col: Optional[int]) -> str:
    text = column_letter(col) if col is not None else ""
    return text + (str(row) if row is not None else "")


def build_range(
    row_start: Optional[int] = None,
    col_start: Optional[int] = None,
    row_end: Optional[int] = None,
    col_end: Optional[int] = None,
) -> str:
    """Build an A1 range from optional coordinates.

    The start is the column letters (if any) followed by the row (if any).
    The ``:end`` part is only emitted when row_end or col_end is given, so
    row-only ranges such as ``"5:5"`` address whole rows.

    Examples:
        >>> build_range(5, 0, 5, 1)
        'A5:B5'
        >>> build_range(5, None, 5, None)
        '5:5'
        >>> build_range(5, 0)
        'A5'

    Args:
        row_start: First row (1-indexed)
        col_start: First column (0-indexed)
        row_end: Last row (1-indexed, inclusive)
        col_end: Last column (0-indexed, inclusive)

    Returns:
        Range text; empty when no coordinate is given

    Raises:
        InvalidArgumentError: If a row is below 1 or a column below 0
    """
    _check_row(row_start, "row_start")
    _check_column(col_start, "col_start")
    _check_row(row_end, "row_end")
    _check_column(col_end, "col_end")

    result = _endpoint(row_start, col_start)
    if row_end is not None or col_end is not None:
        result += ":" + _endpoint(row_end, col_end)
    return result


def qualify_range(sheet_name: str, range_name: str = "") -> str:
    """Prefix a range with its sheet name for the values API.

    Sheet names made of anything other than letters, digits and underscores
    are quoted, with embedded quotes doubled.

    Args:
        sheet_name: Sheet (tab) title
        range_name: A1 range; empty addresses the whole sheet

    Returns:
        Qualified range (e.g. ``Data!A1:B2`` or ``'My Sheet'!1:1``)
    """
    if _PLAIN_SHEET_NAME_RE.match(sheet_name):
        prefix = sheet_name
    else:
        prefix = "'" + sheet_name.replace("'", "''") + "'"
    if not range_name:
        return prefix
    return f"{prefix}!{range_name}"


class Range:
    """A rectangular region with independently optional coordinates.

    Any of the four coordinates may be missing, which gives the open forms
    used by the values API: a whole row (``5:5``), a cell (``A5``), a
    rectangle (``A5:B10``) or mixed forms such as ``A5:10``.

    Attributes:
        row: Starting row (1-indexed) or None
        col: Starting column (0-indexed) or None
        row_end: Ending row (1-indexed, inclusive) or None
        col_end: Ending column (0-indexed, inclusive) or None
    """

    def __init__(
        self,
        row: Optional[int] = None,
        col: Optional[int] = None,
        row_end: Optional[int] = None,
        col_end: Optional[int] = None,
    ) -> None:
        _check_row(row, "row")
        _check_column(col, "col")
        _check_row(row_end, "row_end")
        _check_column(col_end, "col_end")
        if col is not None and col > MAX_COLUMN_INDEX:
            raise InvalidArgumentError(f"Column index out of range: {col}")
        if col_end is not None and col_end > MAX_COLUMN_INDEX:
            raise InvalidArgumentError(f"Column index out of range: {col_end}")

        self.row = row
        self.col = col
        self.row_end = row_end
        self.col_end = col_end

    @classmethod
    def from_a1(cls, notation: str) -> "Range":
        """Parse A1 notation produced by :func:`build_range`.

        Supports every shape build_range emits, including the empty range,
        row-only (``5``, ``5:10``), column-only (``A:C``) and mixed
        (``A5:10``) forms.

        Args:
            notation: A1 range text, without a sheet prefix

        Returns:
            Range with the parsed coordinates

        Raises:
            InvalidArgumentError: If notation is not valid A1 text
        """
        notation = notation.strip().upper()
        if not notation:
            return cls()

        parts = notation.split(":")
        if len(parts) > 2:
            raise InvalidArgumentError(f"Invalid range notation: {notation}")

        coords = []
        for part in parts:
            match = _ENDPOINT_RE.match(part)
            if not match or not part:
                raise InvalidArgumentError(f"Invalid range notation: {notation}")
            letters, digits = match.groups()
            if letters and len(letters) > MAX_COLUMN_LETTERS:
                raise InvalidArgumentError(f"Invalid column in range: {notation}")
            col = column_index(letters) if letters else None
            row = int(digits) if digits else None
            if row is not None and row < 1:
                raise InvalidArgumentError(f"Invalid row in range: {notation}")
            coords.append((row, col))

        row, col = coords[0]
        if len(coords) == 1:
            return cls(row=row, col=col)
        row_end, col_end = coords[1]
        return cls(row=row, col=col, row_end=row_end, col_end=col_end)

    def to_a1(self) -> str:
        """Convert to A1 notation (see :func:`build_range`)."""
        return build_range(self.row, self.col, self.row_end, self.col_end)

    def is_single_cell(self) -> bool:
        """True when the range names exactly one cell (``A5``)."""
        return (
            self.row is not None
            and self.col is not None
            and self.row_end is None
            and self.col_end is None
        )

    def __repr__(self) -> str:
        return f"Range({self.to_a1()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return (
            self.row == other.row
            and self.col == other.col
            and self.row_end == other.row_end
            and self.col_end == other.col_end
        )
