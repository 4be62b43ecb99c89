"""
Header index for record-style row access.

A HeaderIndex maps header names (the values in row 1) to their 0-indexed
columns and back. The two mappings are always exact inverses: a name is
registered once and never overwritten, so callers that meet a duplicate
name must pick a different one themselves.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence

from simplesheets.exceptions import HeaderCollisionError, InvalidArgumentError

logger = logging.getLogger(__name__)


class HeaderIndex:
    """Bidirectional name <-> column mapping built from a header row.

    Usage::

        headers = HeaderIndex()
        headers.add_header("Name", 0)
        headers.add_header("Age", 2)

        headers.column_of("Age")      # 2
        headers.name_at(1)            # None
        headers.names_by_column()     # ["Name", None, "Age"]
    """

    def __init__(self) -> None:
        self._columns: Dict[str, int] = {}
        self._names: Dict[int, str] = {}

    def add_header(self, name: str, column: int) -> bool:
        """Register ``name`` at ``column``.

        Args:
            name: Header name
            column: 0-indexed column

        Returns:
            True if the header was added, False if the name (or the column)
            is already registered. Nothing is changed on False.

        Raises:
            InvalidArgumentError: If column is negative
        """
        if isinstance(column, bool) or not isinstance(column, int) or column < 0:
            raise InvalidArgumentError(f"Header column must be an integer >= 0, got {column!r}")
        if name in self._columns or column in self._names:
            return False
        self._columns[name] = column
        self._names[column] = name
        return True

    def column_of(self, name: str) -> Optional[int]:
        """Return the column registered for ``name``, or None."""
        return self._columns.get(name)

    def name_at(self, column: int) -> Optional[str]:
        """Return the header name at ``column``, or None."""
        return self._names.get(column)

    def names_by_column(self) -> List[Optional[str]]:
        """Return header names laid out densely by column.

        Position i holds the name registered at column i, or None where a
        column has no header. The length is the highest registered column
        plus one, so the result lines up with a positional row write.
        """
        if not self._names:
            return []
        width = max(self._names) + 1
        return [self._names.get(col) for col in range(width)]

    def copy(self) -> "HeaderIndex":
        """Return an independent HeaderIndex with the same headers."""
        clone = HeaderIndex()
        clone._columns = dict(self._columns)
        clone._names = dict(self._names)
        return clone

    @property
    def headers(self) -> Dict[str, int]:
        """Copy of the name -> column mapping."""
        return dict(self._columns)

    @property
    def width(self) -> int:
        """Number of columns spanned (highest registered column + 1)."""
        return max(self._names) + 1 if self._names else 0

    def __len__(self) -> int:
        return len(self._columns)

    def __contains__(self, name: object) -> bool:
        return name in self._columns

    def __iter__(self) -> Iterator[str]:
        # Column order, not insertion order
        for col in sorted(self._names):
            yield self._names[col]

    def __repr__(self) -> str:
        return f"HeaderIndex({self.headers!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderIndex):
            return NotImplemented
        return self._columns == other._columns


def build_header_index(row: Sequence[object]) -> HeaderIndex:
    """Build a fresh HeaderIndex from the cells of a header row.

    Cells are read left to right. Empty cells are skipped, and so are
    cells holding only whitespace: a header of spaces is treated as blank
    rather than registered as a name, and its column stays unnamed. A
    name that is already taken is retried once with its column index
    appended (a second ``"Name"`` in column 2 becomes ``"Name2"``).

    Args:
        row: Cell values of the header row

    Returns:
        New HeaderIndex

    Raises:
        HeaderCollisionError: If the renamed header is also taken
    """
    headers = HeaderIndex()
    for col, value in enumerate(row):
        if value is None:
            continue
        name = str(value)
        if not name.strip():
            continue
        if headers.add_header(name, col):
            continue

        renamed = f"{name}{col}"
        logger.debug("Duplicate header %r at column %d renamed to %r", name, col, renamed)
        if not headers.add_header(renamed, col):
            raise HeaderCollisionError(
                f"Header {name!r} at column {col} is a duplicate and "
                f"its renamed form {renamed!r} is also taken"
            )
    return headers
