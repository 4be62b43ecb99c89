"""
Row transcoding between cell arrays and named records.

A row read from the values API is a list of cells; a record is a dict
keyed by header name. Conversions use a HeaderIndex snapshot.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from simplesheets.exceptions import MissingHeaderError
from simplesheets.spreadsheet.headers import HeaderIndex


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


def to_record(row_values: Sequence[Any], header_index: HeaderIndex) -> Dict[str, Any]:
    """Convert a row of cells into a record keyed by header name.

    Blank cells are left out of the record, and so are cells in columns
    without a header. The conversion is therefore lossy: data under an
    unnamed column is not returned.

    Args:
        row_values: Cell values, index = column
        header_index: Headers of the sheet the row was read from

    Returns:
        Dict of header name -> cell value
    """
    record: Dict[str, Any] = {}
    for col, value in enumerate(row_values):
        if _is_blank(value):
            continue
        name = header_index.name_at(col)
        if name is not None:
            record[name] = value
    return record


def to_row_array(record: Mapping[str, Any], header_index: HeaderIndex) -> List[Optional[Any]]:
    """Convert a record into a positional row.

    The row is as wide as the rightmost column named in the record; columns
    the record does not mention are None.

    Args:
        record: Dict of header name -> value
        header_index: Headers of the target sheet

    Returns:
        List of cell values, index = column

    Raises:
        MissingHeaderError: If a key in record has no header column
    """
    placements = {}
    for name, value in record.items():
        col = header_index.column_of(name)
        if col is None:
            raise MissingHeaderError(f"No header column named {name!r}")
        placements[col] = value

    if not placements:
        return []

    row: List[Optional[Any]] = [None] * (max(placements) + 1)
    for col, value in placements.items():
        row[col] = value
    return row


def to_frame(rows: Sequence[Sequence[Any]], header_index: HeaderIndex) -> pd.DataFrame:
    """Build a DataFrame with one column per header, in column order.

    Blank cells and cells past the end of a short row become None. Cells in
    columns without a header are dropped, as in :func:`to_record`.

    Args:
        rows: Rows of cell values (e.g. a values API read)
        header_index: Headers of the sheet the rows were read from

    Returns:
        DataFrame whose columns are the header names
    """
    columns = list(header_index)
    data = []
    for row_values in rows:
        record = to_record(row_values, header_index)
        data.append([record.get(name) for name in columns])
    return pd.DataFrame(data, columns=columns, dtype=object)
