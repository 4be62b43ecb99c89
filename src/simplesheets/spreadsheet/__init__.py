"""
Spreadsheet model module.

This module provides the pure, network-free parts of simplesheets: A1
address translation, the header index, row transcoding, metadata and the
structural requests sent to the service.
"""

from simplesheets.spreadsheet.address import (
    Range,
    build_range,
    column_index,
    column_letter,
    qualify_range,
)
from simplesheets.spreadsheet.headers import HeaderIndex, build_header_index
from simplesheets.spreadsheet.model import (
    SheetInfo,
    SpreadsheetMetadata,
    ValueInputOption,
)
from simplesheets.spreadsheet.requests import (
    AddSheet,
    DeleteDimension,
    DeleteSheet,
    FindReplace,
    StructuralRequest,
    request_from_dict,
)
from simplesheets.spreadsheet.rows import to_frame, to_record, to_row_array

__all__ = [
    "Range",
    "build_range",
    "column_index",
    "column_letter",
    "qualify_range",
    "HeaderIndex",
    "build_header_index",
    "SheetInfo",
    "SpreadsheetMetadata",
    "ValueInputOption",
    "AddSheet",
    "DeleteDimension",
    "DeleteSheet",
    "FindReplace",
    "StructuralRequest",
    "request_from_dict",
    "to_frame",
    "to_record",
    "to_row_array",
]
