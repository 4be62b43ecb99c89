"""
Structural update requests.

This module defines the batchUpdate requests the session issues for
operations that are not plain range writes:
- AddSheet: Add a new tab
- DeleteSheet: Remove a tab
- DeleteDimension: Remove a span of rows or columns
- FindReplace: Find and replace text in one tab or all tabs

Each request converts to and from the JSON shape of the Sheets API
(``{"deleteDimension": {...}}``). Sheets are addressed by grid id.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


ROWS = "ROWS"
COLUMNS = "COLUMNS"


@dataclass
class AddSheet:
    """Add a new tab to the spreadsheet.

    Attributes:
        title: The tab title (must be unique within the spreadsheet)
        rows: Number of rows in the new grid
        cols: Number of columns in the new grid
    """
    title: str
    rows: int = 1000
    cols: int = 26

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API request representation."""
        return {
            "addSheet": {
                "properties": {
                    "title": self.title,
                    "gridProperties": {"rowCount": self.rows, "columnCount": self.cols},
                }
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AddSheet":
        """Create from API request representation."""
        props = data["addSheet"]["properties"]
        grid = props.get("gridProperties", {})
        return cls(
            title=props["title"],
            rows=grid.get("rowCount", 1000),
            cols=grid.get("columnCount", 26),
        )


@dataclass
class DeleteSheet:
    """Remove a tab.

    Attributes:
        sheet_id: Grid id of the tab
    """
    sheet_id: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API request representation."""
        return {"deleteSheet": {"sheetId": self.sheet_id}}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeleteSheet":
        """Create from API request representation."""
        return cls(sheet_id=data["deleteSheet"]["sheetId"])


@dataclass
class DeleteDimension:
    """Remove a half-open span of rows or columns.

    Attributes:
        sheet_id: Grid id of the tab
        dimension: ROWS or COLUMNS
        start_index: First row/column to remove (0-indexed)
        end_index: One past the last row/column to remove
    """
    sheet_id: int
    dimension: str
    start_index: int
    end_index: int

    def __post_init__(self) -> None:
        if self.dimension not in (ROWS, COLUMNS):
            raise ValueError(f"Unknown dimension: {self.dimension}")
        if self.start_index < 0 or self.end_index <= self.start_index:
            raise ValueError("Dimension span must be non-empty and non-negative")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API request representation."""
        return {
            "deleteDimension": {
                "range": {
                    "sheetId": self.sheet_id,
                    "dimension": self.dimension,
                    "startIndex": self.start_index,
                    "endIndex": self.end_index,
                }
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeleteDimension":
        """Create from API request representation."""
        span = data["deleteDimension"]["range"]
        return cls(
            sheet_id=span["sheetId"],
            dimension=span["dimension"],
            start_index=span["startIndex"],
            end_index=span["endIndex"],
        )


@dataclass
class FindReplace:
    """Find and replace text.

    Exactly one scope applies: every tab when ``all_sheets`` is set,
    otherwise the tab given by ``sheet_id``.

    Attributes:
        find: Text (or regular expression) to search for
        replacement: Replacement text
        match_case: Case-sensitive search
        match_entire_cell: Only match cells whose whole content matches
        search_by_regex: Treat ``find`` as a regular expression
        all_sheets: Search every tab
        sheet_id: Grid id of the tab to search when not all_sheets
    """
    find: str
    replacement: str
    match_case: bool = False
    match_entire_cell: bool = False
    search_by_regex: bool = False
    all_sheets: bool = False
    sheet_id: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.all_sheets and self.sheet_id is None:
            raise ValueError("FindReplace needs a sheet_id unless all_sheets is set")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API request representation."""
        body: Dict[str, Any] = {
            "find": self.find,
            "replacement": self.replacement,
            "matchCase": self.match_case,
            "matchEntireCell": self.match_entire_cell,
            "searchByRegex": self.search_by_regex,
        }
        if self.all_sheets:
            body["allSheets"] = True
        else:
            body["sheetId"] = self.sheet_id
        return {"findReplace": body}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FindReplace":
        """Create from API request representation."""
        body = data["findReplace"]
        return cls(
            find=body["find"],
            replacement=body.get("replacement", ""),
            match_case=body.get("matchCase", False),
            match_entire_cell=body.get("matchEntireCell", False),
            search_by_regex=body.get("searchByRegex", False),
            all_sheets=body.get("allSheets", False),
            sheet_id=body.get("sheetId"),
        )


# Type alias for all structural request types
StructuralRequest = Union[AddSheet, DeleteSheet, DeleteDimension, FindReplace]

_REQUEST_TYPES = {
    "addSheet": AddSheet,
    "deleteSheet": DeleteSheet,
    "deleteDimension": DeleteDimension,
    "findReplace": FindReplace,
}


def request_from_dict(data: Dict[str, Any]) -> StructuralRequest:
    """Deserialize a request from its API representation.

    Args:
        data: Dictionary with a single key naming the request kind

    Returns:
        The corresponding request object

    Raises:
        ValueError: If the request kind is unknown
    """
    if len(data) != 1:
        raise ValueError(f"Expected exactly one request kind, got {sorted(data)}")
    kind = next(iter(data))
    request_type = _REQUEST_TYPES.get(kind)
    if request_type is None:
        raise ValueError(f"Unknown request type: {kind}")
    return request_type.from_dict(data)
