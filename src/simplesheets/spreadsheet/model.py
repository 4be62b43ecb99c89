"""
Spreadsheet metadata model classes.

This module provides the session's view of a spreadsheet:
- SheetInfo: One spreadsheet tab (grid id, title, position, dimensions)
- SpreadsheetMetadata: The spreadsheet title and its ordered tabs
- ValueInputOption: How the service should interpret written values
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from simplesheets.exceptions import NotFoundError


class ValueInputOption(str, Enum):
    """Interpretation of written values.

    RAW stores input as-is; USER_ENTERED parses it as if typed into the UI
    (numbers, dates, formulas).
    """

    RAW = "RAW"
    USER_ENTERED = "USER_ENTERED"


class SheetInfo:
    """Represents a single spreadsheet tab.

    Attributes:
        sheet_id: Grid id used by structural requests
        title: The sheet name (must be non-empty)
        index: Position of the tab in the spreadsheet (0-based)
        rows: Number of rows in the grid
        cols: Number of columns in the grid
    """

    def __init__(
        self,
        sheet_id: int,
        title: str,
        index: int,
        rows: int = 1000,
        cols: int = 26,
    ) -> None:
        """Initialize a SheetInfo.

        Raises:
            ValueError: If title is empty or index is negative
        """
        if not title or not isinstance(title, str):
            raise ValueError("Sheet title must be a non-empty string")
        if index < 0:
            raise ValueError("Sheet index must be non-negative")

        self.sheet_id = sheet_id
        self.title = title
        self.index = index
        self.rows = rows
        self.cols = cols

    @classmethod
    def from_api(cls, sheet: Dict[str, Any]) -> "SheetInfo":
        """Create from a ``sheets[]`` entry of the spreadsheets.get response."""
        props = sheet.get("properties", sheet)
        grid = props.get("gridProperties", {})
        return cls(
            sheet_id=props["sheetId"],
            title=props["title"],
            index=props.get("index", 0),
            rows=grid.get("rowCount", 1000),
            cols=grid.get("columnCount", 26),
        )

    def to_api(self) -> Dict[str, Any]:
        """Convert to the ``sheets[]`` entry shape of the API."""
        return {
            "properties": {
                "sheetId": self.sheet_id,
                "title": self.title,
                "index": self.index,
                "gridProperties": {"rowCount": self.rows, "columnCount": self.cols},
            }
        }

    def __repr__(self) -> str:
        return (
            f"SheetInfo(sheet_id={self.sheet_id}, title={self.title!r}, "
            f"index={self.index}, rows={self.rows}, cols={self.cols})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SheetInfo):
            return NotImplemented
        return (
            self.sheet_id == other.sheet_id
            and self.title == other.title
            and self.index == other.index
            and self.rows == other.rows
            and self.cols == other.cols
        )


class SpreadsheetMetadata:
    """Title and ordered tabs of a spreadsheet.

    Attributes:
        spreadsheet_id: The spreadsheet key
        title: The spreadsheet title
        sheets: Tabs ordered by index
    """

    def __init__(self, spreadsheet_id: str, title: str, sheets: List[SheetInfo]) -> None:
        self.spreadsheet_id = spreadsheet_id
        self.title = title
        self.sheets = sorted(sheets, key=lambda s: s.index)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "SpreadsheetMetadata":
        """Create from a spreadsheets.get response."""
        return cls(
            spreadsheet_id=data.get("spreadsheetId", ""),
            title=data.get("properties", {}).get("title", ""),
            sheets=[SheetInfo.from_api(s) for s in data.get("sheets", [])],
        )

    def by_title(self, title: str) -> Optional[SheetInfo]:
        """Return the tab named ``title``, or None."""
        for sheet in self.sheets:
            if sheet.title == title:
                return sheet
        return None

    def by_index(self, index: int) -> Optional[SheetInfo]:
        """Return the tab at position ``index``, or None."""
        for sheet in self.sheets:
            if sheet.index == index:
                return sheet
        return None

    def find(self, name_or_index: Union[str, int]) -> SheetInfo:
        """Resolve a tab by title (str) or position (int).

        Raises:
            NotFoundError: If no such tab exists
        """
        if isinstance(name_or_index, int) and not isinstance(name_or_index, bool):
            sheet = self.by_index(name_or_index)
            if sheet is None:
                raise NotFoundError(f"No sheet exists at index {name_or_index}")
            return sheet

        sheet = self.by_title(name_or_index)
        if sheet is None:
            raise NotFoundError(f"No sheet exists with the name {name_or_index!r}")
        return sheet

    @property
    def sheet_titles(self) -> List[str]:
        return [s.title for s in self.sheets]

    def __repr__(self) -> str:
        return (
            f"SpreadsheetMetadata(spreadsheet_id={self.spreadsheet_id!r}, "
            f"title={self.title!r}, sheets={self.sheet_titles!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SpreadsheetMetadata):
            return NotImplemented
        return (
            self.spreadsheet_id == other.spreadsheet_id
            and self.title == other.title
            and self.sheets == other.sheets
        )
