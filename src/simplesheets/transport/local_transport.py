"""
In-memory spreadsheet transport.

Keeps every spreadsheet as a grid of strings in process memory and answers
the Transport calls the way the values and batchUpdate APIs do: reads trim
trailing empty cells and rows, ``None`` in a write leaves the cell alone,
and replies omit zero counts. No network access or Google credentials are
required, which makes it the backend for tests and offline demos.
"""

import itertools
import logging
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from simplesheets.exceptions import NotFoundError, SheetsAPIError
from simplesheets.spreadsheet.address import Range
from simplesheets.spreadsheet.model import SheetInfo, SpreadsheetMetadata, ValueInputOption
from simplesheets.spreadsheet.requests import (
    COLUMNS,
    AddSheet,
    DeleteDimension,
    DeleteSheet,
    FindReplace,
    request_from_dict,
)

logger = logging.getLogger(__name__)

_UNBOUNDED = None


class _LocalSheet:
    def __init__(self, sheet_id: int, title: str, rows: int, cols: int) -> None:
        self.sheet_id = sheet_id
        self.title = title
        self.rows = rows
        self.cols = cols
        self.cells: List[List[str]] = []

    def get(self, row: int, col: int) -> str:
        if row < len(self.cells) and col < len(self.cells[row]):
            return self.cells[row][col]
        return ""

    def put(self, row: int, col: int, value: str) -> None:
        while len(self.cells) <= row:
            self.cells.append([])
        line = self.cells[row]
        while len(line) <= col:
            line.append("")
        line[col] = value


class _LocalSpreadsheet:
    def __init__(self, spreadsheet_id: str, title: str) -> None:
        self.spreadsheet_id = spreadsheet_id
        self.title = title
        self.sheets: List[_LocalSheet] = []
        self._sheet_ids = itertools.count()

    def add_sheet(self, title: str, rows: int = 1000, cols: int = 26) -> _LocalSheet:
        if any(s.title == title for s in self.sheets):
            raise SheetsAPIError(
                f"A sheet with the name \"{title}\" already exists", status_code=400
            )
        sheet = _LocalSheet(next(self._sheet_ids), title, rows, cols)
        self.sheets.append(sheet)
        return sheet

    def sheet_named(self, title: str) -> _LocalSheet:
        for sheet in self.sheets:
            if sheet.title == title:
                return sheet
        raise NotFoundError(f"No sheet named {title!r} in spreadsheet {self.spreadsheet_id}")

    def sheet_with_id(self, sheet_id: int) -> _LocalSheet:
        for sheet in self.sheets:
            if sheet.sheet_id == sheet_id:
                return sheet
        raise SheetsAPIError(f"No grid with id: {sheet_id}", status_code=400)


def _bounds(range_name: str) -> Tuple[int, int, Optional[int], Optional[int]]:
    """Return 0-indexed (row, col, last_row, last_col); None means unbounded."""
    rng = Range.from_a1(range_name)
    row = rng.row - 1 if rng.row is not None else 0
    col = rng.col if rng.col is not None else 0

    if rng.row_end is None and rng.col_end is None:
        # Single endpoint: a cell, a whole row, a whole column, or everything
        last_row = row if rng.row is not None else _UNBOUNDED
        last_col = col if rng.col is not None else _UNBOUNDED
        return row, col, last_row, last_col

    last_row = rng.row_end - 1 if rng.row_end is not None else _UNBOUNDED
    last_col = rng.col_end if rng.col_end is not None else _UNBOUNDED
    return row, col, last_row, last_col


def _trim(rows: List[List[str]]) -> List[List[str]]:
    trimmed = []
    for line in rows:
        end = len(line)
        while end and line[end - 1] == "":
            end -= 1
        trimmed.append(line[:end])
    while trimmed and not trimmed[-1]:
        trimmed.pop()
    return trimmed


class LocalTransport:
    """In-process Transport backed by plain Python lists.

    Usage::

        transport = LocalTransport()
        spreadsheet_id = transport.add_spreadsheet(
            "People", {"Sheet1": [["Name", "Age"], ["Ada", "36"]]}
        )
        session = SpreadsheetSession(transport)
        await session.select_spreadsheet(spreadsheet_id)
    """

    def __init__(self) -> None:
        self._spreadsheets: Dict[str, _LocalSpreadsheet] = {}
        self._ids = itertools.count(1)
        self.calls: List[Tuple[str, Any]] = []

    def add_spreadsheet(
        self,
        title: str,
        sheets: Optional[Dict[str, Sequence[Sequence[Any]]]] = None,
        spreadsheet_id: Optional[str] = None,
    ) -> str:
        """Create a spreadsheet, optionally pre-filled.

        Args:
            title: Spreadsheet title
            sheets: Tab title -> initial rows; defaults to one empty "Sheet1"
            spreadsheet_id: Explicit id; generated when omitted

        Returns:
            The spreadsheet id
        """
        spreadsheet_id = spreadsheet_id or f"local-{next(self._ids)}"
        book = _LocalSpreadsheet(spreadsheet_id, title)
        for sheet_title, rows in (sheets or {"Sheet1": []}).items():
            sheet = book.add_sheet(sheet_title)
            for r, line in enumerate(rows):
                for c, value in enumerate(line):
                    if value is not None:
                        sheet.put(r, c, str(value))
        self._spreadsheets[spreadsheet_id] = book
        return spreadsheet_id

    def sheet_values(self, spreadsheet_id: str, sheet_name: str) -> List[List[str]]:
        """Return the whole trimmed grid of a tab."""
        sheet = self._spreadsheet(spreadsheet_id).sheet_named(sheet_name)
        return _trim([list(line) for line in sheet.cells])

    def _spreadsheet(self, spreadsheet_id: str) -> _LocalSpreadsheet:
        book = self._spreadsheets.get(spreadsheet_id)
        if book is None:
            raise NotFoundError(f"Spreadsheet '{spreadsheet_id}' not found")
        return book

    async def get_metadata(self, spreadsheet_id: str) -> SpreadsheetMetadata:
        self.calls.append(("get_metadata", spreadsheet_id))
        book = self._spreadsheet(spreadsheet_id)
        sheets = [
            SheetInfo(s.sheet_id, s.title, index, rows=s.rows, cols=s.cols)
            for index, s in enumerate(book.sheets)
        ]
        return SpreadsheetMetadata(spreadsheet_id, book.title, sheets)

    async def read_range(
        self, spreadsheet_id: str, sheet_name: str, range_name: str
    ) -> List[List[Any]]:
        self.calls.append(("read_range", (sheet_name, range_name)))
        sheet = self._spreadsheet(spreadsheet_id).sheet_named(sheet_name)
        row, col, last_row, last_col = _bounds(range_name)

        stop_row = len(sheet.cells) if last_row is None else min(last_row + 1, len(sheet.cells))
        result = []
        for r in range(row, stop_row):
            line = sheet.cells[r]
            stop_col = len(line) if last_col is None else min(last_col + 1, len(line))
            result.append(list(line[col:stop_col]))
        return _trim(result)

    async def write_range(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        range_name: str,
        input_mode: ValueInputOption,
        values: Sequence[Sequence[Any]],
    ) -> None:
        self.calls.append(("write_range", (sheet_name, range_name, ValueInputOption(input_mode).value)))
        sheet = self._spreadsheet(spreadsheet_id).sheet_named(sheet_name)
        row, col, last_row, last_col = _bounds(range_name)

        if last_row is not None and len(values) > last_row - row + 1:
            raise SheetsAPIError(
                f"Requested writing within range [{range_name}], but tried writing to row "
                f"[{row + len(values)}]",
                status_code=400,
            )
        for r, line in enumerate(values):
            if last_col is not None and len(line) > last_col - col + 1:
                raise SheetsAPIError(
                    f"Requested writing within range [{range_name}], but tried writing to "
                    f"column [{col + len(line)}]",
                    status_code=400,
                )
            if row + r >= sheet.rows or (line and col + len(line) > sheet.cols):
                raise SheetsAPIError(
                    f"Range ('{sheet_name}'!{range_name}) exceeds grid limits", status_code=400
                )
            for c, value in enumerate(line):
                if value is not None:
                    sheet.put(row + r, col + c, str(value))

    async def batch_update(self, spreadsheet_id: str, request: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("batch_update", request))
        book = self._spreadsheet(spreadsheet_id)
        try:
            parsed = request_from_dict(request)
        except (KeyError, ValueError) as e:
            raise SheetsAPIError(f"Invalid request: {e}", status_code=400) from e

        if isinstance(parsed, AddSheet):
            sheet = book.add_sheet(parsed.title, parsed.rows, parsed.cols)
            index = book.sheets.index(sheet)
            info = SheetInfo(sheet.sheet_id, sheet.title, index, rows=sheet.rows, cols=sheet.cols)
            return {"addSheet": info.to_api()}
        if isinstance(parsed, DeleteSheet):
            sheet = book.sheet_with_id(parsed.sheet_id)
            if len(book.sheets) == 1:
                raise SheetsAPIError(
                    "You can't remove all the sheets in a document.", status_code=400
                )
            book.sheets.remove(sheet)
            return {}
        if isinstance(parsed, DeleteDimension):
            self._delete_dimension(book.sheet_with_id(parsed.sheet_id), parsed)
            return {}
        return self._find_replace(book, parsed)

    async def create_spreadsheet(self, title: str) -> str:
        self.calls.append(("create_spreadsheet", title))
        return self.add_spreadsheet(title)

    @staticmethod
    def _delete_dimension(sheet: _LocalSheet, request: DeleteDimension) -> None:
        start, end = request.start_index, request.end_index
        if request.dimension == COLUMNS:
            if end > sheet.cols:
                raise SheetsAPIError("Column span exceeds grid limits", status_code=400)
            for line in sheet.cells:
                del line[start:end]
            sheet.cols -= end - start
        else:
            if end > sheet.rows:
                raise SheetsAPIError("Row span exceeds grid limits", status_code=400)
            del sheet.cells[start:end]
            sheet.rows -= end - start

    @staticmethod
    def _find_replace(book: _LocalSpreadsheet, request: FindReplace) -> Dict[str, Any]:
        flags = 0 if request.match_case else re.IGNORECASE
        source = request.find if request.search_by_regex else re.escape(request.find)
        try:
            pattern = re.compile(source, flags)
        except re.error as e:
            raise SheetsAPIError(f"Invalid regular expression: {e}", status_code=400) from e

        if request.search_by_regex:
            replace = lambda match: match.expand(request.replacement)
        else:
            replace = lambda match: request.replacement

        if request.all_sheets:
            targets = book.sheets
        else:
            targets = [book.sheet_with_id(request.sheet_id)]

        changed = 0
        for sheet in targets:
            for line in sheet.cells:
                for c, value in enumerate(line):
                    if not value:
                        continue
                    if request.match_entire_cell:
                        if not pattern.fullmatch(value):
                            continue
                        updated = pattern.sub(replace, value, count=1)
                    else:
                        updated = pattern.sub(replace, value)
                    if updated != value:
                        line[c] = updated
                        changed += 1

        logger.debug("findReplace %r changed %d value(s)", request.find, changed)
        reply: Dict[str, Any] = {}
        if changed:
            reply["valuesChanged"] = changed
        return {"findReplace": reply}
