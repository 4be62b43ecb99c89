"""
Spreadsheet session.

A SpreadsheetSession tracks which spreadsheet and sheet are selected, caches
the spreadsheet metadata and the selected sheet's HeaderIndex, and turns row
operations into range reads and writes on a Transport.

Session lifecycle::

    UNAUTHENTICATED -> AUTHENTICATED -> SPREADSHEET_SELECTED
        -> SHEET_SELECTED (headers unknown) -> HEADERS_LOADED

The HeaderIndex is rebuilt from row 1 whenever a sheet is selected, and is
discarded whenever row 1 may have changed (writing or deleting row 1,
deleting a column, a find-and-replace that changed the sheet). Call
``refresh_headers()`` to rebuild it after such a change.

Every state-mutating call holds the session lock, so mutations on one
session run one at a time. select_sheet() switches the selection and drops
the old headers before it waits for the lock. Reads take no lock; they
snapshot the selected sheet and its headers when they start.
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

from simplesheets import auth
from simplesheets.config import SheetsConfig
from simplesheets.exceptions import InvalidArgumentError, PreconditionError
from simplesheets.spreadsheet.address import build_range
from simplesheets.spreadsheet.headers import HeaderIndex, build_header_index
from simplesheets.spreadsheet.model import SheetInfo, SpreadsheetMetadata, ValueInputOption
from simplesheets.spreadsheet.requests import (
    COLUMNS,
    ROWS,
    AddSheet,
    DeleteDimension,
    DeleteSheet,
    FindReplace,
    StructuralRequest,
)
from simplesheets.spreadsheet.rows import to_frame, to_record, to_row_array
from simplesheets.transport.base import Transport

logger = logging.getLogger(__name__)

HEADER_ROW = 1


class SessionState(Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    SPREADSHEET_SELECTED = "spreadsheet_selected"
    SHEET_SELECTED = "sheet_selected"
    HEADERS_LOADED = "headers_loaded"


def _check_row_index(row_index: int) -> None:
    if isinstance(row_index, bool) or not isinstance(row_index, int) or row_index < 1:
        raise InvalidArgumentError(f"Invalid row index {row_index!r}. Must be >= 1")


class SpreadsheetSession:
    """Stateful wrapper over one spreadsheet connection.

    Usage::

        session = SpreadsheetSession()
        session.authorize_service_account_file("key.json")
        await session.select_spreadsheet("1AbC...")
        await session.select_sheet("People")

        await session.set_row(5, {"Name": "Ada", "Age": "36"})
        record = await session.get_row(5)

    Attributes:
        transport: The Transport used for every remote call, or None
    """

    def __init__(self, transport: Optional[Transport] = None) -> None:
        self.transport = transport
        self._spreadsheet_id: Optional[str] = None
        self._metadata: Optional[SpreadsheetMetadata] = None
        self._sheet: Optional[SheetInfo] = None
        self._headers: Optional[HeaderIndex] = None
        self._lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Authorization
    # ------------------------------------------------------------------

    def authorize(self, transport: Transport) -> None:
        """Use ``transport`` for all remote calls. No network call is made."""
        self.transport = transport

    def authorize_api_key(self, key: str) -> None:
        self.authorize(auth.authorize_api_key(key))

    def authorize_service_account(self, client_email: str, private_key: str) -> None:
        self.authorize(auth.authorize_service_account(client_email, private_key))

    def authorize_service_account_file(self, key_file: str) -> None:
        self.authorize(auth.authorize_service_account_file(key_file))

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        if self.transport is None:
            return SessionState.UNAUTHENTICATED
        if self._spreadsheet_id is None:
            return SessionState.AUTHENTICATED
        if self._sheet is None:
            return SessionState.SPREADSHEET_SELECTED
        if self._headers is None:
            return SessionState.SHEET_SELECTED
        return SessionState.HEADERS_LOADED

    @property
    def spreadsheet_id(self) -> Optional[str]:
        return self._spreadsheet_id

    @property
    def metadata(self) -> Optional[SpreadsheetMetadata]:
        """Cached metadata; refreshed only by selection and sheet lifecycle calls."""
        return self._metadata

    @property
    def sheet(self) -> Optional[SheetInfo]:
        return self._sheet

    @property
    def sheet_index(self) -> Optional[int]:
        """Position of the selected sheet, as accepted by select_sheet()."""
        return self._sheet.index if self._sheet is not None else None

    @property
    def sheet_name(self) -> Optional[str]:
        return self._sheet.title if self._sheet is not None else None

    @property
    def headers(self) -> Optional[HeaderIndex]:
        """Copy of the selected sheet's HeaderIndex, or None if not loaded."""
        return self._headers.copy() if self._headers is not None else None

    def _require_transport(self) -> Transport:
        if self.transport is None:
            raise PreconditionError("Session is not authorized; call authorize() first")
        return self.transport

    def _require_spreadsheet(self) -> Tuple[Transport, str]:
        transport = self._require_transport()
        if self._spreadsheet_id is None or self._metadata is None:
            raise PreconditionError("No spreadsheet selected; call select_spreadsheet() first")
        return transport, self._spreadsheet_id

    def _require_sheet(self) -> Tuple[Transport, str, SheetInfo]:
        transport, spreadsheet_id = self._require_spreadsheet()
        if self._sheet is None:
            raise PreconditionError("No sheet selected; call select_sheet() first")
        return transport, spreadsheet_id, self._sheet

    def _require_headers(self) -> HeaderIndex:
        if self._headers is None:
            raise PreconditionError(
                "Headers are not loaded for the selected sheet; call refresh_headers() first"
            )
        return self._headers

    # ------------------------------------------------------------------
    # Spreadsheet and sheet selection
    # ------------------------------------------------------------------

    async def select_spreadsheet(self, spreadsheet_id: str) -> None:
        """Select a spreadsheet and cache its metadata.

        Clears the sheet selection and headers.

        Raises:
            PreconditionError: If the session is not authorized
            NotFoundError: If the spreadsheet does not exist
        """
        async with self._lock:
            await self._select_spreadsheet(spreadsheet_id)

    async def _select_spreadsheet(self, spreadsheet_id: str) -> None:
        transport = self._require_transport()
        metadata = await transport.get_metadata(spreadsheet_id)
        self._spreadsheet_id = spreadsheet_id
        self._metadata = metadata
        self._sheet = None
        self._headers = None
        logger.info(
            "Selected spreadsheet %s (%d sheet(s))", spreadsheet_id, len(metadata.sheets)
        )

    async def create_spreadsheet(self, title: str) -> str:
        """Create a spreadsheet, select it, and return its id."""
        async with self._lock:
            transport = self._require_transport()
            spreadsheet_id = await transport.create_spreadsheet(title)
            await self._select_spreadsheet(spreadsheet_id)
            return spreadsheet_id

    async def refresh_metadata(self) -> SpreadsheetMetadata:
        """Re-fetch metadata of the selected spreadsheet.

        If the selected sheet is gone, the sheet selection and headers are
        cleared. A renamed or moved sheet is followed by its grid id.
        """
        async with self._lock:
            return await self._refresh_metadata()

    async def _refresh_metadata(self) -> SpreadsheetMetadata:
        transport, spreadsheet_id = self._require_spreadsheet()
        metadata = await transport.get_metadata(spreadsheet_id)
        self._metadata = metadata
        if self._sheet is not None:
            current = next(
                (s for s in metadata.sheets if s.sheet_id == self._sheet.sheet_id), None
            )
            if current is None:
                logger.info("Selected sheet %r no longer exists", self._sheet.title)
                self._headers = None
            self._sheet = current
        return metadata

    async def select_sheet(self, name_or_id: Union[str, int]) -> None:
        """Select a sheet by name (str) or position (int) and load its headers.

        The sheet is resolved from cached metadata and becomes the selected
        sheet, with no HeaderIndex, before this call waits for other
        mutations to finish. Reads issued meanwhile address the new sheet and
        record-style reads raise PreconditionError until its header row is
        loaded. If reading the header row fails, the sheet stays selected
        with no headers.

        Raises:
            PreconditionError: If no spreadsheet is selected
            NotFoundError: If the sheet is not in the cached metadata
            HeaderCollisionError: If the header row cannot be indexed
        """
        self._require_spreadsheet()
        sheet = self._metadata.find(name_or_id)
        self._sheet = sheet
        self._headers = None
        logger.info("Selected sheet %r (index %d)", sheet.title, sheet.index)

        async with self._lock:
            if self._sheet is not sheet:
                logger.debug("Selection of sheet %r was superseded", sheet.title)
                return
            await self._refresh_headers()

    async def create_sheet(self, title: str, rows: int = 1000, cols: int = 26) -> SheetInfo:
        """Add a sheet, refresh metadata, and select the new sheet."""
        async with self._lock:
            await self._structural_update(AddSheet(title=title, rows=rows, cols=cols))
            metadata = await self._refresh_metadata()
            sheet = metadata.find(title)
            self._sheet = sheet
            self._headers = None
            await self._refresh_headers()
            return sheet

    async def delete_sheet(self, name_or_id: Union[str, int]) -> None:
        """Delete a sheet by name or position.

        If it is the selected sheet, the selection and headers are cleared.

        Raises:
            NotFoundError: If the sheet is not in the cached metadata
        """
        async with self._lock:
            self._require_spreadsheet()
            sheet = self._metadata.find(name_or_id)
            await self._structural_update(DeleteSheet(sheet_id=sheet.sheet_id))
            await self._refresh_metadata()

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    async def refresh_headers(self) -> HeaderIndex:
        """Rebuild the HeaderIndex from row 1 of the selected sheet."""
        async with self._lock:
            headers = await self._refresh_headers()
            return headers.copy()

    async def _refresh_headers(self) -> HeaderIndex:
        transport, spreadsheet_id, sheet = self._require_sheet()
        rows = await transport.read_range(
            spreadsheet_id, sheet.title, build_range(HEADER_ROW, None, HEADER_ROW, None)
        )
        headers = build_header_index(rows[0] if rows else [])
        if self._sheet is sheet:
            self._headers = headers
        logger.debug("Loaded %d header(s) for sheet %r", len(headers), sheet.title)
        return headers

    async def set_headers(self, headers: HeaderIndex) -> None:
        """Write ``headers`` to row 1 and use them as the sheet's headers.

        Columns without a header are sent as None, leaving those cells as
        they are. Such gap columns keep their old values in row 1 but stay
        unnamed in the session until the next ``refresh_headers()``.

        The session keeps its own copy of ``headers``; later changes to the
        argument do not affect it.

        Raises:
            InvalidArgumentError: If headers is empty
        """
        if not len(headers):
            raise InvalidArgumentError("No headers supplied to set")
        async with self._lock:
            installed = headers.copy()
            sheet = self._require_sheet()[2]
            await self._set_row_array(HEADER_ROW, installed.names_by_column())
            if self._sheet is sheet:
                self._headers = installed

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    async def set_row_array(self, row_index: int, values: Sequence[Any]) -> None:
        """Write ``values`` positionally into a row, starting at column A.

        Values are stored RAW (as text, never parsed). Writing row 1
        overwrites the headers: the cached HeaderIndex is discarded before
        the write, and ``refresh_headers()`` must be called afterwards.

        Raises:
            InvalidArgumentError: If row_index < 1 or values is empty
        """
        async with self._lock:
            await self._set_row_array(row_index, values)

    async def _set_row_array(self, row_index: int, values: Sequence[Any]) -> None:
        _check_row_index(row_index)
        if not values:
            raise InvalidArgumentError("Cannot write an empty row")
        transport, spreadsheet_id, sheet = self._require_sheet()

        if row_index == HEADER_ROW:
            self._headers = None
        range_name = build_range(row_index, 0, row_index, len(values) - 1)
        await transport.write_range(
            spreadsheet_id, sheet.title, range_name, ValueInputOption.RAW, [list(values)]
        )

    async def set_row(self, row_index: int, record: Mapping[str, Any]) -> None:
        """Write a record (header name -> value) into a row.

        Raises:
            PreconditionError: If headers are not loaded
            MissingHeaderError: If a key of record has no header column
        """
        async with self._lock:
            headers = self._require_headers()
            await self._set_row_array(row_index, to_row_array(record, headers))

    async def get_row_array(self, row_index: int) -> List[Any]:
        """Read a whole row as a list of cells (trailing blanks trimmed)."""
        _check_row_index(row_index)
        transport, spreadsheet_id, sheet = self._require_sheet()
        rows = await transport.read_range(
            spreadsheet_id, sheet.title, build_range(row_index, None, row_index, None)
        )
        return list(rows[0]) if rows else []

    async def get_row(self, row_index: int) -> Dict[str, Any]:
        """Read a row as a record keyed by header name.

        Blank cells and cells without a header are left out.

        Raises:
            PreconditionError: If headers are not loaded
        """
        _check_row_index(row_index)
        transport, spreadsheet_id, sheet = self._require_sheet()
        headers = self._require_headers()
        rows = await transport.read_range(
            spreadsheet_id, sheet.title, build_range(row_index, None, row_index, None)
        )
        return to_record(rows[0] if rows else [], headers)

    async def get_rows(self, first_row: int, last_row: int) -> List[Dict[str, Any]]:
        """Read rows first_row..last_row (inclusive) as records.

        Returns one record per row in the span, including empty records for
        blank rows inside it.
        """
        _check_row_index(first_row)
        _check_row_index(last_row)
        if last_row < first_row:
            raise InvalidArgumentError(f"last_row {last_row} is before first_row {first_row}")
        transport, spreadsheet_id, sheet = self._require_sheet()
        headers = self._require_headers()
        rows = await transport.read_range(
            spreadsheet_id, sheet.title, build_range(first_row, None, last_row, None)
        )
        count = last_row - first_row + 1
        rows = list(rows) + [[]] * (count - len(rows))
        return [to_record(row, headers) for row in rows]

    async def get_frame(self, first_row: int = 2, last_row: Optional[int] = None) -> pd.DataFrame:
        """Read data rows as a DataFrame with one column per header.

        Args:
            first_row: First row to read (default: the row below the headers)
            last_row: Last row to read; None reads to the last row with data

        Raises:
            PreconditionError: If headers are not loaded
        """
        _check_row_index(first_row)
        if last_row is not None:
            _check_row_index(last_row)
        transport, spreadsheet_id, sheet = self._require_sheet()
        headers = self._require_headers()
        if not len(headers):
            return to_frame([], headers)
        range_name = build_range(first_row, 0, last_row, headers.width - 1)
        rows = await transport.read_range(spreadsheet_id, sheet.title, range_name)
        return to_frame(rows, headers)

    # ------------------------------------------------------------------
    # Structural updates
    # ------------------------------------------------------------------

    async def _structural_update(self, request: StructuralRequest) -> Dict[str, Any]:
        transport, spreadsheet_id = self._require_spreadsheet()
        logger.info("Applying %s to %s", type(request).__name__, spreadsheet_id)
        return await transport.batch_update(spreadsheet_id, request.to_dict())

    async def delete_row(self, row_index: int) -> None:
        """Delete a row. Deleting row 1 discards the headers."""
        _check_row_index(row_index)
        async with self._lock:
            _, _, sheet = self._require_sheet()
            if row_index == HEADER_ROW:
                self._headers = None
            await self._structural_update(
                DeleteDimension(sheet.sheet_id, ROWS, row_index - 1, row_index)
            )

    async def delete_column(self, column_index: int) -> None:
        """Delete a column (0-indexed). Discards the headers, since they shift."""
        if isinstance(column_index, bool) or not isinstance(column_index, int) or column_index < 0:
            raise InvalidArgumentError(f"Invalid column index {column_index!r}. Must be >= 0")
        async with self._lock:
            _, _, sheet = self._require_sheet()
            self._headers = None
            await self._structural_update(
                DeleteDimension(sheet.sheet_id, COLUMNS, column_index, column_index + 1)
            )

    async def find_and_replace(
        self,
        find: str,
        replacement: str,
        all_sheets: bool = False,
        match_case: bool = False,
        entire_cell: bool = False,
        use_regex: bool = False,
    ) -> int:
        """Find and replace text in the selected sheet, or in every sheet.

        Returns:
            Number of values replaced

        Raises:
            PreconditionError: If not all_sheets and no sheet is selected
        """
        async with self._lock:
            if all_sheets:
                self._require_spreadsheet()
                sheet_id = None
            else:
                sheet_id = self._require_sheet()[2].sheet_id
            reply = await self._structural_update(
                FindReplace(
                    find=find,
                    replacement=replacement,
                    match_case=match_case,
                    match_entire_cell=entire_cell,
                    search_by_regex=use_regex,
                    all_sheets=all_sheets,
                    sheet_id=sheet_id,
                )
            )
            changed = reply.get("findReplace", {}).get("valuesChanged") or 0
            if changed and self._sheet is not None:
                # Header cells may have been rewritten
                self._headers = None
            return changed


async def open_session(config: SheetsConfig) -> SpreadsheetSession:
    """Authorize from ``config`` and select its spreadsheet and sheet, if set."""
    session = SpreadsheetSession(config.build_transport())
    if config.SPREADSHEET_ID:
        await session.select_spreadsheet(config.SPREADSHEET_ID)
        if config.SHEET_NAME:
            await session.select_sheet(config.SHEET_NAME)
    return session
