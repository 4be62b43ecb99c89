"""
Google Sheets API client wrapper.

This module provides a synchronous interface to the Google Sheets API via
gspread, with error wrapping for the calls a spreadsheet session needs.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import gspread
from gspread.exceptions import APIError, SpreadsheetNotFound

from simplesheets.exceptions import NotFoundError, SheetsAPIError

logger = logging.getLogger(__name__)


def _status_code(error: APIError) -> Optional[int]:
    code = getattr(error, "code", None)
    if code is None:
        response = getattr(error, "response", None)
        code = getattr(response, "status_code", None)
    return code if isinstance(code, int) else None


def _api_error(message: str, error: APIError) -> SheetsAPIError:
    details = error.args[0] if error.args else None
    return SheetsAPIError(f"{message}: {error}", status_code=_status_code(error), details=details)


class SheetsClient:
    """
    A wrapper around gspread for Google Sheets API operations.

    This client wraps an authenticated gspread client, adding error handling
    and a keyed interface (spreadsheet id + A1 range) over gspread's
    Spreadsheet objects. Opened spreadsheets are cached by id.

    Attributes:
        gc: The authenticated gspread client instance
    """

    def __init__(self, gc: gspread.Client) -> None:
        """
        Initialize the Sheets client with an authenticated gspread client.

        Args:
            gc: An authenticated gspread client, e.g. from
                ``gspread.service_account()`` or ``gspread.api_key()``.
        """
        self.gc = gc
        self._spreadsheets: Dict[str, gspread.Spreadsheet] = {}

    def open(self, spreadsheet_id: str) -> gspread.Spreadsheet:
        """
        Open a spreadsheet by id, reusing a cached handle when available.

        Raises:
            NotFoundError: If no spreadsheet has this id
            SheetsAPIError: If the API call fails
        """
        spreadsheet = self._spreadsheets.get(spreadsheet_id)
        if spreadsheet is not None:
            return spreadsheet

        try:
            spreadsheet = self.gc.open_by_key(spreadsheet_id)
        except SpreadsheetNotFound as e:
            raise NotFoundError(f"Spreadsheet '{spreadsheet_id}' not found") from e
        except PermissionError as e:
            raise SheetsAPIError(
                f"Permission denied opening spreadsheet '{spreadsheet_id}'", status_code=403
            ) from e
        except APIError as e:
            raise _api_error(f"Failed to open spreadsheet '{spreadsheet_id}'", e) from e

        self._spreadsheets[spreadsheet_id] = spreadsheet
        return spreadsheet

    def fetch_metadata(self, spreadsheet_id: str) -> Dict[str, Any]:
        """
        Fetch spreadsheet properties and tabs (no cell data).

        Returns:
            The spreadsheets.get response

        Raises:
            NotFoundError: If no spreadsheet has this id
            SheetsAPIError: If the API call fails
        """
        spreadsheet = self.open(spreadsheet_id)
        try:
            return spreadsheet.fetch_sheet_metadata()
        except APIError as e:
            raise _api_error(f"Failed to fetch metadata of '{spreadsheet_id}'", e) from e

    def get_values(self, spreadsheet_id: str, range_name: str) -> List[List[Any]]:
        """
        Read values from a sheet-qualified range.

        Args:
            spreadsheet_id: The spreadsheet key
            range_name: Qualified A1 range (e.g. "Data!A1:C10")

        Returns:
            Rows of cell values; empty if the range holds no data

        Raises:
            SheetsAPIError: If the API call fails
        """
        spreadsheet = self.open(spreadsheet_id)
        try:
            response = spreadsheet.values_get(range_name)
        except APIError as e:
            raise _api_error(f"Failed to read range '{range_name}'", e) from e
        return response.get("values", [])

    def update_values(
        self,
        spreadsheet_id: str,
        range_name: str,
        values: Sequence[Sequence[Any]],
        input_option: str = "RAW",
    ) -> None:
        """
        Write values to a sheet-qualified range.

        Args:
            spreadsheet_id: The spreadsheet key
            range_name: Qualified A1 range (e.g. "Data!A2:C2")
            values: A 2D list of values to write
            input_option: "RAW" or "USER_ENTERED"

        Raises:
            SheetsAPIError: If the API call fails
        """
        spreadsheet = self.open(spreadsheet_id)
        try:
            spreadsheet.values_update(
                range_name,
                params={"valueInputOption": input_option},
                body={"values": [list(row) for row in values]},
            )
        except APIError as e:
            raise _api_error(f"Failed to write values to range '{range_name}'", e) from e

    def batch_update(self, spreadsheet_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Send a spreadsheets.batchUpdate request.

        Args:
            spreadsheet_id: The spreadsheet key
            body: Request body with a ``requests`` list

        Returns:
            The batchUpdate response

        Raises:
            SheetsAPIError: If the API call fails
        """
        spreadsheet = self.open(spreadsheet_id)
        try:
            return spreadsheet.batch_update(body)
        except APIError as e:
            raise _api_error(
                f"Failed to apply {len(body.get('requests', []))} structural request(s)", e
            ) from e

    def create_spreadsheet(self, title: str) -> gspread.Spreadsheet:
        """
        Create a new spreadsheet.

        Args:
            title: The title for the new spreadsheet

        Returns:
            The created Spreadsheet object

        Raises:
            SheetsAPIError: If the API call fails
        """
        try:
            spreadsheet = self.gc.create(title)
        except APIError as e:
            raise _api_error(f"Failed to create spreadsheet '{title}'", e) from e
        self._spreadsheets[spreadsheet.id] = spreadsheet
        logger.info("Created spreadsheet %r (%s)", title, spreadsheet.id)
        return spreadsheet
