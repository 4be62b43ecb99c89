"""
Transport interface for the Google Sheets service.

The Transport protocol defines the calls a SpreadsheetSession makes against
the remote service. Every call is a coroutine: the session suspends while
the request is in flight. Concrete implementations include GspreadTransport
(Google Sheets API via gspread) and LocalTransport (in-memory, no network).
"""

from typing import Any, Dict, List, Protocol, Sequence

from simplesheets.spreadsheet.model import SpreadsheetMetadata, ValueInputOption


class Transport(Protocol):
    """Protocol for spreadsheet service backends.

    Failures surface as simplesheets exceptions: ``NotFoundError`` for an
    unknown spreadsheet and ``SheetsAPIError`` for anything the service
    rejects. Any retry policy belongs to the transport.
    """

    async def get_metadata(self, spreadsheet_id: str) -> SpreadsheetMetadata:
        """Fetch the spreadsheet title and its tabs."""
        ...

    async def read_range(
        self, spreadsheet_id: str, sheet_name: str, range_name: str
    ) -> List[List[Any]]:
        """Read a range of a tab.

        Returns:
            Rows of cell values with trailing empty cells and rows trimmed;
            an empty list when the range holds no data.
        """
        ...

    async def write_range(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        range_name: str,
        input_mode: ValueInputOption,
        values: Sequence[Sequence[Any]],
    ) -> None:
        """Write rows of values starting at the top-left of a range."""
        ...

    async def batch_update(self, spreadsheet_id: str, request: Dict[str, Any]) -> Dict[str, Any]:
        """Send one structural request.

        Returns:
            The service's reply for the request (``{}`` if it sent none)
        """
        ...

    async def create_spreadsheet(self, title: str) -> str:
        """Create a spreadsheet and return its id."""
        ...
