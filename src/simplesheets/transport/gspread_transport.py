"""
Google Sheets transport with retry logic.

This module provides the GspreadTransport class, which implements the
Transport protocol on top of the synchronous SheetsClient. It handles:
- Running blocking gspread calls in a worker thread
- Retry logic with exponential backoff for transient failures
- Sheet-qualified range construction
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Sequence, TypeVar

import gspread

from simplesheets.exceptions import SheetsAPIError
from simplesheets.spreadsheet.address import qualify_range
from simplesheets.spreadsheet.model import SpreadsheetMetadata, ValueInputOption
from simplesheets.transport.sheets_client import SheetsClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Rate limiting and server-side failures are worth retrying
RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class GspreadTransport:
    """Transport that talks to the Google Sheets API through gspread.

    Each call runs in a worker thread so the event loop stays free while
    the request is in flight. Transient failures (HTTP 429 and 5xx) are
    retried; everything else is raised at once.

    Attributes:
        client: SheetsClient wrapper for API calls
        max_retries: Maximum number of retry attempts for transient failures
        base_delay: Base delay in seconds for exponential backoff
    """

    def __init__(
        self,
        client: SheetsClient,
        max_retries: int = 3,
        base_delay: float = 1.0,
    ) -> None:
        """Initialize the transport.

        Args:
            client: Authenticated SheetsClient
            max_retries: Maximum retry attempts (default: 3)
            base_delay: Base delay for exponential backoff in seconds (default: 1.0)
        """
        self.client = client
        self.max_retries = max_retries
        self.base_delay = base_delay

    @classmethod
    def from_gspread(cls, gc: gspread.Client, **kwargs: Any) -> "GspreadTransport":
        """Build a transport from an authenticated gspread client."""
        return cls(SheetsClient(gc), **kwargs)

    async def get_metadata(self, spreadsheet_id: str) -> SpreadsheetMetadata:
        data = await self._retry_operation(
            lambda: self.client.fetch_metadata(spreadsheet_id),
            f"fetch metadata of '{spreadsheet_id}'",
        )
        metadata = SpreadsheetMetadata.from_api(data)
        if not metadata.spreadsheet_id:
            metadata.spreadsheet_id = spreadsheet_id
        return metadata

    async def read_range(
        self, spreadsheet_id: str, sheet_name: str, range_name: str
    ) -> List[List[Any]]:
        qualified = qualify_range(sheet_name, range_name)
        logger.debug("Reading %s from %s", qualified, spreadsheet_id)
        return await self._retry_operation(
            lambda: self.client.get_values(spreadsheet_id, qualified),
            f"read range '{qualified}'",
        )

    async def write_range(
        self,
        spreadsheet_id: str,
        sheet_name: str,
        range_name: str,
        input_mode: ValueInputOption,
        values: Sequence[Sequence[Any]],
    ) -> None:
        qualified = qualify_range(sheet_name, range_name)
        mode = ValueInputOption(input_mode).value
        logger.debug("Writing %d row(s) to %s (%s)", len(values), qualified, mode)
        await self._retry_operation(
            lambda: self.client.update_values(spreadsheet_id, qualified, values, mode),
            f"write range '{qualified}'",
        )

    async def batch_update(self, spreadsheet_id: str, request: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._retry_operation(
            lambda: self.client.batch_update(spreadsheet_id, {"requests": [request]}),
            f"apply {next(iter(request), 'unknown')} request",
        )
        replies = (response or {}).get("replies") or [{}]
        return replies[0] or {}

    async def create_spreadsheet(self, title: str) -> str:
        spreadsheet = await self._retry_operation(
            lambda: self.client.create_spreadsheet(title),
            f"create spreadsheet '{title}'",
        )
        return spreadsheet.id

    async def _retry_operation(self, operation: Callable[[], T], description: str) -> T:
        """Execute a blocking operation in a thread with retry logic.

        Args:
            operation: Callable that performs the operation
            description: Human-readable description for error messages

        Returns:
            Result of the operation

        Raises:
            SheetsAPIError: If the operation fails with a non-transient error,
                or after all retries are exhausted
        """
        last_error = None

        for attempt in range(self.max_retries + 1):
            try:
                return await asyncio.to_thread(operation)
            except SheetsAPIError as e:
                if e.status_code not in RETRYABLE_STATUS:
                    raise
                last_error = e

                if attempt < self.max_retries:
                    delay = self.base_delay * (2 ** attempt)
                    logger.warning(
                        "Attempt %d to %s failed (%s); retrying in %.2fs",
                        attempt + 1, description, e.status_code, delay,
                    )
                    await asyncio.sleep(delay)

        # All retries exhausted
        raise SheetsAPIError(
            f"Failed to {description} after {self.max_retries + 1} attempts: {last_error}",
            status_code=last_error.status_code,
            details=last_error.details,
        ) from last_error
