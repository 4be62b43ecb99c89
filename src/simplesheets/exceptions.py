"""
Exception classes for simplesheets.

These exceptions are used throughout the simplesheets package to signal invalid
addresses, missing sheets, session misuse, and failures reported by the
Google Sheets API.
"""

from typing import Any, Optional


class SimpleSheetsError(Exception):
    """Base class for every error raised by simplesheets."""
    pass


class InvalidArgumentError(SimpleSheetsError, ValueError):
    """Raised when a row, column, or range argument is out of range.

    Examples:
        - Column index outside 0..18277
        - Row index below 1
        - Malformed A1 notation
        - Writing an empty row
    """
    pass


class MissingHeaderError(InvalidArgumentError):
    """Raised when a record names a field that has no header column."""
    pass


class NotFoundError(SimpleSheetsError, LookupError):
    """Raised when a spreadsheet or sheet does not exist.

    For sheets, lookups are made against the cached spreadsheet metadata; call
    ``refresh_metadata()`` if the spreadsheet was changed elsewhere.
    """
    pass


class PreconditionError(SimpleSheetsError, RuntimeError):
    """Raised when an operation runs before the session is ready for it.

    Examples:
        - Selecting a spreadsheet before authorizing
        - Reading rows before a sheet is selected
        - Record-style access before headers are loaded
    """
    pass


class HeaderCollisionError(SimpleSheetsError):
    """Raised when a disambiguated header name still collides.

    Duplicate names in the header row are renamed by appending their column
    index. If that renamed value is itself already taken (e.g. a row holding
    ``["A", "A2", "A"]``) the header row cannot be indexed.
    """
    pass


class SheetsAPIError(SimpleSheetsError):
    """Raised when a Google Sheets API call fails.

    This error wraps exceptions from the Google Sheets API (via gspread) and
    provides context about which operation failed. Common causes include:
        - Authentication failures
        - Rate limiting (HTTP 429)
        - Network connectivity issues
        - Invalid ranges or permission errors
        - API quota exceeded

    Attributes:
        status_code: HTTP status reported by the service, if known
        details: Error payload returned by the service, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details
