"""
simplesheets - A simplified session layer over the Google Sheets API.

This package selects a spreadsheet and sheet, reads the sheet's header row,
and lets rows be read and written either as plain cell lists or as records
keyed by header name.

Usage:
    >>> from simplesheets import SpreadsheetSession
    >>> session = SpreadsheetSession()
    >>> session.authorize_service_account_file("key.json")
    >>> await session.select_spreadsheet("1AbC...")
    >>> await session.select_sheet("People")
    >>> await session.get_row(2)
    {'Name': 'Ada', 'Age': '36'}

Key components:
- spreadsheet: A1 addressing, HeaderIndex, row transcoding, metadata
- transport: Google Sheets (gspread) and in-memory backends
- SpreadsheetSession: selection state, header cache, row operations
"""

from .exceptions import *
from .config import SheetsConfig
from .session import SessionState, SpreadsheetSession, open_session
from .spreadsheet import (
    HeaderIndex,
    Range,
    ValueInputOption,
    build_range,
    column_index,
    column_letter,
)
from .transport import GspreadTransport, LocalTransport, Transport

# Version
__version__ = "0.1.0"

__all__ = [
    'SpreadsheetSession',
    'SessionState',
    'open_session',
    'SheetsConfig',
    'HeaderIndex',
    'Range',
    'ValueInputOption',
    'build_range',
    'column_index',
    'column_letter',
    'Transport',
    'GspreadTransport',
    'LocalTransport',
    'SimpleSheetsError',
    'InvalidArgumentError',
    'MissingHeaderError',
    'NotFoundError',
    'PreconditionError',
    'HeaderCollisionError',
    'SheetsAPIError',
]
