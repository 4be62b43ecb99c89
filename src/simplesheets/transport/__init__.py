"""
Transport module for simplesheets.

This module provides the backends a session talks to. ``GspreadTransport``
targets the Google Sheets API through gspread; ``LocalTransport`` keeps
spreadsheets in memory (no network required).
"""

from simplesheets.transport.base import Transport
from simplesheets.transport.gspread_transport import GspreadTransport
from simplesheets.transport.local_transport import LocalTransport
from simplesheets.transport.sheets_client import SheetsClient

__all__ = [
    "Transport",
    "GspreadTransport",
    "LocalTransport",
    "SheetsClient",
]
