"""
Credential setup.

Each helper turns one kind of credential into an authenticated
GspreadTransport. Credential contents are handed to gspread as-is; nothing
here inspects or validates them beyond what gspread itself does.
"""

from typing import Any

import gspread

from simplesheets.transport.gspread_transport import GspreadTransport

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    # Needed to create new spreadsheet files
    "https://www.googleapis.com/auth/drive.file",
]

TOKEN_URI = "https://oauth2.googleapis.com/token"


def authorize_api_key(key: str, **transport_options: Any) -> GspreadTransport:
    """Authorize with an API key (read access to public spreadsheets only)."""
    return GspreadTransport.from_gspread(gspread.api_key(key), **transport_options)


def authorize_service_account(
    client_email: str, private_key: str, **transport_options: Any
) -> GspreadTransport:
    """Authorize as a service account from its email and private key.

    Args:
        client_email: The service account email
        private_key: The PEM private key of the service account
        **transport_options: Passed to GspreadTransport (max_retries, base_delay)
    """
    info = {
        "type": "service_account",
        "client_email": client_email,
        "private_key": private_key,
        "token_uri": TOKEN_URI,
    }
    gc = gspread.service_account_from_dict(info, scopes=SCOPES)
    return GspreadTransport.from_gspread(gc, **transport_options)


def authorize_service_account_file(key_file: str, **transport_options: Any) -> GspreadTransport:
    """Authorize as a service account from a JSON key file.

    Args:
        key_file: Path to a key file holding client_email and private_key
        **transport_options: Passed to GspreadTransport (max_retries, base_delay)
    """
    gc = gspread.service_account(filename=key_file, scopes=SCOPES)
    return GspreadTransport.from_gspread(gc, **transport_options)
