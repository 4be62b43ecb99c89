import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from simplesheets import auth
from simplesheets.exceptions import PreconditionError
from simplesheets.transport.gspread_transport import GspreadTransport


class SheetsConfig(BaseModel):
    # Target
    SPREADSHEET_ID: Optional[str] = None
    SHEET_NAME: Optional[str] = None

    # Credentials, first match wins: key file, email + key, API key
    SERVICE_ACCOUNT_FILE: Optional[str] = None
    CLIENT_EMAIL: Optional[str] = None
    PRIVATE_KEY: Optional[str] = None
    API_KEY: Optional[str] = None

    # Transport retry policy
    MAX_RETRIES: int = 3
    BASE_DELAY: float = 1.0

    @staticmethod
    def from_env(dotenv_path: str = ".env") -> "SheetsConfig":
        load_dotenv(dotenv_path)
        return SheetsConfig.model_validate(os.environ)

    def build_transport(self) -> GspreadTransport:
        options = {"max_retries": self.MAX_RETRIES, "base_delay": self.BASE_DELAY}
        if self.SERVICE_ACCOUNT_FILE:
            return auth.authorize_service_account_file(self.SERVICE_ACCOUNT_FILE, **options)
        if self.CLIENT_EMAIL and self.PRIVATE_KEY:
            # Keys kept in .env files usually carry escaped newlines
            private_key = self.PRIVATE_KEY.replace("\\n", "\n")
            return auth.authorize_service_account(self.CLIENT_EMAIL, private_key, **options)
        if self.API_KEY:
            return auth.authorize_api_key(self.API_KEY, **options)
        raise PreconditionError(
            "No credentials configured: set SERVICE_ACCOUNT_FILE, "
            "CLIENT_EMAIL and PRIVATE_KEY, or API_KEY"
        )
