"""
Google Sheets row source.

Reads the inventory tab of the stock spreadsheet as raw string rows.
The API client is built on every fetch from explicit credentials, so no
client or credential state outlives a single call.
"""
import logging
from typing import Any, Optional, Protocol

from google.oauth2 import service_account
from googleapiclient.discovery import build

from . import settings

logger = logging.getLogger(__name__)


class RowSource(Protocol):
    """Anything that can hand over sheet rows, header row first."""

    def fetch_rows(self) -> list[list[str]]: ...


class GoogleSheetSource:
    """
    Row source backed by the Google Sheets v4 API (read-only scope).
    Reads the first tab of the spreadsheet.
    """

    def __init__(
        self,
        credentials_info: dict[str, Any],
        spreadsheet_id: Optional[str],
        sheet_range: str = "A1:Z1000",
    ):
        """
        Args:
            credentials_info: Service-account info dict (as in the JSON key file)
            spreadsheet_id: Google Sheets spreadsheet ID
            sheet_range: Cell range to read, without a sheet name
        """
        private_key = credentials_info.get("private_key")
        # Keys stored in .env files carry literal "\n" sequences
        if private_key:
            private_key = private_key.replace("\\n", "\n")

        # Validate config upfront so a misconfigured deploy fails on the first fetch
        if not private_key:
            raise ValueError("Private key is missing or invalid")
        if not credentials_info.get("client_email"):
            raise ValueError("Client email is missing")
        if not spreadsheet_id:
            raise ValueError("Spreadsheet ID is missing in environment variables")

        self.credentials_info = {**credentials_info, "private_key": private_key}
        self.spreadsheet_id = spreadsheet_id
        # If range includes a sheet name, only keep the cell range
        self.sheet_range = sheet_range.split("!", 1)[-1]

    @classmethod
    def from_settings(cls) -> "GoogleSheetSource":
        return cls(
            credentials_info=settings.google_credentials_info(),
            spreadsheet_id=settings.SPREADSHEET_ID,
            sheet_range=settings.SHEET_RANGE,
        )

    def build_service(self):
        credentials = service_account.Credentials.from_service_account_info(
            self.credentials_info, scopes=settings.SHEETS_SCOPES
        )
        return build("sheets", "v4", credentials=credentials, cache_discovery=False)

    def fetch_rows(self) -> list[list[str]]:
        """
        Returns every row of the first tab. An empty sheet yields [].
        API errors (googleapiclient.errors.HttpError) propagate to the caller.
        """
        service = self.build_service()
        try:
            spreadsheets = service.spreadsheets()

            spreadsheet_info = spreadsheets.get(
                spreadsheetId=self.spreadsheet_id
            ).execute()
            sheets = spreadsheet_info.get("sheets") or [{}]
            sheet_title = (
                sheets[0].get("properties", {}).get("title")
                or settings.DEFAULT_SHEET_TITLE
            )
            logger.info(f"Using sheet: {sheet_title}")

            response = (
                spreadsheets.values()
                .get(
                    spreadsheetId=self.spreadsheet_id,
                    range=f"{sheet_title}!{self.sheet_range}",
                )
                .execute()
            )
        finally:
            service.close()

        rows = response.get("values") or []
        if not rows:
            logger.warning("⚠️ No data found in spreadsheet.")
            return []

        logger.info(f"Fetched {len(rows)} rows (including header).")
        return rows
