"""
Google Sheets integration service for reading and writing call-center rows.
"""
import gspread
import google.auth
from google.oauth2.service_account import Credentials
from typing import Any, Dict, List, Optional
from config.settings import Settings
from models.records import RowMatch
from utils.logger import logger


class GoogleSheetsService:
    """Service for interacting with the call-center spreadsheet."""

    SCOPES = [
        'https://www.googleapis.com/auth/spreadsheets'
    ]

    def __init__(self, settings: Settings, spreadsheet=None):
        self.settings = settings
        self.spreadsheet = spreadsheet
        if self.spreadsheet is None:
            self._initialize()

    def _initialize(self):
        """Authorize and open the configured spreadsheet."""
        try:
            client = gspread.authorize(self._credentials())
            self.spreadsheet = client.open_by_key(self.settings.google_sheet_id)
            logger.info(f"Loaded Google Sheet: {self.settings.google_sheet_id}")
        except Exception as e:
            logger.error(f"Error initializing Google Sheets: {e}")
            raise

    def _credentials(self):
        if self.settings.google_sheets_credentials_file:
            return Credentials.from_service_account_file(
                self.settings.google_sheets_credentials_file,
                scopes=self.SCOPES
            )
        credentials, _ = google.auth.default(scopes=self.SCOPES)
        return credentials

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read_rows(self, sheet_name: str, columns: Optional[str] = None) -> List[List[Any]]:
        """
        Read every row of a worksheet, header included.

        Args:
            sheet_name: Worksheet (table) name
            columns: Column span in A1 notation, defaults to the Jobs read range

        Returns:
            List of rows; rows may be shorter than the span when trailing cells are empty
        """
        range_name = f"{sheet_name}!{columns or self.settings.jobs_read_range}"
        response = self.spreadsheet.values_get(range_name)
        return response.get("values", [])

    def find_by_key(self, sheet_name: str, key: str, key_column: int = 3) -> Optional[RowMatch]:
        """
        Find the first data row whose key column equals ``key``.

        Every call re-reads the whole table. Duplicate keys are allowed and
        only the lowest row wins.

        Args:
            sheet_name: Worksheet (table) name
            key: Exact string to match
            key_column: 0-based column index of the key (D = 3 for phone numbers)

        Returns:
            RowMatch with the 1-based sheet row position (first data row is 2), or None
        """
        rows = self.read_rows(sheet_name)
        for idx, row in enumerate(rows[1:], start=2):
            if key_column < len(row) and row[key_column] == key:
                logger.info(f"Matched {sheet_name} row {idx} for key {key}")
                return RowMatch(position=idx, row=row)

        logger.info(f"No {sheet_name} row found for key {key}")
        return None

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def append_row(self, sheet_name: str, values: List[Any]):
        """Append ``values`` as the new last row of a worksheet."""
        self.spreadsheet.values_append(
            self.settings.append_range_for(sheet_name),
            params={"valueInputOption": self.settings.value_input_option},
            body={"values": [values]}
        )
        logger.info(f"Appended row to {sheet_name}")

    def update_cells(self, sheet_name: str, row_number: int, updates: Dict[str, Any]):
        """
        Write several cells of one row in a single batchUpdate request.

        The backend applies the whole batch or none of it, so a failure never
        leaves the row half updated.

        Args:
            sheet_name: Worksheet (table) name
            row_number: Row number to update (1-indexed)
            updates: Mapping of column letter to new value
        """
        if not updates:
            return

        data = [
            {"range": f"{sheet_name}!{col_letter}{row_number}", "values": [[value]]}
            for col_letter, value in updates.items()
        ]
        self.spreadsheet.values_batch_update({
            "valueInputOption": self.settings.value_input_option,
            "data": data
        })
        logger.info(f"Updated {sheet_name} row {row_number} columns {', '.join(updates)}")
