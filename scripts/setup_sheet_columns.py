"""
One-time script to create the Jobs, Emergency and Inquiry worksheets with
their header rows. Existing worksheets keep their data; only an empty
header row is filled in.
"""
import sys
import os

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import gspread
from config.settings import Settings, get_settings
from services.google_sheets import GoogleSheetsService
from services.row_codec import EMERGENCY_HEADERS, INQUIRY_HEADERS, JOB_HEADERS
from utils.logger import logger, setup_logger


def table_headers(settings: Settings) -> dict:
    """Worksheet name -> header row, in sheet order."""
    return {
        settings.jobs_sheet_name: JOB_HEADERS,
        settings.emergency_sheet_name: EMERGENCY_HEADERS,
        settings.inquiry_sheet_name: INQUIRY_HEADERS,
    }


def setup_tables(spreadsheet, settings: Settings) -> list:
    """
    Ensure each table worksheet exists and has a header row.

    Args:
        spreadsheet: gspread.Spreadsheet to prepare
        settings: Settings naming the worksheets

    Returns:
        Names of the worksheets whose header row was written
    """
    written = []
    for sheet_name, headers in table_headers(settings).items():
        try:
            worksheet = spreadsheet.worksheet(sheet_name)
        except gspread.WorksheetNotFound:
            worksheet = spreadsheet.add_worksheet(title=sheet_name, rows=1000, cols=len(headers))
            logger.info(f"Created worksheet: {sheet_name}")

        current = worksheet.row_values(1)
        if any(current):
            logger.info(f"{sheet_name} already has a header row, leaving it as is")
            continue

        worksheet.update(values=[headers], range_name="A1")
        logger.info(f"Wrote {len(headers)} headers to {sheet_name}")
        written.append(sheet_name)

    return written


def main() -> bool:
    print("=" * 80)
    print("SETTING UP CALL-CENTER TABLES")
    print("=" * 80)

    try:
        settings = get_settings()
        setup_logger(settings)
        sheets = GoogleSheetsService(settings)
        written = setup_tables(sheets.spreadsheet, settings)

        print(f"\n✓ Connected to sheet: {settings.google_sheet_id}")
        for sheet_name, headers in table_headers(settings).items():
            status = "headers written" if sheet_name in written else "already set up"
            print(f"  {sheet_name}: {status} ({len(headers)} columns)")
        return True

    except Exception as e:
        logger.error(f"Error setting up tables: {e}")
        print(f"\n✗ Error: {e}")
        return False


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
