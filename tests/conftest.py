"""
Pytest configuration and fixtures for the call-center webhook tests.

Provides:
- An in-memory spreadsheet implementing the gspread ``values_*`` calls we use
- Settings and GoogleSheetsService wired to that spreadsheet
- A FastAPI TestClient over the app built with the fake
"""
import re
import pytest
from typing import Any, Dict, List
from fastapi.testclient import TestClient

from api.main import create_app
from config.settings import Settings
from services.google_sheets import GoogleSheetsService
from services.row_codec import EMERGENCY_HEADERS, INQUIRY_HEADERS, JOB_HEADERS


_A1 = re.compile(r"^(?P<sheet>[^!]+)!(?P<start>[A-Z]+)(?P<row>\d*)(?::(?P<end>[A-Z]+)\d*)?$")


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual modules")
    config.addinivalue_line("markers", "integration: HTTP-level tests through the FastAPI app")


def column_index(letters: str) -> int:
    """A -> 0, B -> 1, ..., AA -> 26."""
    index = 0
    for char in letters:
        index = index * 26 + (ord(char) - 64)
    return index - 1


class FakeSpreadsheet:
    """
    In-memory stand-in for ``gspread.Spreadsheet``.

    Rows are stored right-trimmed, the way the Sheets API returns them.
    """

    def __init__(self):
        self.tables: Dict[str, List[List[Any]]] = {
            "Jobs": [list(JOB_HEADERS)],
            "Emergency": [list(EMERGENCY_HEADERS)],
            "Inquiry": [list(INQUIRY_HEADERS)],
        }
        self.calls: List[tuple] = []
        self.fail_on: set = set()

    def _check(self, method: str):
        if method in self.fail_on:
            raise RuntimeError(f"{method} failed: backend unavailable")

    def add_row(self, table: str, row: List[Any]):
        self.tables[table].append(list(row))

    def values_get(self, range_name, params=None):
        self.calls.append(("values_get", range_name))
        self._check("values_get")
        match = _A1.match(range_name)
        end = column_index(match.group("end") or match.group("start")) + 1
        values = [row[:end] for row in self.tables[match.group("sheet")]]
        return {"range": range_name, "values": values}

    def values_append(self, range_name, params=None, body=None):
        self.calls.append(("values_append", range_name, params))
        self._check("values_append")
        sheet = _A1.match(range_name).group("sheet")
        for row in body["values"]:
            self.tables[sheet].append(list(row))
        return {"updates": {"updatedRows": len(body["values"])}}

    def values_batch_update(self, body=None):
        self.calls.append(("values_batch_update", body))
        self._check("values_batch_update")
        for item in body["data"]:
            match = _A1.match(item["range"])
            row = self.tables[match.group("sheet")][int(match.group("row")) - 1]
            col = column_index(match.group("start"))
            while len(row) <= col:
                row.append("")
            row[col] = item["values"][0][0]
        return {"totalUpdatedCells": len(body["data"])}

    def write_calls(self) -> List[tuple]:
        return [c for c in self.calls if c[0] != "values_get"]


@pytest.fixture
def settings():
    return Settings(google_sheet_id="test-sheet-id", log_file="", log_level="DEBUG")


@pytest.fixture
def spreadsheet():
    return FakeSpreadsheet()


@pytest.fixture
def sheets(settings, spreadsheet):
    return GoogleSheetsService(settings, spreadsheet=spreadsheet)


@pytest.fixture
def app(settings, spreadsheet):
    return create_app(settings, sheets_factory=lambda s: GoogleSheetsService(s, spreadsheet=spreadsheet))


@pytest.fixture
def client(app):
    return TestClient(app)
