"""
Google Sheets Integration
Looks up customer delivery rows by DNI
"""
import re
from typing import Dict, List, Optional

import gspread
from oauth2client.service_account import ServiceAccountCredentials

import config
from tracker.errors import DataSourceError
from tracker.models import Customer


SCOPE = [
    'https://spreadsheets.google.com/feeds',
    'https://www.googleapis.com/auth/drive'
]

# How many leading rows to scan for the header row
HEADER_SEARCH_ROWS = 5


def normalize_dni(value) -> str:
    """
    Reduce a DNI to its letters and digits.

    "12.345.678", " 12345678 " and "12-345-678" all become "12345678".
    """
    return re.sub(r'[^0-9A-Za-z]', '', str(value or '')).upper()


class CustomerSheet:
    """Read-only access to the customer delivery tracking sheet"""

    def __init__(self, sheet_id: str = None, worksheet_name: str = None,
                 columns: Dict[str, str] = None, logger=None):
        """Initialize Google Sheets connection with environment-aware credentials

        Args:
            sheet_id: Google Sheet ID; defaults to config.GOOGLE_SHEET_ID
            worksheet_name: Tab name; defaults to config.CUSTOMER_SHEET_NAME,
                            or the first tab when that is empty
            columns: Attribute -> header mapping; defaults to config.CUSTOMER_COLUMNS
            logger: Optional PortalLogger
        """
        creds_path = config.get_credentials_path()

        if creds_path:
            # Service account JSON file (local, Docker, or Cloud Run with secret)
            creds = ServiceAccountCredentials.from_json_keyfile_name(creds_path, SCOPE)
            self.client = gspread.authorize(creds)
        else:
            # Application Default Credentials (Cloud Run with Workload Identity)
            import google.auth
            credentials, project = google.auth.default(scopes=SCOPE)
            self.client = gspread.authorize(credentials)

        target_sheet_id = sheet_id or config.GOOGLE_SHEET_ID
        target_name = worksheet_name if worksheet_name is not None else config.CUSTOMER_SHEET_NAME
        try:
            self.spreadsheet = self.client.open_by_key(target_sheet_id)
            if target_name:
                self.worksheet = self.spreadsheet.worksheet(target_name)
            else:
                self.worksheet = self.spreadsheet.sheet1
        except Exception as e:
            raise DataSourceError(f"Failed to open Google Sheet: {str(e)}") from e

        self.columns = dict(columns or config.CUSTOMER_COLUMNS)
        self.logger = logger

    @classmethod
    def from_worksheet(cls, worksheet, columns: Dict[str, str] = None, logger=None) -> "CustomerSheet":
        """Build a CustomerSheet around an already opened worksheet (no network)."""
        obj = cls.__new__(cls)
        obj.client = None
        obj.spreadsheet = None
        obj.worksheet = worksheet
        obj.columns = dict(columns or config.CUSTOMER_COLUMNS)
        obj.logger = logger
        return obj

    @property
    def dni_header(self) -> str:
        return self.columns['dni']

    def _read_all(self) -> List[List[str]]:
        try:
            return self.worksheet.get_all_values()
        except Exception as e:
            raise DataSourceError(f"Failed to read Google Sheet: {str(e)}") from e

    def _find_header_row(self, all_values: List[List[str]]) -> int:
        """
        Index of the header row. Sheets sometimes carry a title row above
        the headers, so the first few rows are scanned for the DNI header.
        """
        for idx, row in enumerate(all_values[:HEADER_SEARCH_ROWS]):
            if self.dni_header in [cell.strip() for cell in row]:
                return idx
        return 0

    def get_headers(self) -> List[str]:
        """
        Get column headers from the sheet

        Returns:
            List of column headers (empty when the sheet is empty)
        """
        all_values = self._read_all()
        if not all_values:
            return []
        return [cell.strip() for cell in all_values[self._find_header_row(all_values)]]

    def validate_sheet_structure(self) -> List[str]:
        """
        Check that every mapped header exists in the sheet

        Returns:
            Missing headers (empty list when the sheet is valid)
        """
        headers = self.get_headers()
        return [header for header in self.columns.values() if header and header not in headers]

    def find_by_dni(self, dni: str) -> Optional[Customer]:
        """
        Find the customer row for a DNI

        Args:
            dni: National ID as typed by the customer

        Returns:
            First matching Customer, or None when no row matches

        Raises:
            DataSourceError: The sheet could not be read
        """
        key = normalize_dni(dni)
        if not key:
            return None

        all_values = self._read_all()
        if not all_values:
            self._log_lookup(dni, None)
            return None

        header_idx = self._find_header_row(all_values)
        headers = [cell.strip() for cell in all_values[header_idx]]
        if self.dni_header not in headers:
            raise DataSourceError(f"DNI column '{self.dni_header}' not found in sheet headers")
        dni_col = headers.index(self.dni_header)

        for offset, row in enumerate(all_values[header_idx + 1:], start=header_idx + 2):
            if dni_col >= len(row) or normalize_dni(row[dni_col]) != key:
                continue
            record = {header: (row[i] if i < len(row) else '') for i, header in enumerate(headers)}
            customer = Customer.from_row(record, self.columns, row_number=offset)
            self._log_lookup(dni, customer)
            return customer

        self._log_lookup(dni, None)
        return None

    def _log_lookup(self, dni, customer):
        if self.logger:
            self.logger.log_lookup(dni, customer is not None,
                                   customer.row_number if customer else None)
