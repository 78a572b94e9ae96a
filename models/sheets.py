"""
Google Sheets adapter: the only module that talks to gspread.
Components receive a SheetsStore (or anything with the same four methods)
and address cells with A1 ranges on a named worksheet.
"""
import json
import logging
from contextlib import contextmanager

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from gspread.exceptions import APIError, GSpreadException, WorksheetNotFound

from models.errors import RateLimitError, StoreError
from models.metrics import log_api_call, log_rate_limit_error, log_store_error

logger = logging.getLogger(__name__)

SCOPES = [
    'https://www.googleapis.com/auth/spreadsheets',
    'https://www.googleapis.com/auth/drive',
]
DEFAULT_KEY_FILE = 'client_secret.json'
VALUE_INPUT_OPTION = 'USER_ENTERED'


def get_google_creds(creds_json=None, key_file=DEFAULT_KEY_FILE):
    """Get Google credentials either from a JSON blob or a key file"""
    if creds_json:
        return Credentials.from_service_account_info(json.loads(creds_json), scopes=SCOPES)
    return Credentials.from_service_account_file(key_file, scopes=SCOPES)


def get_spreadsheet(config):
    """Open the attendance spreadsheet by id, or by title when no id is configured"""
    creds = get_google_creds(config.get('GOOGLE_SHEETS_CREDS'))
    client = gspread.authorize(creds)
    spreadsheet_id = config.get('SPREADSHEET_ID')
    if spreadsheet_id:
        return client.open_by_key(spreadsheet_id)
    return client.open(config.get('SHEET_NAME', 'Attendance'))


@contextmanager
def _store_call(operation, sheet_name):
    """Translate gspread / transport failures into StoreError"""
    try:
        yield
    except APIError as e:
        if e.response.status_code == 429:
            log_rate_limit_error(sheet_name)
            raise RateLimitError(sheet_name) from e
        log_store_error(sheet_name, operation)
        raise StoreError(f"Google Sheets {operation} failed for '{sheet_name}': {e}", sheet_name) from e
    except WorksheetNotFound as e:
        log_store_error(sheet_name, operation)
        raise StoreError(f"Sheet '{sheet_name}' not found", sheet_name) from e
    except (GSpreadException, GoogleAuthError, requests.exceptions.RequestException) as e:
        log_store_error(sheet_name, operation)
        raise StoreError(f"Google Sheets {operation} failed for '{sheet_name}': {e}", sheet_name) from e


class SheetsStore:
    """Generic read / write / batch-write / append service over one spreadsheet"""

    def __init__(self, spreadsheet):
        self._spreadsheet = spreadsheet

    @classmethod
    def from_config(cls, config):
        return cls(get_spreadsheet(config))

    def _worksheet(self, sheet_name):
        return self._spreadsheet.worksheet(sheet_name)

    def read_range(self, sheet_name, a1_range):
        """Values in a range as a list of rows; trailing empty cells are omitted"""
        with _store_call('read', sheet_name):
            values = self._worksheet(sheet_name).get(a1_range)
        rows = [list(row) for row in values]
        log_api_call('read', sheet_name, cells=sum(len(row) for row in rows))
        return rows

    def write_range(self, sheet_name, a1_range, values):
        with _store_call('write', sheet_name):
            self._worksheet(sheet_name).update(
                range_name=a1_range,
                values=values,
                value_input_option=VALUE_INPUT_OPTION,
            )
        log_api_call('write', sheet_name, cells=sum(len(row) for row in values))

    def batch_write(self, sheet_name, updates):
        """Write several (a1_range, values) pairs in one request"""
        updates = list(updates)
        data = [{'range': a1_range, 'values': values} for a1_range, values in updates]
        if not data:
            return
        with _store_call('write', sheet_name):
            self._worksheet(sheet_name).batch_update(data, value_input_option=VALUE_INPUT_OPTION)
        log_api_call('write', sheet_name,
                     cells=sum(len(row) for _, values in updates for row in values))

    def append_rows(self, sheet_name, table_range, rows):
        if not rows:
            return
        with _store_call('append', sheet_name):
            self._worksheet(sheet_name).append_rows(
                rows,
                value_input_option=VALUE_INPUT_OPTION,
                table_range=table_range,
            )
        log_api_call('append', sheet_name, cells=sum(len(row) for row in rows))
