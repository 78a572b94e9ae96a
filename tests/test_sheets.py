import unittest
from unittest.mock import MagicMock, patch

import requests
from gspread.exceptions import APIError, WorksheetNotFound

import models.metrics as metrics_module
from models import sheets
from models.errors import RateLimitError, StoreError
from models.sheets import SheetsStore


def api_error(status_code):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = {
        'error': {'code': status_code, 'message': 'failure', 'status': 'FAILED'},
    }
    return APIError(response)


class TestSheetsStore(unittest.TestCase):
    """Tests for the gspread-backed store adapter"""

    def setUp(self):
        metrics_module.reset_metrics()
        self.worksheet = MagicMock()
        self.spreadsheet = MagicMock()
        self.spreadsheet.worksheet.return_value = self.worksheet
        self.store = SheetsStore(self.spreadsheet)

    def tearDown(self):
        metrics_module.reset_metrics()

    def test_read_range(self):
        self.worksheet.get.return_value = [['R1', 'Asha'], ['R2']]

        rows = self.store.read_range('10A', 'A2:D')

        self.spreadsheet.worksheet.assert_called_once_with('10A')
        self.worksheet.get.assert_called_once_with('A2:D')
        self.assertEqual(rows, [['R1', 'Asha'], ['R2']])
        self.assertEqual(metrics_module.get_metrics()['total_reads'], 1)

    def test_write_range_uses_user_entered(self):
        self.store.write_range('10A', 'A1:E1', [['RollNumber', 'Name', 'Email', 'Section', '2024-06-01']])

        self.worksheet.update.assert_called_once_with(
            range_name='A1:E1',
            values=[['RollNumber', 'Name', 'Email', 'Section', '2024-06-01']],
            value_input_option='USER_ENTERED',
        )
        self.assertEqual(metrics_module.get_metrics()['total_writes'], 1)

    def test_batch_write_sends_one_request(self):
        self.store.batch_write('10A', [('E2', [['Present']]), ('E3', [['Absent']])])

        self.worksheet.batch_update.assert_called_once_with(
            [{'range': 'E2', 'values': [['Present']]}, {'range': 'E3', 'values': [['Absent']]}],
            value_input_option='USER_ENTERED',
        )
        self.assertEqual(metrics_module.get_metrics()['total_cells'], 2)

    def test_empty_batch_is_skipped(self):
        self.store.batch_write('10A', [])
        self.worksheet.batch_update.assert_not_called()

    def test_append_rows(self):
        rows = [['2024-06-01', 'teacher1', 'R1', 'Asha', 'S1', 'Present']]

        self.store.append_rows('Activity Sheet', 'A2:F', rows)

        self.worksheet.append_rows.assert_called_once_with(
            rows, value_input_option='USER_ENTERED', table_range='A2:F')
        self.assertEqual(metrics_module.get_metrics()['total_appends'], 1)

    def test_rate_limit_raises_rate_limit_error(self):
        self.worksheet.get.side_effect = api_error(429)

        with self.assertRaises(RateLimitError) as ctx:
            self.store.read_range('10A', 'A2:D')

        self.assertEqual(ctx.exception.sheet_name, '10A')
        self.assertEqual(metrics_module.get_metrics()['rate_limit_errors'], 1)

    def test_api_error_raises_store_error(self):
        self.worksheet.batch_update.side_effect = api_error(500)

        with self.assertRaises(StoreError) as ctx:
            self.store.batch_write('10A', [('E2', [['Present']])])

        self.assertNotIsInstance(ctx.exception, RateLimitError)
        self.assertEqual(metrics_module.get_metrics()['store_errors'], 1)

    def test_missing_worksheet_raises_store_error(self):
        self.spreadsheet.worksheet.side_effect = WorksheetNotFound('Nope')

        with self.assertRaises(StoreError) as ctx:
            self.store.read_range('Nope', 'A2:D')

        self.assertIn("'Nope' not found", ctx.exception.message)

    def test_transport_error_raises_store_error(self):
        self.worksheet.append_rows.side_effect = requests.exceptions.ConnectionError('reset')

        with self.assertRaises(StoreError):
            self.store.append_rows('Activity Sheet', 'A2:F', [['x']])


class TestGetSpreadsheet(unittest.TestCase):
    """Tests for opening the spreadsheet from config"""

    @patch('models.sheets.gspread')
    @patch('models.sheets.Credentials')
    def test_opens_by_key_from_json_creds(self, mock_credentials, mock_gspread):
        config = {'GOOGLE_SHEETS_CREDS': '{"type": "service_account"}', 'SPREADSHEET_ID': 'abc123'}

        sheets.get_spreadsheet(config)

        mock_credentials.from_service_account_info.assert_called_once_with(
            {'type': 'service_account'}, scopes=sheets.SCOPES)
        mock_gspread.authorize.return_value.open_by_key.assert_called_once_with('abc123')

    @patch('models.sheets.gspread')
    @patch('models.sheets.Credentials')
    def test_falls_back_to_key_file_and_title(self, mock_credentials, mock_gspread):
        sheets.get_spreadsheet({'GOOGLE_SHEETS_CREDS': '', 'SPREADSHEET_ID': '', 'SHEET_NAME': 'School'})

        mock_credentials.from_service_account_file.assert_called_once_with(
            'client_secret.json', scopes=sheets.SCOPES)
        mock_gspread.authorize.return_value.open.assert_called_once_with('School')


if __name__ == '__main__':
    unittest.main()
