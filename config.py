import os

from dotenv import load_dotenv

# .env values must be in the environment before the classes below read it
load_dotenv()


def _env_flag(name, default):
    return os.getenv(name, default).lower() in ('1', 'true', 'yes')


class Config:
    """Base configuration loaded from environment variables."""

    # --- General ---
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
    LOG_FILE = os.getenv('LOG_FILE', '')
    PORT = int(os.getenv('PORT', '5000'))
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*').split(',')

    # --- Google Sheets ---
    GOOGLE_SHEETS_CREDS = os.getenv('GOOGLE_SHEETS_CREDS', '')
    SPREADSHEET_ID = os.getenv('SPREADSHEET_ID', '')
    SHEET_NAME = os.getenv('SHEET_NAME', 'Attendance')
    USER_SHEET = os.getenv('USER_SHEET', 'User')
    ACTIVITY_SHEET = os.getenv('ACTIVITY_SHEET', 'Activity Sheet')

    # Attendance dates are computed in IST (+05:30)
    ATTENDANCE_UTC_OFFSET_MINUTES = int(os.getenv('ATTENDANCE_UTC_OFFSET_MINUTES', '330'))

    # --- Absence notifications ---
    EMAIL_USER = os.getenv('EMAIL_USER', '')
    EMAIL_PASSWORD = os.getenv('EMAIL_PASSWORD', '')
    SMTP_HOST = os.getenv('SMTP_HOST', 'smtp.gmail.com')
    SMTP_PORT = int(os.getenv('SMTP_PORT', '587'))
    SMTP_USE_TLS = _env_flag('SMTP_USE_TLS', 'true')

    DEBUG = _env_flag('FLASK_DEBUG', 'false')
    TESTING = False


class TestingConfig(Config):
    """Configuration for the test suite - never talks to Google or SMTP."""

    TESTING = True
    LOG_LEVEL = 'WARNING'
    LOG_FILE = ''
    GOOGLE_SHEETS_CREDS = ''
    SPREADSHEET_ID = ''
    EMAIL_USER = ''
    EMAIL_PASSWORD = ''
