"""
Sheet names, column layout and ranges for the attendance spreadsheet.
Single source of truth for the store schema used across the app.
"""

# Sheet names (overridable through config)
USER_SHEET = 'User'
ACTIVITY_SHEET = 'Activity Sheet'

# Credential sheet: username, password, then up to 7 class-sheet ids
CREDENTIAL_RANGE = 'A:I'
USERNAME_COL = 0
PASSWORD_COL = 1
FIRST_CLASS_SHEET_COL = 2
MAX_CLASS_SHEETS = 7

# Class sheets: row 1 is the header, students start on row 2
HEADER_ROW = 1
FIRST_DATA_ROW = 2
HEADER_RANGE = '1:1'
ROSTER_RANGE = 'A2:D'

# Fixed roster labels, date labels are appended after these
ROLL_NUMBER = 'RollNumber'
NAME = 'Name'
EMAIL = 'Email'
SECTION = 'Section'
ROSTER_HEADERS = [ROLL_NUMBER, NAME, EMAIL, SECTION]

# Activity (audit) sheet: date, recordedByUser, rollNumber, name, section, status
AUDIT_RANGE = 'A2:F'
AUDIT_HEADERS = ['Date', 'User', ROLL_NUMBER, NAME, SECTION, 'Status']

ABSENT = 'absent'
