from datetime import datetime, timedelta, timezone

from gspread.utils import rowcol_to_a1

from models.fields import ABSENT

IST_OFFSET_MINUTES = 330

# Unambiguous renderings of a USER_ENTERED date header; slash forms are
# locale dependent (6/1 vs 1/6) and only ever match exactly
HEADER_DATE_FORMATS = ('%Y-%m-%d', '%B %d, %Y')


def column_label(index):
    """Convert a zero-based column index to its letter label (0 -> A, 26 -> AA)"""
    if index < 0:
        raise ValueError(f"Column index must be non-negative, got {index}")
    return rowcol_to_a1(1, index + 1)[:-1]


def cell_label(row, column_index):
    """A1 label for a 1-based row and a zero-based column index"""
    return rowcol_to_a1(row, column_index + 1)


def attendance_date(now=None, offset_minutes=IST_OFFSET_MINUTES):
    """Today's date (YYYY-MM-DD) in a fixed civil offset from UTC"""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local = now.astimezone(timezone(timedelta(minutes=offset_minutes)))
    return local.date().isoformat()


def is_absent(status):
    return str(status or '').strip().lower() == ABSENT


def parse_date_string(date_str):
    """Parse an ISO timestamp or any of the header date formats"""
    text = str(date_str).strip()
    if 'T' in text:
        # ISO format (2025-09-17T00:00:00.000Z)
        return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
    for fmt in HEADER_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognised date: {date_str!r}")


def dates_match(date1, date2):
    """Check if two dates match, handling different formats"""
    if not date1 or not date2:
        return False

    try:
        return parse_date_string(date1) == parse_date_string(date2)
    except ValueError:
        return str(date1) == str(date2)


def find_date_column(headers, date_label):
    """
    Index of the header holding date_label, or None.
    An exact label wins; otherwise a header that renders the same calendar date.
    """
    if date_label in headers:
        return headers.index(date_label)
    for index, header in enumerate(headers):
        if dates_match(header, date_label):
            return index
    return None
