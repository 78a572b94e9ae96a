import logging
import secrets

from models.errors import InvalidCredentials, MissingFields
from models.fields import (
    CREDENTIAL_RANGE,
    FIRST_CLASS_SHEET_COL,
    MAX_CLASS_SHEETS,
    PASSWORD_COL,
    USER_SHEET,
    USERNAME_COL,
)

logger = logging.getLogger(__name__)


def _cell(row, index):
    return row[index] if index < len(row) else ''


class AuthGate:
    """Checks username / password against the credential sheet."""

    def __init__(self, store, sheet_name=USER_SHEET):
        self._store = store
        self._sheet_name = sheet_name

    def login(self, username, password):
        """
        Return the ordered class-sheet ids the user may operate on.
        Raises MissingFields for blank input and InvalidCredentials for an
        unknown user or a wrong password alike.
        """
        missing = [name for name, value in (('username', username), ('password', password)) if not value]
        if missing:
            raise MissingFields(missing)

        logger.info("Login attempt: %s", username)
        rows = self._store.read_range(self._sheet_name, CREDENTIAL_RANGE)
        user_row = next((row for row in rows if _cell(row, USERNAME_COL) == username), None)

        if user_row is None or not secrets.compare_digest(
                str(_cell(user_row, PASSWORD_COL)).encode('utf-8'), str(password).encode('utf-8')):
            logger.info("Invalid login for: %s", username)
            raise InvalidCredentials()

        slots = user_row[FIRST_CLASS_SHEET_COL:FIRST_CLASS_SHEET_COL + MAX_CLASS_SHEETS]
        class_sheets = [sheet for sheet in slots if sheet]
        logger.info("Login successful for: %s (%d class sheets)", username, len(class_sheets))
        return class_sheets
