"""
Exception hierarchy for the attendance service.
Routes translate these into HTTP responses; nothing below the route layer
knows about status codes.
"""


class AttendanceError(Exception):
    """Base class for every error raised by the attendance service"""
    def __init__(self, message):
        self.message = message
        super().__init__(self.message)


class ValidationError(AttendanceError):
    """A request is missing required input"""


class MissingFields(ValidationError):
    def __init__(self, fields):
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class AuthError(AttendanceError):
    """Credentials were rejected"""


class InvalidCredentials(AuthError):
    # Same message for unknown user and wrong password
    def __init__(self, message="Invalid username or password"):
        super().__init__(message)


class NotFoundError(AttendanceError):
    """A referenced record does not exist in the store"""


class RollNumberNotFound(NotFoundError):
    def __init__(self, roll_number):
        self.roll_number = roll_number
        super().__init__(f"Roll number {roll_number} not found.")


class StoreError(AttendanceError):
    """Any failure talking to the tabular store"""
    def __init__(self, message, sheet_name=None):
        self.sheet_name = sheet_name
        super().__init__(message)


class RateLimitError(StoreError):
    """Raised when Google Sheets API rate limit is hit"""
    def __init__(self, sheet_name=None,
                 message="Google Sheets rate limit exceeded. Please wait a moment and try again."):
        super().__init__(message, sheet_name=sheet_name)


class DispatchError(AttendanceError):
    """A guardian notification could not be delivered. Logged, never surfaced."""
