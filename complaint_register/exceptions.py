"""
Domain exceptions raised by the complaint services
"""
from typing import Optional


class ComplaintRegisterError(Exception):
    """Base class for complaint register errors"""


class InvalidDateRangeError(ComplaintRegisterError):
    """Raised when a solve/close date precedes the complain date under the reject policy"""

    def __init__(self, field: str, days: int):
        self.field = field
        self.days = days
        super().__init__(f"{field} is {abs(days)} day(s) before the complain date")


class SpreadsheetReadError(ComplaintRegisterError):
    """Raised when an uploaded spreadsheet cannot be opened or parsed"""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class UploadLimitError(ComplaintRegisterError):
    """Raised when a form field carries more files than it accepts"""

    def __init__(self, field: str, limit: int, received: int):
        self.field = field
        self.limit = limit
        self.received = received
        super().__init__(f"Field '{field}' accepts at most {limit} file(s), got {received}")
