# utils/errors.py
from typing import List, Optional


class ApplicationError(Exception):
    """Base class for failures that map onto a client-facing HTTP status."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationFailed(ApplicationError):
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, errors: List[str]):
        super().__init__(", ".join(errors))
        self.errors = list(errors)


class Conflict(ApplicationError):
    """Email or mobile number already belongs to another application."""

    status_code = 400
    default_message = "Application already exists"

    def __init__(self, field: str):
        label = "Email" if field == "email" else "Mobile number"
        super().__init__(f"{label} already exists")
        self.field = field


class NotFound(ApplicationError):
    status_code = 404
    default_message = "Not found"


class InvalidArgument(ApplicationError):
    status_code = 400
    default_message = "Invalid argument"


class StorageError(ApplicationError):
    status_code = 500
