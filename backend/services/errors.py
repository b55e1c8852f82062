"""
Service error taxonomy.
Every error raised by a service carries the HTTP status it maps to; the
handlers registered in server.py turn them into JSON responses.
"""
from typing import Optional, List


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ServiceError):
    status_code = 400

    def __init__(self, message: str, errors: Optional[List[dict]] = None):
        super().__init__(message)
        self.errors = errors or []


class AuthError(ServiceError):
    status_code = 403

    MISSING = "missing"
    INVALID = "invalid"

    def __init__(self, message: str, reason: str = INVALID, status_code: Optional[int] = None):
        super().__init__(message, status_code)
        self.reason = reason


class NotFoundError(ServiceError):
    status_code = 404


class PersistenceError(ServiceError):
    status_code = 500


class NotificationError(ServiceError):
    """Raised by a notification channel. Never leaves the dispatcher."""

    def __init__(self, channel: str, message: str):
        super().__init__(f"{channel}: {message}")
        self.channel = channel
