"""
Network exceptions for remote collaborator calls.
"""

from .base import FoodCartException


class NetworkException(FoodCartException):
    """Raised when a REST call times out, is unreachable or returns a non-2xx status."""

    def __init__(self, method: str, path: str, reason: str, status: int | None = None):
        message = f"{method} {path} failed: {reason}"
        details = {'method': method, 'path': path, 'reason': reason}

        if status is not None:
            message += f" (HTTP {status})"
            details['status'] = status

        super().__init__(message, details)
        self.method = method
        self.path = path
        self.reason = reason
        self.status = status
