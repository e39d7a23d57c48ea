"""
Persistence exceptions (cart and address store).
"""

from .base import FoodCartException


class PersistenceException(FoodCartException):
    """Raised when the key-value store cannot be read or written."""

    def __init__(self, key: str, operation: str, reason: str):
        super().__init__(
            f"Failed to {operation} '{key}': {reason}",
            details={'key': key, 'operation': operation, 'reason': reason}
        )
        self.key = key
        self.operation = operation
        self.reason = reason


class CorruptedCartException(PersistenceException):
    """Raised when the stored cart document does not match any known shape."""

    def __init__(self, key: str, reason: str):
        super().__init__(key, "load", f"stored cart is invalid ({reason})")
