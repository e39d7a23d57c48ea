"""
Payment-related exceptions.
"""

from .base import FoodCartException


class PaymentException(FoodCartException):
    """Base exception for payment-related errors."""
    pass


class PaymentCancelledException(PaymentException):
    """Raised when the customer closes the payment sheet without paying."""

    def __init__(self, payment_order_id: str):
        super().__init__(
            f"Payment for order {payment_order_id} was cancelled",
            details={'payment_order_id': payment_order_id}
        )
        self.payment_order_id = payment_order_id


class PaymentSheetException(PaymentException):
    """Raised when the payment gateway reports an error."""

    def __init__(self, payment_order_id: str, reason: str):
        super().__init__(
            f"Payment for order {payment_order_id} failed: {reason}",
            details={'payment_order_id': payment_order_id, 'reason': reason}
        )
        self.payment_order_id = payment_order_id
        self.reason = reason

