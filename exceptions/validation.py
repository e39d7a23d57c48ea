"""
Validation exceptions.

Always recoverable locally: the operation is aborted, state is unchanged and
the message is shown to the customer.
"""

from .base import FoodCartException


class ValidationException(FoodCartException):
    """Base exception for invalid input at order time."""
    pass


class EmptyCartException(ValidationException):
    """Raised when trying to place an order with an empty cart."""

    def __init__(self):
        super().__init__("Cannot place an order with an empty cart")


class MissingDeliveryAddressException(ValidationException):
    """Raised when a delivery order has no resolved address."""

    def __init__(self, branch_id: str | None = None):
        super().__init__(
            "A delivery address is required for delivery orders",
            details={'branch_id': branch_id}
        )
        self.branch_id = branch_id


class InvalidSelectionException(ValidationException):
    """Raised when a menu selection cannot be turned into a line item."""

    def __init__(self, food_item_id: str, reason: str):
        super().__init__(
            f"Invalid selection for food item {food_item_id}: {reason}",
            details={'food_item_id': food_item_id, 'reason': reason}
        )
        self.food_item_id = food_item_id
        self.reason = reason
