"""
Order placement exceptions.
"""

from .base import FoodCartException


class OrderPlacementException(FoodCartException):
    """Base exception for order placement errors."""
    pass


class InvalidPlacementTransitionException(OrderPlacementException):
    """Raised when the placement state machine is asked for an illegal transition."""

    def __init__(self, current_state: str, requested_state: str):
        super().__init__(
            f"Cannot move order placement from '{current_state}' to '{requested_state}'",
            details={'current_state': current_state, 'requested_state': requested_state}
        )
        self.current_state = current_state
        self.requested_state = requested_state
