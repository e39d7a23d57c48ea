"""
Cart-related exceptions.
"""

from .base import FoodCartException


class CartException(FoodCartException):
    """Base exception for cart-related errors."""
    pass


class BranchConflictException(CartException):
    """Raised when an item from another branch is added without a confirmation step."""

    def __init__(self, cart_branch_id: str, new_branch_id: str):
        super().__init__(
            f"Cart belongs to branch {cart_branch_id}, cannot add item from branch {new_branch_id} "
            f"without confirming the cart discard",
            details={'cart_branch_id': cart_branch_id, 'new_branch_id': new_branch_id}
        )
        self.cart_branch_id = cart_branch_id
        self.new_branch_id = new_branch_id
