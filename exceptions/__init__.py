"""
Custom exceptions for FoodCart.

This module provides a hierarchy of custom exceptions for consistent error handling
throughout the application.

Exception Hierarchy:
--------------------
FoodCartException (base)
├── ValidationException
│   ├── EmptyCartException
│   ├── MissingDeliveryAddressException
│   └── InvalidSelectionException
├── CartException
│   └── BranchConflictException
├── PersistenceException
│   └── CorruptedCartException
├── NetworkException
├── PaymentException
│   ├── PaymentCancelledException
│   └── PaymentSheetException
└── OrderPlacementException
    └── InvalidPlacementTransitionException

Usage:
------
Services raise specific exceptions:
    raise MissingDeliveryAddressException(branch_id="b-1")

The checkout flow catches them and turns them into customer-facing messages:
    try:
        payload = OrderService.build_order_payload(...)
    except ValidationException as e:
        return CheckoutOutcomeDTO(state=PlacementState.IDLE, message=...)
"""

from .base import FoodCartException
from .cart import CartException, BranchConflictException
from .network import NetworkException
from .order import OrderPlacementException, InvalidPlacementTransitionException
from .payment import (
    PaymentException,
    PaymentCancelledException,
    PaymentSheetException
)
from .persistence import PersistenceException, CorruptedCartException
from .validation import (
    ValidationException,
    EmptyCartException,
    MissingDeliveryAddressException,
    InvalidSelectionException
)

__all__ = [
    # Base
    'FoodCartException',

    # Validation
    'ValidationException',
    'EmptyCartException',
    'MissingDeliveryAddressException',
    'InvalidSelectionException',

    # Cart
    'CartException',
    'BranchConflictException',

    # Persistence
    'PersistenceException',
    'CorruptedCartException',

    # Network
    'NetworkException',

    # Payment
    'PaymentException',
    'PaymentCancelledException',
    'PaymentSheetException',

    # Order placement
    'OrderPlacementException',
    'InvalidPlacementTransitionException',
]
