"""
Order placement state machine.

Validates the transitions of a checkout attempt and logs every state change,
so illegal combinations (e.g. verifying a payment that was never opened)
cannot happen.
"""

import logging
from typing import Dict, List, Set

from enums.placement_state import PlacementState
from exceptions.order import InvalidPlacementTransitionException

logger = logging.getLogger(__name__)


class PlacementTransition:
    """Represents a valid state transition with metadata"""

    def __init__(self, from_state: PlacementState, to_state: PlacementState, description: str = ""):
        self.from_state = from_state
        self.to_state = to_state
        self.description = description

    def __repr__(self):
        return f"{self.from_state.value} -> {self.to_state.value}"


class OrderPlacementStateMachine:
    """
    Finite state machine for a single order placement attempt.

    Valid transitions:
    - IDLE -> SUBMITTING (place order with a valid cart)
    - SUBMITTING -> AWAITING_PAYMENT (order created, payment reference issued)
    - SUBMITTING -> FAILED (order creation failed or no payment reference)
    - AWAITING_PAYMENT -> VERIFYING (payment sheet reported completion)
    - AWAITING_PAYMENT -> FAILED (payment cancelled or gateway error)
    - VERIFYING -> COMPLETED (backend verified the payment)
    - VERIFYING -> FAILED (verification failed)
    - COMPLETED / FAILED -> IDLE (ready for a fresh attempt)
    """

    VALID_TRANSITIONS: List[PlacementTransition] = [
        PlacementTransition(PlacementState.IDLE, PlacementState.SUBMITTING,
                            "Order submitted"),
        PlacementTransition(PlacementState.SUBMITTING, PlacementState.AWAITING_PAYMENT,
                            "Order created, payment sheet opened"),
        PlacementTransition(PlacementState.SUBMITTING, PlacementState.FAILED,
                            "Order creation failed"),
        PlacementTransition(PlacementState.AWAITING_PAYMENT, PlacementState.VERIFYING,
                            "Payment completed, verifying"),
        PlacementTransition(PlacementState.AWAITING_PAYMENT, PlacementState.FAILED,
                            "Payment failed or cancelled"),
        PlacementTransition(PlacementState.VERIFYING, PlacementState.COMPLETED,
                            "Payment verified"),
        PlacementTransition(PlacementState.VERIFYING, PlacementState.FAILED,
                            "Payment verification failed"),
        PlacementTransition(PlacementState.COMPLETED, PlacementState.IDLE,
                            "Ready for a new order"),
        PlacementTransition(PlacementState.FAILED, PlacementState.IDLE,
                            "Ready to retry"),
    ]

    FINAL_STATES = frozenset({PlacementState.COMPLETED, PlacementState.FAILED})

    # Build transition map for fast lookup
    _transition_map: Dict[PlacementState, Set[PlacementState]] = {}
    _transition_descriptions: Dict[tuple, str] = {}

    @classmethod
    def _build_transition_map(cls):
        """Build internal transition maps"""
        if cls._transition_map:
            return  # Already built

        for transition in cls.VALID_TRANSITIONS:
            cls._transition_map.setdefault(transition.from_state, set()).add(transition.to_state)
            cls._transition_descriptions[(transition.from_state, transition.to_state)] = transition.description

    @classmethod
    def is_valid_transition(cls, from_state: PlacementState, to_state: PlacementState) -> bool:
        """
        Check if a state transition is valid.

        Args:
            from_state: Current placement state
            to_state: Desired new state

        Returns:
            True if transition is valid, False otherwise
        """
        cls._build_transition_map()
        return to_state in cls._transition_map.get(from_state, set())

    @classmethod
    def get_valid_transitions(cls, from_state: PlacementState) -> List[PlacementState]:
        cls._build_transition_map()
        return sorted(cls._transition_map.get(from_state, set()), key=lambda s: s.value)

    @classmethod
    def get_transition_description(cls, from_state: PlacementState, to_state: PlacementState) -> str:
        cls._build_transition_map()
        return cls._transition_descriptions.get(
            (from_state, to_state),
            f"Transition from {from_state.value} to {to_state.value}"
        )

    @classmethod
    def is_final_state(cls, state: PlacementState) -> bool:
        """Final states end an attempt; the next attempt starts from IDLE again."""
        return state in cls.FINAL_STATES

    @classmethod
    def transition(cls, from_state: PlacementState, to_state: PlacementState,
                   branch_id: str | None = None) -> PlacementState:
        """
        Validate a transition and write the audit log line.

        Args:
            from_state: Current placement state
            to_state: Desired new state
            branch_id: Branch of the cart being ordered, for the log

        Returns:
            to_state

        Raises:
            InvalidPlacementTransitionException: If the transition is not allowed
        """
        if not cls.is_valid_transition(from_state, to_state):
            logger.error(f"Invalid placement transition for branch {branch_id}: "
                         f"{from_state.value} -> {to_state.value}")
            raise InvalidPlacementTransitionException(from_state.value, to_state.value)

        description = cls.get_transition_description(from_state, to_state)
        logger.info(f"ORDER_PLACEMENT_TRANSITION: branch {branch_id} "
                    f"{from_state.value} -> {to_state.value}: {description}")
        return to_state
