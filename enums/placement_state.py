from enum import Enum


class PlacementState(str, Enum):
    IDLE = "IDLE"                            # Ready for a new attempt
    SUBMITTING = "SUBMITTING"                # Order creation request in flight
    AWAITING_PAYMENT = "AWAITING_PAYMENT"    # Payment sheet opened with server-issued order id
    VERIFYING = "VERIFYING"                  # Payment verification request in flight
    COMPLETED = "COMPLETED"                  # Payment verified, cart cleared
    FAILED = "FAILED"                        # Any failure after submission, cart kept
