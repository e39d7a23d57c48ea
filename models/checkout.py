from pydantic import BaseModel

from enums.placement_state import PlacementState
from models.receipt import ReceiptDTO


class CheckoutOutcomeDTO(BaseModel):
    """Result of one order placement attempt, with the message to show."""
    state: PlacementState
    message: str
    payment_order_id: str | None = None
    payment_id: str | None = None
    receipt: ReceiptDTO | None = None
