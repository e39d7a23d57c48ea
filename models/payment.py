from pydantic import BaseModel


class PaymentInitDTO(BaseModel):
    """Server-issued payment reference returned by order creation."""
    payment_order_id: str
    amount: int | float   # as issued by the backend (smallest currency unit for most gateways)
    currency: str


class PaymentResultDTO(BaseModel):
    """Completion callback data of the payment sheet."""
    payment_id: str
    order_id: str
    signature: str
