from pydantic import BaseModel

from enums.order_type import OrderType


class ReceiptLineDTO(BaseModel):
    line_item_id: str
    name: str
    quantity: int
    unit_price: float
    item_price: float   # unit_price × quantity, tax-inclusive
    item_tax: float     # tax embedded in item_price


class ReceiptDTO(BaseModel):
    """
    Derived price breakdown of a cart. Never persisted.

    All amounts keep full float precision; round only for display.
    total_item_tax is informational, it is already contained in sub_total.
    """
    order_type: OrderType
    lines: list[ReceiptLineDTO]
    item_tax_slab_percent: float
    sub_total: float
    total_item_tax: float
    packaging_charge: float
    packaging_tax: float
    service_charge: float
    platform_fee: float
    platform_fee_tax: float
    delivery_charge: float  # 0 for pickup orders
    tip: float
    discount: float
    grand_total: float
