"""
Models Package

Pydantic DTOs for the cart document, menu selections, pricing and the
order/payment wire shapes.
"""

from models.address import AddressDTO
from models.branch import BranchDTO
from models.cart import CartDTO
from models.checkout import CheckoutOutcomeDTO
from models.fee_config import FeeConfigDTO
from models.line_item import AddOnDTO, LineItemDTO, LineItemRequestDTO, VariantDTO
from models.menu_item import MenuItemDTO, MenuSelectionDTO
from models.order_payload import OrderItemPayloadDTO, OrderPayloadDTO
from models.payment import PaymentInitDTO, PaymentResultDTO
from models.receipt import ReceiptDTO, ReceiptLineDTO
