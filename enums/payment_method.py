from enum import Enum


class PaymentMethod(str, Enum):
    COD = "COD"          # Cash on delivery
    ONLINE = "ONLINE"    # Paid through the payment sheet
