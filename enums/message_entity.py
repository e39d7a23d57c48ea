from enum import Enum


class MessageEntity(str, Enum):
    CART = "cart"
    CHECKOUT = "checkout"
    COMMON = "common"
