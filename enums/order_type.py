from enum import Enum


class OrderType(str, Enum):
    DELIVERY = "Delivery"
    PICKUP = "Pickup"

    @property
    def requires_address(self) -> bool:
        return self == OrderType.DELIVERY
