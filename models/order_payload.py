from pydantic import BaseModel, Field

from enums.order_type import OrderType
from enums.payment_method import PaymentMethod
from models.address import AddressDTO
from models.line_item import AddOnDTO, VariantDTO


class OrderItemPayloadDTO(BaseModel):
    food_item_id: str
    unit_price: float
    quantity: int
    tax_slab: float
    add_ons: list[AddOnDTO] = Field(default_factory=list)
    variant: VariantDTO | None = None
    options: list = Field(default_factory=list)  # reserved by the backend, always empty

    def to_request_body(self) -> dict:
        return {
            "_id": self.food_item_id,
            "price": self.unit_price,
            "quantity": self.quantity,
            "taxSlab": self.tax_slab,
            "addOns": [
                {"_id": a.add_on_id, "name": a.name, "price": a.price}
                for a in self.add_ons
            ],
            "variant": (
                {"_id": self.variant.variant_id, "label": self.variant.label, "price": self.variant.price}
                if self.variant is not None else None
            ),
            "options": list(self.options),
        }


class OrderPayloadDTO(BaseModel):
    branch_id: str
    items: list[OrderItemPayloadDTO]
    payment_method: PaymentMethod
    order_type: OrderType
    discount: float
    service_charge: float
    delivery_charge: float
    packaging_charges: float
    platform_fee: float
    tip: float
    delivery_address: AddressDTO | None = None

    def to_request_body(self) -> dict:
        """JSON body of POST /order/create."""
        body = {
            "branch": self.branch_id,
            "items": [item.to_request_body() for item in self.items],
            "paymentMethod": self.payment_method.value,
            "orderType": self.order_type.value,
            "discount": self.discount,
            "serviceCharge": self.service_charge,
            "deliveryCharge": self.delivery_charge,
            "packagingCharges": self.packaging_charges,
            "platformFee": self.platform_fee,
            "deliveryTip": self.tip,
        }
        if self.order_type == OrderType.DELIVERY and self.delivery_address is not None:
            body["deliveryAddress"] = self.delivery_address.model_dump()
        return body
