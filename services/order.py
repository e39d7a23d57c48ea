import logging

from enums.order_type import OrderType
from enums.payment_method import PaymentMethod
from exceptions.validation import EmptyCartException, MissingDeliveryAddressException
from models.address import AddressDTO
from models.cart import CartDTO
from models.fee_config import FeeConfigDTO
from models.order_payload import OrderItemPayloadDTO, OrderPayloadDTO


class OrderService:

    @staticmethod
    def validate_order(cart: CartDTO, order_type: OrderType, delivery_address: AddressDTO | None) -> None:
        """
        Check that an order can be placed for this cart.

        Raises:
            EmptyCartException: If the cart has no line items
            MissingDeliveryAddressException: If a delivery order has no address
        """
        if cart.is_empty:
            raise EmptyCartException()
        if order_type.requires_address and delivery_address is None:
            raise MissingDeliveryAddressException(cart.branch_id)

    @staticmethod
    def build_order_payload(cart: CartDTO,
                            fee_config: FeeConfigDTO,
                            order_type: OrderType,
                            payment_method: PaymentMethod,
                            delivery_address: AddressDTO | None = None) -> OrderPayloadDTO:
        """
        Assemble the order sent to the backend.

        Prices are sent as stored (tax-inclusive) together with the tax slab;
        totals are recomputed by the backend. The delivery charge is zero and
        no address is attached for pickup orders.

        Raises:
            EmptyCartException: If the cart has no line items
            MissingDeliveryAddressException: If a delivery order has no address
        """
        OrderService.validate_order(cart, order_type, delivery_address)

        items = [
            OrderItemPayloadDTO(
                food_item_id=item.food_item_id,
                unit_price=item.unit_price,
                quantity=item.quantity,
                tax_slab=fee_config.item_tax_slab_percent,
                add_ons=list(item.add_ons),
                variant=item.variant,
                options=[]
            )
            for item in cart.items
        ]

        is_delivery = order_type == OrderType.DELIVERY
        payload = OrderPayloadDTO(
            branch_id=cart.branch_id,
            items=items,
            payment_method=payment_method,
            order_type=order_type,
            discount=fee_config.discount,
            service_charge=fee_config.service_charge,
            delivery_charge=fee_config.delivery_charge if is_delivery else 0.0,
            packaging_charges=fee_config.packaging_charge,
            platform_fee=fee_config.platform_fee,
            tip=fee_config.tip or 0.0,
            delivery_address=delivery_address if is_delivery else None
        )
        logging.debug(
            f"Order payload for branch {payload.branch_id}: {len(items)} line items, "
            f"{order_type.value}, {payment_method.value}"
        )
        return payload
