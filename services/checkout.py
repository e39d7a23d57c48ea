import logging
from typing import Optional

from enums.message_entity import MessageEntity
from enums.order_type import OrderType
from enums.payment_method import PaymentMethod
from enums.placement_state import PlacementState
from exceptions.network import NetworkException
from exceptions.order import InvalidPlacementTransitionException
from exceptions.payment import PaymentCancelledException, PaymentException
from exceptions.persistence import PersistenceException
from exceptions.validation import EmptyCartException, MissingDeliveryAddressException
from models.address import AddressDTO
from models.checkout import CheckoutOutcomeDTO
from models.fee_config import FeeConfigDTO
from models.receipt import ReceiptDTO
from services.api_client import FoodOrderingApiClient
from services.cart import CartService
from services.order import OrderService
from services.payment import PaymentSheet
from services.pricing import PricingService
from utils.localizator import Localizator
from utils.order_state_machine import OrderPlacementStateMachine


class CheckoutService:
    """
    Places the order of a cart and takes it through payment.

    IDLE -> SUBMITTING -> AWAITING_PAYMENT -> VERIFYING -> COMPLETED | FAILED

    Validation problems (empty cart, delivery without address) keep the
    attempt in IDLE. Every failure after submission ends in FAILED with the
    cart kept, so the customer can retry. Only a verified payment clears the
    cart.
    """

    def __init__(self, cart_service: CartService, api_client: FoodOrderingApiClient,
                 payment_sheet: PaymentSheet, lang: Optional[str] = None):
        self.cart_service = cart_service
        self.api_client = api_client
        self.payment_sheet = payment_sheet
        self.lang = lang
        self.state = PlacementState.IDLE

    def _move(self, to_state: PlacementState, branch_id: str | None) -> None:
        self.state = OrderPlacementStateMachine.transition(self.state, to_state, branch_id)

    def _text(self, key: str) -> str:
        return Localizator.get_text(MessageEntity.CHECKOUT, key, lang=self.lang)

    def _rejected(self, key: str) -> CheckoutOutcomeDTO:
        return CheckoutOutcomeDTO(state=self.state, message=self._text(key))

    def _failed(self, key: str, branch_id: str | None, receipt: ReceiptDTO,
                payment_order_id: str | None = None) -> CheckoutOutcomeDTO:
        self._move(PlacementState.FAILED, branch_id)
        return CheckoutOutcomeDTO(
            state=self.state,
            message=self._text(key),
            payment_order_id=payment_order_id,
            receipt=receipt
        )

    async def place_order(self, fee_config: FeeConfigDTO, order_type: OrderType,
                          payment_method: PaymentMethod,
                          delivery_address: AddressDTO | None = None) -> CheckoutOutcomeDTO:
        """
        Run one order placement attempt.

        Args:
            fee_config: Fees and selected tip shown to the customer
            order_type: Delivery or pickup
            payment_method: Sent with the order
            delivery_address: Required for delivery orders

        Returns:
            CheckoutOutcomeDTO with the final state and the message to show

        Raises:
            InvalidPlacementTransitionException: If an attempt is already in flight
        """
        if OrderPlacementStateMachine.is_final_state(self.state):
            self._move(PlacementState.IDLE, None)
        if self.state != PlacementState.IDLE:
            logging.error(f"Order placement requested while an attempt is {self.state.value}")
            raise InvalidPlacementTransitionException(self.state.value, PlacementState.SUBMITTING.value)

        try:
            cart = await self.cart_service.get_cart()
        except PersistenceException as e:
            logging.error(f"Cannot place order, cart unavailable: {e}")
            return self._rejected("empty_cart")

        try:
            payload = OrderService.build_order_payload(
                cart, fee_config, order_type, payment_method, delivery_address
            )
        except EmptyCartException:
            return self._rejected("empty_cart")
        except MissingDeliveryAddressException:
            return self._rejected("select_address")

        receipt = PricingService.compute_receipt(cart, fee_config, order_type)
        branch_id = cart.branch_id
        self._move(PlacementState.SUBMITTING, branch_id)

        try:
            payment_init = await self.api_client.create_order(payload)
        except NetworkException as e:
            logging.error(f"Error placing order for branch {branch_id}: {e}")
            return self._failed("order_error", branch_id, receipt)
        except Exception as e:
            logging.exception(f"Unexpected error placing order for branch {branch_id}: {e}")
            return self._failed("order_error", branch_id, receipt)

        if payment_init is None:
            return self._failed("payment_init_failed", branch_id, receipt)

        self._move(PlacementState.AWAITING_PAYMENT, branch_id)
        try:
            payment_result = await self.payment_sheet.open(payment_init)
        except PaymentCancelledException:
            logging.info(f"Payment {payment_init.payment_order_id} cancelled by customer")
            return self._failed("payment_failed", branch_id, receipt, payment_init.payment_order_id)
        except PaymentException as e:
            logging.warning(f"Payment {payment_init.payment_order_id} failed: {e}")
            return self._failed("payment_failed", branch_id, receipt, payment_init.payment_order_id)
        except Exception as e:
            logging.exception(f"Payment sheet error for {payment_init.payment_order_id}: {e}")
            return self._failed("payment_failed", branch_id, receipt, payment_init.payment_order_id)

        self._move(PlacementState.VERIFYING, branch_id)
        try:
            verified = await self.api_client.verify_payment(payment_result)
        except NetworkException as e:
            logging.error(f"Error verifying payment {payment_result.payment_id}: {e}")
            verified = False
        except Exception as e:
            logging.exception(f"Unexpected error verifying payment {payment_result.payment_id}: {e}")
            verified = False

        if not verified:
            return self._failed("verification_failed", branch_id, receipt, payment_init.payment_order_id)

        self._move(PlacementState.COMPLETED, branch_id)
        try:
            await self.cart_service.clear()
        except PersistenceException as e:
            # The payment is captured at this point, the order stands
            logging.error(f"Payment {payment_result.payment_id} verified but cart was not cleared: {e}")

        return CheckoutOutcomeDTO(
            state=self.state,
            message=self._text("order_placed"),
            payment_order_id=payment_init.payment_order_id,
            payment_id=payment_result.payment_id,
            receipt=receipt
        )
