"""
Unit Tests: CheckoutService.place_order

Every terminal path of an order placement attempt:
- validation keeps the attempt IDLE
- order creation / payment / verification failures end FAILED, cart kept
- verified payment ends COMPLETED, cart cleared
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from enums.order_type import OrderType
from enums.payment_method import PaymentMethod
from enums.placement_state import PlacementState
from exceptions.network import NetworkException
from exceptions.order import InvalidPlacementTransitionException
from exceptions.payment import PaymentCancelledException, PaymentSheetException
from exceptions.persistence import PersistenceException
from models.cart import CartDTO
from models.payment import PaymentInitDTO, PaymentResultDTO
from services.api_client import FoodOrderingApiClient
from services.checkout import CheckoutService
from services.payment import PaymentSheet

PAYMENT_INIT = PaymentInitDTO(payment_order_id="order_P1", amount=31770, currency="INR")
PAYMENT_RESULT = PaymentResultDTO(payment_id="pay_P1", order_id="order_P1", signature="sig")


@pytest.fixture
def api_client():
    client = MagicMock(spec=FoodOrderingApiClient)
    client.create_order = AsyncMock(return_value=PAYMENT_INIT)
    client.verify_payment = AsyncMock(return_value=True)
    return client


@pytest.fixture
def payment_sheet():
    sheet = MagicMock(spec=PaymentSheet)
    sheet.open = AsyncMock(return_value=PAYMENT_RESULT)
    return sheet


@pytest_asyncio.fixture
async def filled_cart(cart_service, pizza_request):
    await cart_service.add_or_merge(pizza_request.model_copy(update={"quantity": 2}), "branch-a")
    return cart_service


@pytest.fixture
def checkout(filled_cart, api_client, payment_sheet):
    return CheckoutService(filled_cart, api_client, payment_sheet)


class TestValidationPaths:

    @pytest.mark.asyncio
    async def test_empty_cart_stays_idle(self, cart_service, api_client, payment_sheet, fee_config):
        checkout = CheckoutService(cart_service, api_client, payment_sheet)

        outcome = await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)

        assert outcome.state == PlacementState.IDLE
        assert outcome.message == "Your cart is empty. Add items before placing the order."
        api_client.create_order.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delivery_without_address_stays_idle(self, checkout, api_client, fee_config):
        outcome = await checkout.place_order(fee_config, OrderType.DELIVERY, PaymentMethod.ONLINE)

        assert outcome.state == PlacementState.IDLE
        assert outcome.message == "Please select a delivery address before placing the order."
        api_client.create_order.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unreadable_cart_stays_idle(self, api_client, payment_sheet, fee_config):
        cart_service = MagicMock()
        cart_service.get_cart = AsyncMock(side_effect=PersistenceException("cart", "load", "down"))
        checkout = CheckoutService(cart_service, api_client, payment_sheet)

        outcome = await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)

        assert outcome.state == PlacementState.IDLE
        api_client.create_order.assert_not_awaited()


class TestFailurePaths:

    @pytest.mark.asyncio
    async def test_create_order_network_error(self, checkout, filled_cart, api_client, fee_config):
        api_client.create_order.side_effect = NetworkException("POST", "/order/create", "timeout")

        outcome = await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)

        assert outcome.state == PlacementState.FAILED
        assert outcome.message == "Error placing order"
        assert not (await filled_cart.get_cart()).is_empty

    @pytest.mark.asyncio
    async def test_missing_payment_reference(self, checkout, payment_sheet, api_client, fee_config):
        api_client.create_order.return_value = None

        outcome = await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)

        assert outcome.state == PlacementState.FAILED
        assert outcome.message == "Failed to initiate payment. Please try again."
        payment_sheet.open.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        PaymentCancelledException("order_P1"),
        PaymentSheetException("order_P1", "BAD_REQUEST_ERROR"),
    ])
    async def test_payment_sheet_failure(self, checkout, filled_cart, api_client, payment_sheet,
                                         fee_config, error):
        payment_sheet.open.side_effect = error

        outcome = await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)

        assert outcome.state == PlacementState.FAILED
        assert outcome.message == "Payment failed or was cancelled. Please try again."
        assert outcome.payment_order_id == "order_P1"
        api_client.verify_payment.assert_not_awaited()
        assert not (await filled_cart.get_cart()).is_empty

    @pytest.mark.asyncio
    async def test_verification_rejected(self, checkout, filled_cart, api_client, fee_config):
        api_client.verify_payment.return_value = False

        outcome = await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)

        assert outcome.state == PlacementState.FAILED
        assert outcome.message == "Payment verification failed."
        assert not (await filled_cart.get_cart()).is_empty

    @pytest.mark.asyncio
    async def test_verification_network_error(self, checkout, api_client, fee_config):
        api_client.verify_payment.side_effect = NetworkException("POST", "/payment/verify", "timeout")

        outcome = await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)

        assert outcome.state == PlacementState.FAILED
        assert outcome.message == "Payment verification failed."


class TestSuccessPath:

    @pytest.mark.asyncio
    async def test_verified_payment_completes_and_clears_cart(self, checkout, filled_cart, api_client,
                                                              payment_sheet, fee_config, delivery_address):
        outcome = await checkout.place_order(
            fee_config, OrderType.DELIVERY, PaymentMethod.ONLINE, delivery_address
        )

        assert outcome.state == PlacementState.COMPLETED
        assert outcome.message == "Payment successful! Your order has been placed."
        assert outcome.payment_order_id == "order_P1"
        assert outcome.payment_id == "pay_P1"
        assert outcome.receipt.grand_total == pytest.approx(317.70)
        assert (await filled_cart.get_cart()).is_empty

        payload = api_client.create_order.await_args.args[0]
        assert payload.branch_id == "branch-a"
        assert payload.delivery_address == delivery_address
        payment_sheet.open.assert_awaited_once_with(PAYMENT_INIT)
        api_client.verify_payment.assert_awaited_once_with(PAYMENT_RESULT)

    @pytest.mark.asyncio
    async def test_clear_failure_still_completes(self, api_client, payment_sheet, fee_config, pizza_request):
        cart = CartDTO(items=[pizza_request.to_line_item("branch-a")])
        cart_service = MagicMock()
        cart_service.get_cart = AsyncMock(return_value=cart)
        cart_service.clear = AsyncMock(side_effect=PersistenceException("cart", "clear", "down"))
        checkout = CheckoutService(cart_service, api_client, payment_sheet)

        outcome = await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)

        assert outcome.state == PlacementState.COMPLETED

    @pytest.mark.asyncio
    async def test_retry_after_failure(self, checkout, api_client, fee_config):
        api_client.create_order.side_effect = [
            NetworkException("POST", "/order/create", "timeout"),
            PAYMENT_INIT,
        ]

        first = await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)
        second = await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)

        assert first.state == PlacementState.FAILED
        assert second.state == PlacementState.COMPLETED
        assert checkout.state == PlacementState.COMPLETED

    @pytest.mark.asyncio
    async def test_attempt_in_flight_is_rejected(self, checkout, fee_config):
        checkout.state = PlacementState.AWAITING_PAYMENT

        with pytest.raises(InvalidPlacementTransitionException):
            await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)

    @pytest.mark.asyncio
    async def test_empty_cart_while_in_flight_is_rejected(self, cart_service, api_client, payment_sheet,
                                                          fee_config):
        checkout = CheckoutService(cart_service, api_client, payment_sheet)
        checkout.state = PlacementState.VERIFYING

        with pytest.raises(InvalidPlacementTransitionException):
            await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)
        assert checkout.state == PlacementState.VERIFYING


class TestUnexpectedErrors:

    @pytest.mark.asyncio
    async def test_sheet_crash_fails_and_allows_retry(self, checkout, filled_cart, payment_sheet, fee_config):
        payment_sheet.open.side_effect = [RuntimeError("sdk crashed"), PAYMENT_RESULT]

        first = await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)

        assert first.state == PlacementState.FAILED
        assert first.message == "Payment failed or was cancelled. Please try again."
        assert checkout.state == PlacementState.FAILED
        assert not (await filled_cart.get_cart()).is_empty

        second = await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)

        assert second.state == PlacementState.COMPLETED

    @pytest.mark.asyncio
    async def test_malformed_order_response_fails(self, checkout, api_client, payment_sheet, fee_config):
        api_client.create_order.side_effect = ValueError("razorpayOrderId is not a string")

        outcome = await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)

        assert outcome.state == PlacementState.FAILED
        assert outcome.message == "Error placing order"
        payment_sheet.open.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_verification_crash_fails(self, checkout, filled_cart, api_client, fee_config):
        api_client.verify_payment.side_effect = RuntimeError("bad response")

        outcome = await checkout.place_order(fee_config, OrderType.PICKUP, PaymentMethod.ONLINE)

        assert outcome.state == PlacementState.FAILED
        assert outcome.message == "Payment verification failed."
        assert not (await filled_cart.get_cart()).is_empty
