from unittest.mock import patch

import pytest

from models.payment import PaymentInitDTO
from services.payment import PaymentSheet, build_checkout_options


@pytest.fixture
def payment_init():
    return PaymentInitDTO(payment_order_id="order_P1", amount=31770, currency="INR")


class TestCheckoutOptions:

    @patch('config.PAYMENT_KEY_ID', 'key_test_1')
    @patch('config.PAYMENT_IMAGE_URL', '')
    def test_options_from_config(self, payment_init):
        options = build_checkout_options(payment_init)

        assert options == {
            "description": "Payment for your order",
            "currency": "INR",
            "key": "key_test_1",
            "amount": 31770,
            "order_id": "order_P1",
            "name": "FoodCart",
            "theme": {"color": "#53a20e"},
        }

    @patch('config.PAYMENT_IMAGE_URL', 'https://cdn.example.com/logo.png')
    def test_image_added_when_configured(self, payment_init):
        assert build_checkout_options(payment_init)["image"] == "https://cdn.example.com/logo.png"

    def test_payment_sheet_is_abstract(self):
        with pytest.raises(TypeError):
            PaymentSheet()
