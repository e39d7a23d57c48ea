import json

import pytest
from unittest.mock import patch

from enums.currency import Currency
from enums.message_entity import MessageEntity
from utils.localizator import L10N_DIR, Localizator


class TestLocalizator:

    def test_checkout_message(self):
        assert Localizator.get_text(MessageEntity.CHECKOUT, "order_error") == "Error placing order"

    def test_explicit_language(self):
        assert Localizator.get_text(MessageEntity.CART, "grand_total", lang="en") == "Grand Total"

    def test_unknown_key_raises(self):
        with pytest.raises(KeyError):
            Localizator.get_text(MessageEntity.CART, "no_such_key")

    def test_currency_symbol(self):
        assert Localizator.get_currency_symbol() == "₹"

    @patch('config.CURRENCY', Currency.USD)
    def test_currency_symbol_follows_config(self):
        assert Localizator.get_currency_symbol() == "$"

    def test_cart_section_holds_price_row_labels(self):
        with open(L10N_DIR / "en.json", encoding="UTF-8") as f:
            cart_labels = set(json.load(f)["cart"])

        assert cart_labels == {
            "item_total", "item_tax", "packaging_charges", "packaging_tax", "service_charge",
            "platform_fee", "platform_fee_tax", "delivery_charge", "delivery_tip", "discount",
            "grand_total",
        }
