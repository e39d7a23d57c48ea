from abc import ABC, abstractmethod

import config
from models.payment import PaymentInitDTO, PaymentResultDTO


def build_checkout_options(payment_init: PaymentInitDTO) -> dict:
    """Options handed to the gateway's checkout sheet."""
    options = {
        "description": config.PAYMENT_DESCRIPTION,
        "currency": payment_init.currency,
        "key": config.PAYMENT_KEY_ID,
        "amount": payment_init.amount,
        "order_id": payment_init.payment_order_id,
        "name": config.PAYMENT_MERCHANT_NAME,
        "theme": {"color": config.PAYMENT_THEME_COLOR},
    }
    if config.PAYMENT_IMAGE_URL:
        options["image"] = config.PAYMENT_IMAGE_URL
    return options


class PaymentSheet(ABC):
    """
    Third-party payment UI.

    Implementations open the gateway's checkout with the server-issued
    payment order and wait for the customer to finish.
    """

    @abstractmethod
    async def open(self, payment_init: PaymentInitDTO) -> PaymentResultDTO:
        """
        Returns:
            Payment id, order id and signature reported by the gateway

        Raises:
            PaymentCancelledException: The customer closed the sheet
            PaymentSheetException: The gateway reported an error
        """
