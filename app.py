"""
Application wiring.

Usage:
    app = FoodCartApp.start()
    cart = app.cart_service(customer_id)
    ...
    await app.close()
"""

import logging

from redis.asyncio import Redis

import config
from services.api_client import FoodOrderingApiClient
from services.cart import CartService
from services.checkout import CheckoutService
from services.payment import PaymentSheet
from utils.config_validator import validate_or_exit
from utils.logging_config import setup_logging


def create_redis() -> Redis:
    return Redis(
        host=config.REDIS_HOST,
        port=config.REDIS_PORT,
        db=config.REDIS_DB,
        password=config.REDIS_PASSWORD,
        decode_responses=True
    )


class FoodCartApp:

    def __init__(self, redis: Redis | None = None, api_client: FoodOrderingApiClient | None = None):
        self.redis = redis if redis is not None else create_redis()
        self.api_client = api_client if api_client is not None else FoodOrderingApiClient()
        self._carts: dict[str | None, CartService] = {}

    @classmethod
    def start(cls) -> "FoodCartApp":
        """Configure logging, validate config (exits on error) and connect."""
        setup_logging()
        validate_or_exit(config)
        logging.info(f"FoodCart starting: environment={config.RUNTIME_ENVIRONMENT.value}, "
                     f"backend={config.API_BASE_URL}")
        return cls()

    def cart_service(self, customer_id: str | None = None) -> CartService:
        # One instance per customer, its lock serializes that customer's mutations
        if customer_id not in self._carts:
            self._carts[customer_id] = CartService(self.redis, customer_id)
        return self._carts[customer_id]

    def checkout_service(self, cart_service: CartService, payment_sheet: PaymentSheet,
                         lang: str | None = None) -> CheckoutService:
        return CheckoutService(cart_service, self.api_client, payment_sheet, lang)

    async def close(self):
        await self.api_client.close()
        await self.redis.aclose()
