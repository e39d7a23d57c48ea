from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fakeredis import FakeAsyncRedis

from app import FoodCartApp, create_redis
from services.api_client import FoodOrderingApiClient


@pytest.fixture
def food_cart_app():
    return FoodCartApp(redis=FakeAsyncRedis(decode_responses=True),
                       api_client=FoodOrderingApiClient(base_url="http://localhost:3000/api"))


class TestFoodCartApp:

    def test_cart_service_per_customer(self, food_cart_app):
        assert food_cart_app.cart_service("c-1") is food_cart_app.cart_service("c-1")
        assert food_cart_app.cart_service("c-1") is not food_cart_app.cart_service("c-2")
        assert food_cart_app.cart_service().key == "cart"

    def test_checkout_uses_shared_client(self, food_cart_app):
        checkout = food_cart_app.checkout_service(food_cart_app.cart_service("c-1"), MagicMock(), lang="en")

        assert checkout.api_client is food_cart_app.api_client
        assert checkout.cart_service is food_cart_app.cart_service("c-1")

    @pytest.mark.asyncio
    async def test_cart_round_trip(self, food_cart_app, soda_request):
        await food_cart_app.cart_service("c-1").add_or_merge(soda_request, "branch-a")

        assert await food_cart_app.redis.exists("cart:c-1") == 1
        await food_cart_app.close()

    @pytest.mark.asyncio
    async def test_close(self):
        redis = MagicMock()
        redis.aclose = AsyncMock()
        api_client = MagicMock()
        api_client.close = AsyncMock()

        await FoodCartApp(redis=redis, api_client=api_client).close()

        api_client.close.assert_awaited_once()
        redis.aclose.assert_awaited_once()

    @patch('app.setup_logging')
    @patch('app.validate_or_exit')
    def test_start_validates_config(self, validate_mock, logging_mock):
        with patch('app.create_redis', return_value=MagicMock()):
            FoodCartApp.start()

        logging_mock.assert_called_once()
        validate_mock.assert_called_once()

    @patch('config.REDIS_PORT', 6380)
    def test_create_redis_uses_config(self):
        redis = create_redis()

        assert redis.connection_pool.connection_kwargs["port"] == 6380
        assert redis.connection_pool.connection_kwargs["decode_responses"] is True
