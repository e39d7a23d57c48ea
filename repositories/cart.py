import json
import logging

from pydantic import ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

import config
from exceptions.persistence import CorruptedCartException, PersistenceException
from models.cart import CartDTO


class CartRepository:
    """
    Whole-document cart storage in Redis.

    The cart is written as one JSON document per key (replace-on-write, no
    partial updates). Documents written by the mobile client (a bare JSON
    array with id / price / branchId keys) are migrated on load.
    """

    @staticmethod
    def storage_key(customer_id: str | None = None) -> str:
        if customer_id is None:
            return config.CART_STORAGE_KEY
        return f"{config.CART_STORAGE_KEY}:{customer_id}"

    @staticmethod
    async def load(key: str, redis: Redis) -> CartDTO:
        try:
            raw = await redis.get(key)
        except RedisError as e:
            logging.error(f"Cart load failed for key '{key}': {e}")
            raise PersistenceException(key, "load", str(e)) from e

        if raw is None:
            return CartDTO()

        try:
            document = json.loads(raw)
            if isinstance(document, list):
                # Legacy client shape: the cart is the bare list of line items
                return CartDTO(items=document)
            return CartDTO.model_validate(document)
        except (ValueError, ValidationError) as e:
            # pydantic's ValidationError is a ValueError subclass, json errors too
            logging.warning(f"Rejected stored cart under '{key}': {e}")
            raise CorruptedCartException(key, str(e).splitlines()[0]) from e

    @staticmethod
    async def save(cart: CartDTO, key: str, redis: Redis) -> None:
        try:
            await redis.set(key, cart.model_dump_json())
        except RedisError as e:
            logging.error(f"Cart save failed for key '{key}': {e}")
            raise PersistenceException(key, "save", str(e)) from e

    @staticmethod
    async def clear(key: str, redis: Redis) -> None:
        try:
            await redis.delete(key)
        except RedisError as e:
            logging.error(f"Cart clear failed for key '{key}': {e}")
            raise PersistenceException(key, "clear", str(e)) from e
