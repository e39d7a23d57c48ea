import json
import logging

from pydantic import TypeAdapter, ValidationError
from redis.asyncio import Redis
from redis.exceptions import RedisError

import config
from exceptions.persistence import PersistenceException
from models.address import AddressDTO

_address_list = TypeAdapter(list[AddressDTO])


class AddressRepository:
    """Saved delivery addresses and the currently selected one."""

    @staticmethod
    async def _get(key: str, redis: Redis) -> str | None:
        try:
            return await redis.get(key)
        except RedisError as e:
            logging.error(f"Address load failed for key '{key}': {e}")
            raise PersistenceException(key, "load", str(e)) from e

    @staticmethod
    async def _set(key: str, value: str, redis: Redis) -> None:
        try:
            await redis.set(key, value)
        except RedisError as e:
            logging.error(f"Address save failed for key '{key}': {e}")
            raise PersistenceException(key, "save", str(e)) from e

    @staticmethod
    async def load_addresses(redis: Redis) -> list[AddressDTO]:
        raw = await AddressRepository._get(config.ADDRESSES_STORAGE_KEY, redis)
        if raw is None:
            return []
        try:
            return _address_list.validate_json(raw)
        except ValidationError as e:
            logging.warning(f"Ignoring unreadable saved addresses: {e.error_count()} errors")
            return []

    @staticmethod
    async def save_addresses(addresses: list[AddressDTO], redis: Redis) -> None:
        await AddressRepository._set(
            config.ADDRESSES_STORAGE_KEY,
            _address_list.dump_json(addresses).decode(),
            redis
        )

    @staticmethod
    async def load_selected_address(redis: Redis) -> AddressDTO | None:
        """
        Return the selected address.

        Falls back to the first saved address when nothing has been selected
        yet, and to None when there are no saved addresses.
        """
        raw = await AddressRepository._get(config.SELECTED_ADDRESS_STORAGE_KEY, redis)
        if raw is not None:
            try:
                return AddressDTO.model_validate(json.loads(raw))
            except ValueError as e:
                logging.warning(f"Ignoring unreadable selected address: {e}")

        addresses = await AddressRepository.load_addresses(redis)
        return addresses[0] if addresses else None

    @staticmethod
    async def save_selected_address(address: AddressDTO, redis: Redis) -> None:
        await AddressRepository._set(
            config.SELECTED_ADDRESS_STORAGE_KEY,
            address.model_dump_json(),
            redis
        )
