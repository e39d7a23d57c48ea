"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import os
import sys

import pytest
import pytest_asyncio
from fakeredis import FakeAsyncRedis

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Set before config is imported; .env never overrides these
os.environ["RUNTIME_ENVIRONMENT"] = "TEST"
os.environ["LANGUAGE"] = "en"
os.environ["CURRENCY"] = "INR"

from models.address import AddressDTO
from models.fee_config import FeeConfigDTO
from models.line_item import AddOnDTO, LineItemRequestDTO, VariantDTO
from services.cart import CartService


# ============================================================================
# Redis Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def redis_client():
    """Create fake Redis client for testing (no real Redis server needed)."""
    client = FakeAsyncRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def cart_service(redis_client):
    return CartService(redis_client)


# ============================================================================
# Domain Fixtures
# ============================================================================

@pytest.fixture
def fee_config():
    """Fees of the worked receipt example (tip 20)."""
    return FeeConfigDTO(
        packaging_charge=10,
        platform_fee=5,
        service_charge=20,
        delivery_charge=30,
        discount=10,
        item_tax_slab_percent=5,
        packaging_tax_rate=0.18,
        platform_fee_tax_rate=0.18,
        tip=20,
    )


@pytest.fixture
def pizza_request():
    """Large pizza with cheese and olives, 120 per unit."""
    return LineItemRequestDTO(
        food_item_id="pizza-1",
        name="Margherita",
        unit_price=120,
        quantity=1,
        variant=VariantDTO(variant_id="large", label="Large", price=100),
        add_ons=[
            AddOnDTO(add_on_id="cheese", name="Extra Cheese", price=15),
            AddOnDTO(add_on_id="olives", name="Olives", price=5),
        ],
    )


@pytest.fixture
def soda_request():
    return LineItemRequestDTO(food_item_id="soda-1", name="Soda", unit_price=40, quantity=1)


@pytest.fixture
def delivery_address():
    return AddressDTO(id=1, name="Home", address="12 MG Road, Bengaluru", type="home",
                      latitude=12.97, longitude=77.59)
