import os
import sys

from dotenv import load_dotenv

from enums.currency import Currency
from enums.runtime_environment import RuntimeEnvironment

# Load .env but don't override existing environment variables
# This allows test scripts to set RUNTIME_ENVIRONMENT=TEST before import
load_dotenv(".env", override=False)


def _exit_with_config_error(name: str, reason, expected: str):
    print(f"\n ERROR: Invalid {name} configuration\n", file=sys.stderr)
    print(f"Reason: {reason}", file=sys.stderr)
    print(f"Expected: {expected}", file=sys.stderr)
    print(f"Current value: {os.environ.get(name, '(not set)')}\n", file=sys.stderr)
    sys.exit(1)


def _parse_amount(name: str, default: str) -> float:
    """Read a non-negative currency amount or rate from the environment."""
    try:
        value = float(os.environ.get(name, default))
        if value < 0:
            raise ValueError(f"{name} must not be negative (got: {value})")
        return value
    except ValueError as e:
        _exit_with_config_error(name, e, "Non-negative number (e.g., 0, 10, 0.18)")


def _parse_int(name: str, default: str) -> int:
    try:
        return int(os.environ.get(name, default))
    except ValueError as e:
        _exit_with_config_error(name, e, "Integer (e.g., 0, 15, 6379)")


# Parse RUNTIME_ENVIRONMENT with clear error message on misconfiguration
try:
    RUNTIME_ENVIRONMENT = RuntimeEnvironment(os.environ.get("RUNTIME_ENVIRONMENT", "DEV"))
except ValueError as e:
    valid_values = [env.value for env in RuntimeEnvironment]
    _exit_with_config_error("RUNTIME_ENVIRONMENT", e, f"One of {', '.join(valid_values)}")

try:
    CURRENCY = Currency(os.environ.get("CURRENCY", "INR"))
except ValueError as e:
    _exit_with_config_error("CURRENCY", e, f"One of {', '.join(c.value for c in Currency)}")

LANGUAGE = os.environ.get("LANGUAGE", "en")

# REST backend
API_BASE_URL = os.environ.get("API_BASE_URL", "http://localhost:3000/api").rstrip("/")
API_TIMEOUT_SECONDS = _parse_int("API_TIMEOUT_SECONDS", "15")

# Key-value persistence (cart, addresses)
REDIS_HOST = os.environ.get("REDIS_HOST", "localhost")
REDIS_PORT = _parse_int("REDIS_PORT", "6379")
REDIS_DB = _parse_int("REDIS_DB", "0")
REDIS_PASSWORD = os.environ.get("REDIS_PASSWORD") or None
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "cart")
ADDRESSES_STORAGE_KEY = os.environ.get("ADDRESSES_STORAGE_KEY", "addresses")
SELECTED_ADDRESS_STORAGE_KEY = os.environ.get("SELECTED_ADDRESS_STORAGE_KEY", "selectedAddress")

# Fee defaults (all amounts in CURRENCY, tax rates fractional)
PACKAGING_CHARGE = _parse_amount("PACKAGING_CHARGE", "10")
PLATFORM_FEE = _parse_amount("PLATFORM_FEE", "5")
SERVICE_CHARGE = _parse_amount("SERVICE_CHARGE", "20")
DELIVERY_CHARGE = _parse_amount("DELIVERY_CHARGE", "30")
DISCOUNT = _parse_amount("DISCOUNT", "10")
ITEM_TAX_SLAB_PERCENT = _parse_amount("ITEM_TAX_SLAB_PERCENT", "5")
PACKAGING_TAX_RATE = _parse_amount("PACKAGING_TAX_RATE", "0.18")
PLATFORM_FEE_TAX_RATE = _parse_amount("PLATFORM_FEE_TAX_RATE", "0.18")

# Payment sheet
PAYMENT_KEY_ID = os.environ.get("PAYMENT_KEY_ID", "")
PAYMENT_MERCHANT_NAME = os.environ.get("PAYMENT_MERCHANT_NAME", "FoodCart")
PAYMENT_DESCRIPTION = os.environ.get("PAYMENT_DESCRIPTION", "Payment for your order")
PAYMENT_IMAGE_URL = os.environ.get("PAYMENT_IMAGE_URL", "")
PAYMENT_THEME_COLOR = os.environ.get("PAYMENT_THEME_COLOR", "#53a20e")

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_RETENTION_DAYS = _parse_int("LOG_RETENTION_DAYS", "7")
LOG_MASK_SECRETS = os.environ.get("LOG_MASK_SECRETS", "true") == "true"
