"""
Startup checks for config.py.

Catches a malformed backend URL, tax rates given in the wrong unit and a
missing payment key before the first customer hits them.
"""

import sys
from typing import Optional
from urllib.parse import urlparse

from enums.runtime_environment import RuntimeEnvironment


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


def validate_api_base_url(base_url: Optional[str]) -> None:
    """
    Validate the REST backend base URL.

    Args:
        base_url: The API_BASE_URL value from config

    Raises:
        ConfigValidationError: If the URL is missing or not http(s)
    """
    if not base_url:
        raise ConfigValidationError(
            "API_BASE_URL is required!\n"
            "Add to .env: API_BASE_URL=https://api.example.com/api"
        )

    parsed = urlparse(base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigValidationError(
            f"API_BASE_URL must be an absolute http(s) URL (got: {base_url})"
        )


def validate_tax_rates(slab_percent: float, packaging_rate: float, platform_rate: float) -> None:
    """
    Validate tax configuration.

    The item slab is a percentage (5 means 5%), the fee rates are fractions
    (0.18 means 18%). Mixing the two up is the common misconfiguration.

    Raises:
        ConfigValidationError: If a value is out of range
    """
    if not 0 <= slab_percent < 100:
        raise ConfigValidationError(
            f"ITEM_TAX_SLAB_PERCENT must be a percentage between 0 and 100 (got: {slab_percent})"
        )

    for name, rate in (("PACKAGING_TAX_RATE", packaging_rate), ("PLATFORM_FEE_TAX_RATE", platform_rate)):
        if not 0 <= rate < 1:
            raise ConfigValidationError(
                f"{name} must be a fraction between 0 and 1, e.g. 0.18 for 18% (got: {rate})"
            )


def validate_required_config(value: Optional[str], name: str, example: str = "") -> None:
    """Raise ConfigValidationError when `value` is empty, with an .env hint if `example` is given."""
    if value:
        return
    hint = f"\nAdd to .env: {name}={example}" if example else ""
    raise ConfigValidationError(f"{name} is required but not set!{hint}")


def validate_startup_config(config_module) -> None:
    """
    Run every startup check against the loaded config module.

    Raises:
        ConfigValidationError: On the first failing check
    """
    validate_api_base_url(config_module.API_BASE_URL)

    validate_tax_rates(
        config_module.ITEM_TAX_SLAB_PERCENT,
        config_module.PACKAGING_TAX_RATE,
        config_module.PLATFORM_FEE_TAX_RATE,
    )

    # The payment sheet cannot be opened in production without a merchant key
    if config_module.RUNTIME_ENVIRONMENT == RuntimeEnvironment.PROD:
        validate_required_config(
            getattr(config_module, 'PAYMENT_KEY_ID', None),
            'PAYMENT_KEY_ID',
            '<your-payment-gateway-key-id>'
        )


def validate_or_exit(config_module) -> None:
    """Startup entry point: print the problem to stderr and exit with code 1."""
    try:
        validate_startup_config(config_module)
    except ConfigValidationError as e:
        print("\n ERROR: Configuration Validation Failed\n", file=sys.stderr)
        print(str(e), file=sys.stderr)
        print("\nFix the .env file or environment and start again.\n", file=sys.stderr)
        sys.exit(1)
