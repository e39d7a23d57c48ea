from pydantic import BaseModel

import config


class FeeConfigDTO(BaseModel):
    """
    Fees, discount, tax rates and tip applied on top of the cart.

    Amounts are in the configured currency. item_tax_slab_percent is a
    percentage embedded in the item price (5 means 5%), the two fee tax
    rates are fractions applied on top of a tax-exclusive charge (0.18).
    """
    packaging_charge: float = 0.0
    platform_fee: float = 0.0
    service_charge: float = 0.0
    delivery_charge: float = 0.0
    discount: float = 0.0
    item_tax_slab_percent: float = 0.0
    packaging_tax_rate: float = 0.0
    platform_fee_tax_rate: float = 0.0
    tip: float | None = None

    @classmethod
    def from_config(cls) -> "FeeConfigDTO":
        return cls(
            packaging_charge=config.PACKAGING_CHARGE,
            platform_fee=config.PLATFORM_FEE,
            service_charge=config.SERVICE_CHARGE,
            delivery_charge=config.DELIVERY_CHARGE,
            discount=config.DISCOUNT,
            item_tax_slab_percent=config.ITEM_TAX_SLAB_PERCENT,
            packaging_tax_rate=config.PACKAGING_TAX_RATE,
            platform_fee_tax_rate=config.PLATFORM_FEE_TAX_RATE,
        )
