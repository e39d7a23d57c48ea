from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from enums.message_entity import MessageEntity
from enums.order_type import OrderType
from models.cart import CartDTO
from models.fee_config import FeeConfigDTO
from models.receipt import ReceiptDTO, ReceiptLineDTO
from utils.localizator import Localizator

# Tip presets offered under the cart
TIP_OPTIONS = (10, 20, 30, 40)

_CENT = Decimal("0.01")


def extract_inclusive_tax(gross_amount: float, slab_percent: float) -> float:
    """Tax contained in a tax-inclusive amount: gross × slab / (100 + slab)."""
    return gross_amount * slab_percent / (100 + slab_percent)


def additive_tax(amount: float, rate: float) -> float:
    """Tax on top of a tax-exclusive charge, rate as a fraction (0.18)."""
    return amount * rate


def round_for_display(amount: float) -> Decimal:
    """
    Round a currency amount to 2 decimal places, half-up.

    Only for display. Going through str() keeps 1.005 at 1.01 instead of
    the 1.00 float binary representation would give.
    """
    return Decimal(str(amount)).quantize(_CENT, rounding=ROUND_HALF_UP)


def format_amount(amount: float, currency_symbol: Optional[str] = None) -> str:
    """
    Format amount for a price row, in the configured currency by default.

    Examples:
        12.5 → ₹12.50
        -10 → -₹10.00
    """
    if currency_symbol is None:
        currency_symbol = Localizator.get_currency_symbol()
    rounded = round_for_display(amount)
    if rounded == 0:
        # Float noise such as -1e-9 must not render as -0.00
        rounded = abs(rounded)
    if rounded < 0:
        return f"-{currency_symbol}{abs(rounded)}"
    return f"{currency_symbol}{rounded}"


class PricingService:
    """Pure receipt computation for a cart snapshot."""

    @staticmethod
    def compute_receipt(cart: CartDTO, fee_config: FeeConfigDTO, order_type: OrderType) -> ReceiptDTO:
        """
        Compute the itemized receipt of a cart.

        Item prices are tax-inclusive, so the item tax is extracted from them
        and shown for information only. Packaging and platform fee are
        tax-exclusive, their taxes are added on top. Fixed fees apply even to
        an empty cart.

        grand_total = sub_total + packaging + packaging_tax + service_charge
                    + platform_fee + platform_fee_tax
                    + delivery_charge (delivery orders only) + tip - discount

        No rounding happens here; see round_for_display().

        Args:
            cart: Cart snapshot (quantities >= 1, single branch)
            fee_config: Fees, tax rates and selected tip
            order_type: Delivery or pickup

        Returns:
            ReceiptDTO with per-line prices and the grand total
        """
        slab = fee_config.item_tax_slab_percent

        lines = []
        for item in cart.items:
            item_price = item.unit_price * item.quantity
            lines.append(ReceiptLineDTO(
                line_item_id=item.line_item_id,
                name=item.name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                item_price=item_price,
                item_tax=extract_inclusive_tax(item_price, slab)
            ))

        sub_total = sum(line.item_price for line in lines)
        total_item_tax = sum(line.item_tax for line in lines)

        packaging_tax = additive_tax(fee_config.packaging_charge, fee_config.packaging_tax_rate)
        platform_fee_tax = additive_tax(fee_config.platform_fee, fee_config.platform_fee_tax_rate)
        delivery_charge = fee_config.delivery_charge if order_type == OrderType.DELIVERY else 0.0
        tip = fee_config.tip or 0.0

        # total_item_tax is already part of sub_total and must not be added again
        grand_total = (
            sub_total
            + fee_config.packaging_charge
            + packaging_tax
            + fee_config.service_charge
            + fee_config.platform_fee
            + platform_fee_tax
            + delivery_charge
            + tip
            - fee_config.discount
        )

        return ReceiptDTO(
            order_type=order_type,
            lines=lines,
            item_tax_slab_percent=slab,
            sub_total=sub_total,
            total_item_tax=total_item_tax,
            packaging_charge=fee_config.packaging_charge,
            packaging_tax=packaging_tax,
            service_charge=fee_config.service_charge,
            platform_fee=fee_config.platform_fee,
            platform_fee_tax=platform_fee_tax,
            delivery_charge=delivery_charge,
            tip=tip,
            discount=fee_config.discount,
            grand_total=grand_total
        )

    @staticmethod
    def toggle_tip(fee_config: FeeConfigDTO, tip_value: float) -> FeeConfigDTO:
        """Select a tip; selecting the current tip again clears it."""
        if fee_config.tip == tip_value:
            return fee_config.model_copy(update={"tip": None})
        return fee_config.model_copy(update={"tip": tip_value})

    @staticmethod
    def format_receipt(receipt: ReceiptDTO, lang: Optional[str] = None) -> list[tuple[str, float]]:
        """
        Price rows in display order.

        Rows that do not apply (no delivery charge on pickup, no tip, no
        discount) are left out. Discount is returned negative.
        """
        def label(key: str) -> str:
            return Localizator.get_text(MessageEntity.CART, key, lang=lang)

        rows = [
            (label("item_total"), receipt.sub_total),
            (label("item_tax").format(slab=f"{receipt.item_tax_slab_percent:g}"), receipt.total_item_tax),
            (label("packaging_charges"), receipt.packaging_charge),
            (label("packaging_tax"), receipt.packaging_tax),
            (label("service_charge"), receipt.service_charge),
            (label("platform_fee"), receipt.platform_fee),
            (label("platform_fee_tax"), receipt.platform_fee_tax),
        ]
        if receipt.order_type == OrderType.DELIVERY:
            rows.append((label("delivery_charge"), receipt.delivery_charge))
        if receipt.tip:
            rows.append((label("delivery_tip"), receipt.tip))
        if receipt.discount:
            rows.append((label("discount"), -receipt.discount))
        rows.append((label("grand_total"), receipt.grand_total))
        return rows
