"""
Money helpers for checkout totals.

Amounts are Decimals rounded half-up to the currency's minor unit at the
moment they are computed, so persisted totals always add up exactly.
"""
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Optional

CENT = Decimal('0.01')
ZERO = Decimal('0.00')
# Largest amount a Numeric(10, 2) money column holds
MAX_MONEY = Decimal('99999999.99')


@dataclass(frozen=True)
class OrderTotals:
    """Derived financial totals of an order."""
    total_amount: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    final_amount: Decimal

    def to_dict(self):
        return {
            'total_amount': str(self.total_amount),
            'discount_amount': str(self.discount_amount),
            'tax_amount': str(self.tax_amount),
            'final_amount': str(self.final_amount),
        }


def to_money(value) -> Decimal:
    """Round a number half-up to cents."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_discount(value) -> Decimal:
    """
    Parse a client supplied discount.

    Missing, blank, non-numeric or negative values count as no discount.
    Amounts above MAX_MONEY are clamped to it; the subtotal cap applied
    later makes every such value equivalent.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    if amount.is_nan() or amount < 0:
        return ZERO
    return to_money(min(amount, MAX_MONEY))


def line_subtotal(unit_price, quantity: int) -> Decimal:
    return to_money(Decimal(str(unit_price)) * quantity)


def cap_discount(discount: Optional[Decimal], subtotal: Decimal) -> Decimal:
    """Discount is never negative and never exceeds the subtotal."""
    discount = discount if discount is not None else ZERO
    return min(max(to_money(discount), ZERO), to_money(subtotal))


def compute_totals(subtotal, tax_rate, discount=None) -> OrderTotals:
    """
    Discount-aware totals.

    discount = min(discount, subtotal); tax = (subtotal - discount) * rate;
    final = (subtotal - discount) + tax.
    """
    subtotal = to_money(subtotal)
    applied_discount = cap_discount(discount, subtotal)
    taxable = subtotal - applied_discount
    tax = to_money(taxable * Decimal(str(tax_rate)))
    return OrderTotals(
        total_amount=subtotal,
        discount_amount=applied_discount,
        tax_amount=tax,
        final_amount=to_money(taxable + tax),
    )


def totals_from_lines(subtotals: Iterable[Decimal], tax_rate) -> OrderTotals:
    """Totals re-derived from persisted line subtotals, without a discount term."""
    total = sum((to_money(s) for s in subtotals), ZERO)
    return compute_totals(total, tax_rate, discount=ZERO)
