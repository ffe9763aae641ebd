"""
Billing arithmetic shared by appointments, service assignments and payments.

One policy is applied everywhere: the discount comes off the subtotal first
and tax is charged on what remains::

    taxable     = subtotal - discount
    tax_amount  = taxable * combined_rate / 100
    grand_total = subtotal - discount + tax_amount
    balance     = grand_total - paying_amount

The combined rate is the SUM of every active rate supplied.  Money is
quantized to cents with ROUND_HALF_UP; rates keep four places.  Signs are not
validated here, a negative discount or paying amount is simply carried
through the arithmetic.  A negative balance means the patient overpaid.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union

Number = Union[Decimal, int, str]

CENT = Decimal('0.01')
RATE_PLACES = Decimal('0.0001')
ZERO = Decimal('0.00')
HUNDRED = Decimal('100')


def to_decimal(value: Number | None) -> Decimal:
    if value is None:
        return Decimal('0')
    if isinstance(value, float):
        # str() keeps the literal the caller typed instead of the binary approximation
        value = str(value)
    return Decimal(value)


def to_money(value: Number | None) -> Decimal:
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def combined_tax_rate(rates: Iterable[Number]) -> Decimal:
    """Add up active tax percentages; no rates means a 0% rate."""
    total = sum((to_decimal(r) for r in rates), Decimal('0'))
    return total.quantize(RATE_PLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class BillingResult:
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    discount: Decimal
    grand_total: Decimal
    paying_amount: Decimal
    balance: Decimal

    def as_dict(self) -> dict:
        return {
            'subtotal': format_money(self.subtotal),
            'taxRate': str(self.tax_rate),
            'taxAmount': format_money(self.tax_amount),
            'discount': format_money(self.discount),
            'grandTotal': format_money(self.grand_total),
            'payingAmount': format_money(self.paying_amount),
            'balance': format_money(self.balance),
        }


def compute_billing(
    line_item_costs: Iterable[Number],
    discount: Number = ZERO,
    tax_rates: Iterable[Number] = (),
    paying_amount: Number = ZERO,
) -> BillingResult:
    subtotal = to_money(sum((to_decimal(c) for c in line_item_costs), Decimal('0')))
    discount = to_money(discount)
    paying_amount = to_money(paying_amount)
    rate = combined_tax_rate(tax_rates)

    taxable = subtotal - discount
    tax_amount = to_money(taxable * rate / HUNDRED)
    grand_total = subtotal - discount + tax_amount
    balance = grand_total - paying_amount

    return BillingResult(
        subtotal=subtotal,
        tax_rate=rate,
        tax_amount=tax_amount,
        discount=discount,
        grand_total=grand_total,
        paying_amount=paying_amount,
        balance=balance,
    )


def format_money(value: Number | None) -> str:
    """Render a money value for JSON responses without going through float."""
    return str(to_money(value))
