"""Monetary arithmetic.

Everything is computed on ``Decimal`` and rounded half away from zero.
Raw values are summed first and rounded once; values that are already
stored rounded (cached worked-hours amounts, invoice tax/total) are summed
as they are.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal('0')
HUNDRED = Decimal('100')
CENT = Decimal('0.01')
TENTH = Decimal('0.1')

CURRENCY_SYMBOLS = {
    'EUR': '€',
    'USD': '$',
    'GBP': '£',
    'JPY': '¥',
    'CHF': 'Fr',
    'CAD': 'C$',
    'AUD': 'A$',
}


def to_decimal(value: Number) -> Decimal:
    """Convert via ``str`` so floats keep their shortest repr (0.1 -> 0.1)."""
    if isinstance(value, Decimal):
        return value
    if value is None:
        return ZERO
    return Decimal(str(value))


def round2(value: Number) -> Decimal:
    # ROUND_HALF_UP on Decimal rounds ties away from zero
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def round1(value: Number) -> Decimal:
    return to_decimal(value).quantize(TENTH, rounding=ROUND_HALF_UP)


def sum_amounts(values: Iterable[Number]) -> Decimal:
    """Sum raw values, then round once."""
    return round2(sum((to_decimal(v) for v in values), ZERO))


def percentage(part: Number, total: Number) -> Decimal:
    """Share of ``part`` in ``total`` as a 1-decimal percentage, 0 for an empty total."""
    total = to_decimal(total)
    if total == 0:
        return round1(ZERO)
    return round1(to_decimal(part) / total * HUNDRED)


def calculate_tax(amount: Number, tax_rate: Number) -> Decimal:
    return round2(to_decimal(amount) * to_decimal(tax_rate) / HUNDRED)


def calculate_total(amount: Number, tax_amount: Number) -> Decimal:
    return round2(to_decimal(amount) + to_decimal(tax_amount))


def calculate_net_income(total_income: Number, total_expenses: Number, tax_amount: Number) -> Decimal:
    """Income minus expenses minus tax."""
    return round2(to_decimal(total_income) - to_decimal(total_expenses) - to_decimal(tax_amount))


def currency_symbol(currency: str) -> str:
    return CURRENCY_SYMBOLS.get((currency or '').upper(), currency)


def format_amount(value: Number, symbol: str = '€') -> str:
    """Italian style: ``€ 1.234,50``."""
    amount = round2(value)
    sign = '-' if amount < 0 else ''
    grouped = f'{abs(amount):,.2f}'
    grouped = grouped.replace(',', '_').replace('.', ',').replace('_', '.')
    return f'{sign}{symbol} {grouped}'
