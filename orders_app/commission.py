"""
Commission split between the platform and the agent who fulfils an order.

The platform share is rounded to cents; the agent share is whatever is left of the amount, so
the two parts always add up to the order amount exactly.
"""
from collections import namedtuple
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from .exceptions import InvalidAmount, InvalidCommissionRate

CENT = Decimal('0.01')
HUNDRED = Decimal('100')

CommissionSplit = namedtuple('CommissionSplit', ['platform_commission', 'agent_earnings'])


def _to_decimal(value):
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError('Booleans are not numbers here.')
    return Decimal(str(value).strip())


def parse_commission_rate(rate):
    try:
        rate = _to_decimal(rate)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidCommissionRate()
    if not rate.is_finite() or rate < 0 or rate > HUNDRED:
        raise InvalidCommissionRate()
    return rate


def validate_commission_rate(rate):
    """
    Parses `rate` and checks that it is a percentage between 0 and 100 (inclusive).

    Returns:
        Decimal: the rate with two fractional digits, as it is stored.

    Raises:
        InvalidCommissionRate: the rate is not a number or lies outside [0, 100].
    """
    return parse_commission_rate(rate).quantize(CENT, rounding=ROUND_HALF_UP)


def validate_amount(amount):
    """
    Parses `amount` and checks that it is strictly positive.

    Raises:
        InvalidAmount: the amount is not a number or is zero or negative.
    """
    try:
        amount = _to_decimal(amount)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmount()
    if not amount.is_finite() or amount <= 0:
        raise InvalidAmount()
    return amount


def compute_split(amount, rate_percent):
    """
    Splits an order amount into the platform commission and the agent earnings.

    Args:
        amount: The order amount (Decimal, int, float or numeric string), must be > 0.
        rate_percent: The platform commission percentage, must be within [0, 100].

    Returns:
        CommissionSplit: `platform_commission = round(amount * rate / 100, 2)` and
        `agent_earnings = amount - platform_commission`.

    Example:
        >>> compute_split(Decimal('100.00'), Decimal('20'))
        CommissionSplit(platform_commission=Decimal('20.00'), agent_earnings=Decimal('80.00'))
    """
    amount = validate_amount(amount)
    rate = parse_commission_rate(rate_percent)

    platform_commission = (amount * rate / HUNDRED).quantize(CENT, rounding=ROUND_HALF_UP)
    agent_earnings = amount - platform_commission
    return CommissionSplit(platform_commission, agent_earnings)
