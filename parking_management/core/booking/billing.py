from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from parking_management.core.exceptions import ConfigurationError, ValidationError

MILLISECONDS_PER_HOUR = Decimal(3_600_000)
CENT = Decimal('0.01')


def _to_rate(hourly_rate) -> Decimal:
    try:
        rate = Decimal(str(hourly_rate))
    except (InvalidOperation, ValueError, TypeError):
        raise ConfigurationError(f'Hourly rate {hourly_rate!r} is not a number')
    if not rate.is_finite() or rate < 0:
        raise ConfigurationError(f'Hourly rate must be a non-negative finite number, got {hourly_rate!r}')
    return rate


def calculate_amount(hourly_rate, start: datetime, end: datetime) -> Decimal:
    """Bill the exact fractional hours between ``start`` and ``end``.

    90 minutes at 10.00/hour costs 15.00. The result is rounded half-up to
    the cent.
    """
    rate = _to_rate(hourly_rate)
    elapsed = end - start
    if elapsed <= timedelta(0):
        raise ValidationError('Billing period must be longer than zero')

    milliseconds = Decimal(elapsed // timedelta(milliseconds=1))
    hours = milliseconds / MILLISECONDS_PER_HOUR
    return (rate * hours).quantize(CENT, rounding=ROUND_HALF_UP)
