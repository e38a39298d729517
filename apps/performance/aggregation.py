"""
Month-over-month trends and state averages for a district's latest record.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

ONE_PLACE = Decimal('0.1')

# Response key -> DistrictRecord field
TREND_FIELDS = {
    'households': 'total_households',
    'days': 'avg_days_per_household',
    'expenditure': 'total_expenditure',
    'works': 'works_completed',
}


def to_decimal(value, default=None):
    """Decimal from a number or numeric string; ``default`` for blanks."""
    if value is None or value == '':
        return default
    try:
        return Decimal(str(value))
    except (ValueError, TypeError, InvalidOperation):
        return default


def trend(current, previous):
    """Percentage change from ``previous`` to ``current`` with one decimal.

    Returns ``"0"`` when there is nothing to compare against: ``previous``
    missing, blank or zero.
    """
    prev = to_decimal(previous)
    if prev is None or prev == 0:
        return '0'

    curr = to_decimal(current, Decimal('0'))
    change = (curr - prev) / prev * 100
    return str(change.quantize(ONE_PLACE, rounding=ROUND_HALF_UP))


def compute_trends(current, previous):
    if previous is None:
        return {name: '0' for name in TREND_FIELDS}

    return {
        name: trend(getattr(current, field), getattr(previous, field))
        for name, field in TREND_FIELDS.items()
    }


def state_average(peers):
    """Mean ``avg_days_per_household`` across peers, one decimal; 0 if none."""
    if not peers:
        return 0

    total = sum(
        (to_decimal(peer.avg_days_per_household, Decimal('0')) for peer in peers),
        Decimal('0'),
    )
    mean = total / len(peers)
    return float(mean.quantize(ONE_PLACE, rounding=ROUND_HALF_UP))


def build_performance(current, previous, peers):
    last_updated = current.updated_at.isoformat() if current.updated_at else None
    return {
        'district': current.as_dict(),
        'trends': compute_trends(current, previous),
        'stateAverage': state_average(peers),
        'lastUpdated': last_updated,
    }
