from datetime import datetime, timedelta
from typing import Union

from app.exceptions import InvalidPeriodTagError
from app.models import PeriodType


def _add_months(start: datetime, months: int) -> datetime:
    # only called with start on day 1, so the day never overflows
    index = start.month - 1 + months
    return start.replace(year=start.year + index // 12, month=index % 12 + 1)


def parse_period(period: Union[PeriodType, str]) -> PeriodType:
    if isinstance(period, PeriodType):
        return period
    if isinstance(period, str):
        try:
            return PeriodType(period.strip().upper())
        except ValueError:
            pass
    raise InvalidPeriodTagError(period)


def resolve_period(
    period: Union[PeriodType, str],
    reference: datetime,
) -> tuple[datetime, datetime]:
    """Return the half-open range ``[start, end)`` of the calendar bucket
    (day, month, quarter or year) that contains ``reference``."""
    period = parse_period(period)
    midnight = reference.replace(hour=0, minute=0, second=0, microsecond=0)

    if period == PeriodType.DAY:
        start = midnight
        return start, start + timedelta(days=1)

    if period == PeriodType.MONTH:
        start = midnight.replace(day=1)
        return start, _add_months(start, 1)

    if period == PeriodType.QUARTER:
        # Jan–Mar, Apr–Jun, Jul–Sep, Oct–Dec
        first_month = reference.month - (reference.month - 1) % 3
        start = midnight.replace(month=first_month, day=1)
        return start, _add_months(start, 3)

    start = midnight.replace(month=1, day=1)
    return start, start.replace(year=start.year + 1)
