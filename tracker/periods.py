"""Named periods resolved into concrete date ranges.

Ranges are half-open, ``[start, end)``. The end of every resolved range is
the first instant after ``now`` so a transaction stamped exactly ``now`` is
inside the period it was just added to.

Calendar months and years are subtracted with ``relativedelta``, which clamps
the day of month: one month before March 31 is February 28 (29 in leap
years), one year before February 29 is February 28.
"""
import math
from datetime import datetime, timedelta
from typing import Callable, Iterable

from dateutil.relativedelta import relativedelta

from tracker.domain import Transaction

ONE_DAY = timedelta(days=1)
RESOLUTION = timedelta(microseconds=1)

_LOOKBACK = {
    "week": relativedelta(days=7),
    "month": relativedelta(months=1),
    "quarter": relativedelta(months=3),
    "year": relativedelta(years=1),
    "weekly": relativedelta(days=7),
    "monthly": relativedelta(months=1),
}


def _range(period: str, now: datetime, allowed: Iterable[str]) -> tuple[datetime, datetime]:
    if period not in allowed:
        raise ValueError(f"Unknown period {period!r}")
    return now - _LOOKBACK[period], now + RESOLUTION


def resolve_range(period: str, now: datetime) -> tuple[datetime, datetime]:
    """Range for an analytics period: week, month, quarter or year."""
    return _range(period, now, ("week", "month", "quarter", "year"))


def budget_range(period: str, now: datetime) -> tuple[datetime, datetime]:
    """Range for a budget period: weekly or monthly."""
    return _range(period, now, ("weekly", "monthly"))


def period_days(start: datetime, now: datetime) -> int:
    return max(0, math.ceil((now - start) / ONE_DAY))


def by_category(category: str) -> Callable[[Transaction], bool]:
    def _filter(t: Transaction) -> bool:
        return t.category == category

    return _filter


def by_date_range(start: datetime, end: datetime) -> Callable[[Transaction], bool]:
    def _filter(t: Transaction) -> bool:
        return start <= t.date < end

    return _filter


def by_kind(kind: str) -> Callable[[Transaction], bool]:
    # kind mirrors the transaction list filter buttons: all / income / expense
    if kind == "income":
        return lambda t: t.amount > 0
    if kind == "expense":
        return lambda t: t.amount < 0
    if kind == "all":
        return lambda t: True
    raise ValueError(f"Unknown transaction filter {kind!r}")


def filter_by_range(
    records: Iterable[Transaction], start: datetime, end: datetime
) -> tuple[Transaction, ...]:
    return tuple(filter(by_date_range(start, end), records))
