"""Time-bucketed income/expense series for the analytics charts."""
from datetime import datetime, timedelta
from typing import Iterable, NamedTuple

from tracker.aggregates import sum_expense, sum_income
from tracker.domain import Transaction
from tracker.periods import filter_by_range

SPAN_DAYS = {"week": 7, "month": 30, "quarter": 90, "year": 365}
LABEL_FORMAT = "%d %b"


class TrendSeries(NamedTuple):
    labels: tuple[str, ...]
    expense: tuple[float, ...]
    income: tuple[float, ...]
    starts: tuple[datetime, ...]
    interval: int


def bucket_interval(days: int) -> int:
    if days <= 30:
        return 1
    if days <= 90:
        return 7
    return days // 12


def bucket_starts(days: int, interval: int, now: datetime) -> tuple[datetime, ...]:
    """Midnight of every bucket start, oldest first.

    Offsets walk back from ``days`` to 0 in steps of ``interval``; both the
    oldest offset and today are included when they fall on a step.
    """
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return tuple(
        midnight - timedelta(days=offset)
        for offset in range(days, -1, -interval)
    )


def build_series(
    period: str, trans: Iterable[Transaction], now: datetime
) -> TrendSeries:
    if period not in SPAN_DAYS:
        raise ValueError(f"Unknown period {period!r}")

    days = SPAN_DAYS[period]
    interval = bucket_interval(days)
    width = timedelta(days=interval)
    records = tuple(trans)

    starts = bucket_starts(days, interval, now)
    expense, income = [], []
    for start in starts:
        bucket = filter_by_range(records, start, start + width)
        expense.append(sum_expense(bucket))
        income.append(sum_income(bucket))

    return TrendSeries(
        labels=tuple(s.strftime(LABEL_FORMAT) for s in starts),
        expense=tuple(expense),
        income=tuple(income),
        starts=starts,
        interval=interval,
    )


def series_range(series: TrendSeries) -> tuple[datetime, datetime]:
    """The ``[start, end)`` span covered by all buckets together."""
    return series.starts[0], series.starts[-1] + timedelta(days=series.interval)
