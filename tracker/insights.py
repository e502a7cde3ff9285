from datetime import datetime
from typing import Callable, Iterable, NamedTuple, Optional

from tracker.aggregates import sum_expense, sum_income, top_categories
from tracker.domain import Transaction
from tracker.periods import filter_by_range, period_days, resolve_range

TOTAL_INCOME = "total_income"
TOTAL_EXPENSE = "total_expense"
NET = "net"
TOP_CATEGORY = "top_category"
AVERAGE_DAILY = "average_daily"
TRANSACTION_COUNT = "transaction_count"


class Insight(NamedTuple):
    kind: str
    value: float
    category: Optional[str] = None
    healthy: Optional[bool] = None


class PeriodView(NamedTuple):
    transactions: tuple[Transaction, ...]
    income: float
    expense: float
    days: int


def _total_income(view: PeriodView) -> Optional[Insight]:
    return Insight(TOTAL_INCOME, view.income)


def _total_expense(view: PeriodView) -> Optional[Insight]:
    return Insight(TOTAL_EXPENSE, view.expense)


def _net(view: PeriodView) -> Optional[Insight]:
    return Insight(NET, view.income - view.expense, healthy=view.income >= view.expense)


def _top_category(view: PeriodView) -> Optional[Insight]:
    top = next(top_categories(view.transactions, 1), None)
    if top is None:
        return None
    category, total = top
    return Insight(TOP_CATEGORY, total, category=category)


def _average_daily(view: PeriodView) -> Optional[Insight]:
    average = view.expense / view.days if view.days > 0 else 0.0
    return Insight(AVERAGE_DAILY, average)


def _transaction_count(view: PeriodView) -> Optional[Insight]:
    return Insight(TRANSACTION_COUNT, len(view.transactions))


FACTS: tuple[Callable[[PeriodView], Optional[Insight]], ...] = (
    _total_income,
    _total_expense,
    _net,
    _top_category,
    _average_daily,
    _transaction_count,
)


def period_view(period: str, trans: Iterable[Transaction], now: datetime) -> PeriodView:
    start, end = resolve_range(period, now)
    records = filter_by_range(trans, start, end)
    return PeriodView(
        transactions=records,
        income=sum_income(records),
        expense=sum_expense(records),
        days=period_days(start, now),
    )


def generate(period: str, trans: Iterable[Transaction], now: datetime) -> tuple[Insight, ...]:
    """Insight facts for the period, in display order.

    The top category fact is left out when the period has no expenses.
    """
    view = period_view(period, trans, now)
    facts = (fact(view) for fact in FACTS)
    return tuple(f for f in facts if f is not None)
