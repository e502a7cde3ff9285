from collections import defaultdict
from functools import reduce
from typing import Iterable, Iterator, NamedTuple

from tracker.domain import Transaction


class Summary(NamedTuple):
    balance: float
    income: float
    expense: float
    count: int


def income_transactions(trans: Iterable[Transaction]) -> tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.amount > 0, trans))


def expense_transactions(trans: Iterable[Transaction]) -> tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.amount < 0, trans))


def sum_income(trans: Iterable[Transaction]) -> float:
    return sum((t.amount for t in income_transactions(trans)), 0.0)


def sum_expense(trans: Iterable[Transaction]) -> float:
    """Total spending as a non-negative magnitude."""
    return sum((-t.amount for t in expense_transactions(trans)), 0.0)


def balance(trans: Iterable[Transaction]) -> float:
    return reduce(lambda acc, t: acc + t.amount, trans, 0.0)


def by_category(trans: Iterable[Transaction]) -> dict[str, float]:
    """Expense magnitude per category, keyed in first-encountered order."""
    totals: dict[str, float] = defaultdict(float)
    for t in expense_transactions(trans):
        totals[t.category] += -t.amount
    return dict(totals)


def top_categories(trans: Iterable[Transaction], k: int) -> Iterator[tuple[str, float]]:
    # sorted() is stable, so equal totals keep first-encountered order
    ordered = sorted(by_category(trans).items(), key=lambda item: item[1], reverse=True)
    for category, total in ordered[: max(0, k)]:
        yield category, total


def summarize(trans: Iterable[Transaction]) -> Summary:
    records = tuple(trans)
    return Summary(
        balance=balance(records),
        income=sum_income(records),
        expense=sum_expense(records),
        count=len(records),
    )
