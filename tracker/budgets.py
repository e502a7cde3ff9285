from datetime import datetime
from typing import Iterable, NamedTuple

from tracker.aggregates import sum_expense
from tracker.domain import Budget, InvalidConfiguration, Transaction
from tracker.periods import budget_range, by_category, filter_by_range

OK = "ok"
WARNING = "warning"
DANGER = "danger"
EXCEEDED = "exceeded"

TIERS = (OK, WARNING, DANGER, EXCEEDED)
ALERT_TIERS = (DANGER, EXCEEDED)

# lower bound of each tier, highest first
_THRESHOLDS = ((1.0, EXCEEDED), (0.90, DANGER), (0.75, WARNING))


class BudgetStatus(NamedTuple):
    budget: Budget
    spent: float
    limit: float
    ratio: float
    tier: str

    @property
    def alerting(self) -> bool:
        return self.tier in ALERT_TIERS

    @property
    def percent_shown(self) -> float:
        """Progress bar width, capped at 100."""
        return min(self.ratio * 100, 100.0)


def tier_for(ratio: float) -> str:
    for bound, tier in _THRESHOLDS:
        if ratio >= bound:
            return tier
    return OK


def evaluate_budget(
    budget: Budget, trans: Iterable[Transaction], now: datetime
) -> BudgetStatus:
    if budget.amount <= 0:
        raise InvalidConfiguration(
            f"Budget {budget.id} for {budget.category} has non-positive limit {budget.amount}"
        )

    start, end = budget_range(budget.period, now)
    in_category = filter(by_category(budget.category), trans)
    spent = sum_expense(filter_by_range(in_category, start, end))
    ratio = spent / budget.amount

    return BudgetStatus(
        budget=budget,
        spent=spent,
        limit=budget.amount,
        ratio=ratio,
        tier=tier_for(ratio),
    )


def evaluate_all(
    budgets: Iterable[Budget], trans: Iterable[Transaction], now: datetime
) -> tuple[BudgetStatus, ...]:
    records = tuple(trans)
    return tuple(evaluate_budget(b, records, now) for b in budgets)
