from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

CATEGORIES = (
    "food",
    "transport",
    "entertainment",
    "shopping",
    "bills",
    "salary",
    "freelance",
    "other",
)

ANALYTICS_PERIODS = ("week", "month", "quarter", "year")
BUDGET_PERIODS = ("weekly", "monthly")


class InvalidConfiguration(ValueError):
    """A record cannot be evaluated (zero or negative limit/target)."""


@dataclass(frozen=True)
class Transaction:
    id: str
    description: str
    amount: float    # + for income, - for expense
    category: str
    date: datetime
    tags: tuple[str, ...] = ()
    notes: str = ""

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @property
    def is_expense(self) -> bool:
        return self.amount < 0


# A spending limit for one category over a rolling period
@dataclass(frozen=True)
class Budget:
    id: str
    category: str
    amount: float
    period: str  # "weekly" or "monthly"


@dataclass(frozen=True)
class Goal:
    id: str
    name: str
    target: float
    current: float = 0.0
    deadline: Optional[date] = None

    @property
    def reached(self) -> bool:
        return self.current >= self.target
