import math
from dataclasses import replace
from datetime import date, datetime, time
from typing import Any, NamedTuple, Optional

from tracker.domain import Goal, InvalidConfiguration
from tracker.functional import parse_amount
from tracker.periods import ONE_DAY


class GoalProgress(NamedTuple):
    goal: Goal
    ratio: float
    remaining: float      # signed; negative once the target is overshot
    days_left: Optional[int]
    reached: bool

    @property
    def remaining_shown(self) -> float:
        return max(self.remaining, 0.0)

    @property
    def percent_shown(self) -> float:
        return min(self.ratio * 100, 100.0)

    @property
    def deadline_passed(self) -> bool:
        return self.days_left is not None and self.days_left <= 0


def _deadline_instant(deadline: date) -> datetime:
    if isinstance(deadline, datetime):
        return deadline
    return datetime.combine(deadline, time())


def days_until(deadline: Optional[date], now: datetime) -> Optional[int]:
    if deadline is None:
        return None
    return math.ceil((_deadline_instant(deadline) - now) / ONE_DAY)


def evaluate_goal(goal: Goal, now: datetime) -> GoalProgress:
    if goal.target <= 0:
        raise InvalidConfiguration(
            f"Goal {goal.name!r} has non-positive target {goal.target}"
        )

    return GoalProgress(
        goal=goal,
        ratio=goal.current / goal.target,
        remaining=goal.target - goal.current,
        days_left=days_until(goal.deadline, now),
        reached=goal.reached,
    )


def contribute(goal: Goal, delta: Any) -> tuple[Goal, bool]:
    """Add ``delta`` to the goal's savings.

    Returns the updated goal and whether this contribution is the one that
    reached the target. Input that does not parse as a finite number leaves
    the goal untouched.
    """
    parsed = parse_amount(delta)
    if parsed.is_left():
        return goal, False

    updated = replace(goal, current=goal.current + parsed.get_or_else(0.0))
    return updated, updated.reached and not goal.reached
