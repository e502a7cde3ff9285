import logging
from datetime import date, datetime
from typing import Callable, Iterable, Optional, Union
from uuid import uuid4

from tracker.aggregates import Summary, by_category, summarize
from tracker.budgets import BudgetStatus, evaluate_budget
from tracker.domain import Budget, Goal, InvalidConfiguration, Transaction
from tracker.events import (
    BUDGET_ALERT,
    GOAL_REACHED,
    TRANSACTION_ADDED,
    EventBus,
    log_event_handler,
)
from tracker.functional import (
    Either,
    Maybe,
    Right,
    find_by_id,
    parse_amount,
    validate_budget,
    validate_goal,
    validate_transaction,
)
from tracker.goals import GoalProgress, contribute, evaluate_goal
from tracker.insights import Insight, generate
from tracker.periods import by_kind
from tracker.transforms import (
    BUDGETS,
    GOALS,
    TRANSACTIONS,
    Store,
    add_goal,
    add_transaction,
    budget_to_dict,
    goal_to_dict,
    load_collections,
    remove_by_id,
    replace_goal,
    transaction_to_dict,
    upsert_budget,
)
from tracker.trends import TrendSeries, build_series

logger = logging.getLogger(__name__)


def parse_tags(tags: Union[str, Iterable[str], None]) -> tuple[str, ...]:
    if not tags:
        return ()
    parts = tags.split(",") if isinstance(tags, str) else tags
    return tuple(p.strip() for p in parts if p and p.strip())


def new_id() -> str:
    return str(uuid4())


class FinanceTracker:
    """Owns the transaction, budget and goal collections.

    Every mutation validates its input, replaces one collection and saves it
    whole through the store. Read methods hand the current collections and
    the clock's ``now`` to the pure computation modules.
    """

    def __init__(
        self,
        store: Store,
        bus: Optional[EventBus] = None,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = new_id,
    ):
        self.store = store
        self.clock = clock
        self.id_factory = id_factory
        self.bus = bus or EventBus(clock)
        if bus is None:
            for name in (BUDGET_ALERT, GOAL_REACHED):
                self.bus.subscribe(name, log_event_handler)

        self.transactions, self.budgets, self.goals = load_collections(store)
        self.last_alerts: tuple[BudgetStatus, ...] = ()
        # collections whose last save failed
        self.unsaved: set[str] = set()
        logger.info(
            "Loaded %d transactions, %d budgets, %d goals",
            len(self.transactions), len(self.budgets), len(self.goals),
        )

    # ---- transactions

    def add_transaction(
        self,
        description: str,
        amount,
        category: str,
        tags: Union[str, Iterable[str], None] = None,
        notes: str = "",
    ) -> Either[dict, Transaction]:
        result = parse_amount(amount).map(
            lambda value: Transaction(
                id=self.id_factory(),
                description=description.strip(),
                amount=value,
                category=category,
                date=self.clock(),
                tags=parse_tags(tags),
                notes=notes.strip(),
            )
        ).bind(validate_transaction)

        if result.is_left():
            logger.info("Rejected transaction: %s", result.get_error()["message"])
            return result

        t = result.get_or_else(None)
        self.transactions = add_transaction(self.transactions, t)
        self._save_transactions()
        self.bus.publish(TRANSACTION_ADDED, transaction_to_dict(t))
        self.last_alerts = self.check_budget_alerts()
        return result

    def remove_transaction(self, transaction_id: str) -> None:
        remaining = remove_by_id(self.transactions, transaction_id)
        if len(remaining) == len(self.transactions):
            return
        self.transactions = remaining
        self._save_transactions()

    def transactions_for(self, kind: str = "all") -> tuple[Transaction, ...]:
        """Transactions matching the list filter, newest first."""
        return tuple(reversed(tuple(filter(by_kind(kind), self.transactions))))

    def summary(self) -> Summary:
        return summarize(self.transactions)

    def spending_by_category(self) -> dict[str, float]:
        return by_category(self.transactions)

    # ---- budgets

    def set_budget(self, category: str, amount, period: str) -> Either[dict, Budget]:
        result = parse_amount(amount).map(
            lambda value: Budget(id=self.id_factory(), category=category, amount=value, period=period)
        ).bind(validate_budget)

        if result.is_left():
            logger.info("Rejected budget: %s", result.get_error()["message"])
            return result

        b = result.get_or_else(None)
        self.budgets = upsert_budget(self.budgets, b)
        self._save_budgets()
        stored = next(x for x in self.budgets if x.category == b.category and x.period == b.period)
        return Right(stored)

    def remove_budget(self, budget_id: str) -> None:
        remaining = remove_by_id(self.budgets, budget_id)
        if len(remaining) == len(self.budgets):
            return
        self.budgets = remaining
        self._save_budgets()

    def budget_statuses(self) -> tuple[BudgetStatus, ...]:
        now = self.clock()
        statuses = []
        for b in self.budgets:
            try:
                statuses.append(evaluate_budget(b, self.transactions, now))
            except InvalidConfiguration as exc:
                logger.warning("Skipping budget: %s", exc)
        return tuple(statuses)

    def check_budget_alerts(self) -> tuple[BudgetStatus, ...]:
        """Publish one alert per budget in the danger or exceeded tier.

        Runs after every added transaction, so a budget that stays over its
        limit alerts again each time.
        """
        alerting = tuple(s for s in self.budget_statuses() if s.alerting)
        for status in alerting:
            self.bus.publish(BUDGET_ALERT, {
                "budget_id": status.budget.id,
                "category": status.budget.category,
                "period": status.budget.period,
                "spent": status.spent,
                "limit": status.limit,
                "ratio": status.ratio,
                "tier": status.tier,
            })
        return alerting

    # ---- goals

    def add_goal(
        self, name: str, target, current=0, deadline: Optional[date] = None
    ) -> Either[dict, Goal]:
        result = parse_amount(target).bind(
            lambda target_value: parse_amount(current or 0).map(
                lambda current_value: Goal(
                    id=self.id_factory(),
                    name=name.strip(),
                    target=target_value,
                    current=current_value,
                    deadline=deadline,
                )
            )
        ).bind(validate_goal)

        if result.is_left():
            logger.info("Rejected goal: %s", result.get_error()["message"])
            return result

        self.goals = add_goal(self.goals, result.get_or_else(None))
        self._save_goals()
        return result

    def contribute_to_goal(self, goal_id: str, amount) -> Maybe[Goal]:
        """Add ``amount`` to the goal's savings.

        Returns ``Nothing`` for an unknown id. An unusable amount leaves the
        goal untouched and unsaved.
        """
        return find_by_id(self.goals, goal_id).map(
            lambda goal: self._apply_contribution(goal, amount)
        )

    def _apply_contribution(self, goal: Goal, amount) -> Goal:
        updated, reached_now = contribute(goal, amount)
        if updated is goal:
            logger.info("Ignored contribution %r to goal %s", amount, goal.name)
            return goal

        self.goals = replace_goal(self.goals, updated)
        self._save_goals()
        if reached_now:
            self.bus.publish(GOAL_REACHED, goal_to_dict(updated))
        return updated

    def remove_goal(self, goal_id: str) -> None:
        remaining = remove_by_id(self.goals, goal_id)
        if len(remaining) == len(self.goals):
            return
        self.goals = remaining
        self._save_goals()

    def goal_progress(self) -> tuple[GoalProgress, ...]:
        now = self.clock()
        progress = []
        for g in self.goals:
            try:
                progress.append(evaluate_goal(g, now))
            except InvalidConfiguration as exc:
                logger.warning("Skipping goal: %s", exc)
        return tuple(progress)

    # ---- analytics

    def trend(self, period: str) -> TrendSeries:
        return build_series(period, self.transactions, self.clock())

    def insights(self, period: str) -> tuple[Insight, ...]:
        return generate(period, self.transactions, self.clock())

    # ---- persistence

    def _save(self, name: str, records: tuple[dict, ...]) -> bool:
        saved = self.store.save_collection(name, records)
        if saved:
            self.unsaved.discard(name)
        else:
            self.unsaved.add(name)
            logger.error("Changes to %s are kept in memory only; the save failed", name)
        return saved

    def _save_transactions(self) -> bool:
        return self._save(TRANSACTIONS, tuple(map(transaction_to_dict, self.transactions)))

    def _save_budgets(self) -> bool:
        return self._save(BUDGETS, tuple(map(budget_to_dict, self.budgets)))

    def _save_goals(self) -> bool:
        return self._save(GOALS, tuple(map(goal_to_dict, self.goals)))
