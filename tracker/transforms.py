import logging
import math
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Callable, Iterable, Optional, Protocol, TypeVar

from tracker.domain import Budget, Goal, Transaction

R = TypeVar("R", Transaction, Budget, Goal)

TRANSACTIONS = "transactions"
BUDGETS = "budgets"
GOALS = "goals"

logger = logging.getLogger(__name__)


class Store(Protocol):
    def load_collection(self, name: str) -> tuple[dict, ...]: ...

    def save_collection(self, name: str, records: tuple[dict, ...]) -> bool: ...


def add_transaction(
    trans: tuple[Transaction, ...], t: Transaction
) -> tuple[Transaction, ...]:
    return trans + (t,)


def remove_by_id(records: tuple[R, ...], record_id: str) -> tuple[R, ...]:
    return tuple(r for r in records if r.id != record_id)


def upsert_budget(budgets: tuple[Budget, ...], b: Budget) -> tuple[Budget, ...]:
    """Append ``b`` unless a budget for its category and period exists.

    An existing budget keeps its id and only takes the new limit.
    """
    if not any(x.category == b.category and x.period == b.period for x in budgets):
        return budgets + (b,)
    return tuple(
        replace(x, amount=b.amount)
        if x.category == b.category and x.period == b.period
        else x
        for x in budgets
    )


def add_goal(goals: tuple[Goal, ...], g: Goal) -> tuple[Goal, ...]:
    return goals + (g,)


def replace_goal(goals: tuple[Goal, ...], g: Goal) -> tuple[Goal, ...]:
    return tuple(g if x.id == g.id else x for x in goals)


def _number(value: Any) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"non-finite number {value!r}")
    return number


def _parse_deadline(value: Any) -> Optional[date]:
    if not value:
        return None
    return date.fromisoformat(str(value)[:10])


def _parse_timestamp(value: Any) -> datetime:
    # aware timestamps (e.g. a trailing "Z") are converted to naive local time
    ts = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if ts.tzinfo is not None:
        ts = ts.astimezone().replace(tzinfo=None)
    return ts


def transaction_from_dict(d: dict) -> Transaction:
    return Transaction(
        id=str(d["id"]),
        description=d.get("description", ""),
        amount=_number(d["amount"]),
        category=d.get("category", "other"),
        date=_parse_timestamp(d["date"]),
        tags=tuple(d.get("tags") or ()),
        notes=d.get("notes", ""),
    )


def transaction_to_dict(t: Transaction) -> dict:
    return {
        "id": t.id,
        "description": t.description,
        "amount": t.amount,
        "category": t.category,
        "tags": list(t.tags),
        "notes": t.notes,
        "date": t.date.isoformat(),
    }


def budget_from_dict(d: dict) -> Budget:
    return Budget(
        id=str(d["id"]),
        category=d["category"],
        amount=_number(d["amount"]),
        period=d.get("period", "monthly"),
    )


def budget_to_dict(b: Budget) -> dict:
    return {"id": b.id, "category": b.category, "amount": b.amount, "period": b.period}


def goal_from_dict(d: dict) -> Goal:
    return Goal(
        id=str(d["id"]),
        name=d["name"],
        target=_number(d["target"]),
        current=_number(d.get("current") or 0),
        deadline=_parse_deadline(d.get("deadline")),
    )


def goal_to_dict(g: Goal) -> dict:
    return {
        "id": g.id,
        "name": g.name,
        "target": g.target,
        "current": g.current,
        "deadline": g.deadline.isoformat() if g.deadline else None,
    }


def load_collections(
    store: Store,
) -> tuple[
    tuple[Transaction, ...],
    tuple[Budget, ...],
    tuple[Goal, ...],
]:
    transactions = decode_records(TRANSACTIONS, store.load_collection(TRANSACTIONS), transaction_from_dict)
    budgets = decode_records(BUDGETS, store.load_collection(BUDGETS), budget_from_dict)
    goals = decode_records(GOALS, store.load_collection(GOALS), goal_from_dict)

    return transactions, budgets, goals


def decode_records(
    name: str, records: Iterable[Any], decode: Callable[[dict], R]
) -> tuple[R, ...]:
    """Decode each stored record, dropping the ones that cannot be read.

    Blank form fields were saved as ``null``, so a single record can be
    missing a number while the rest of the file is fine.
    """
    decoded = []
    for record in records:
        try:
            decoded.append(decode(record))
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("Dropping unreadable %s record %r: %s", name, record, exc)
    return tuple(decoded)
