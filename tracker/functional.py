import math
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterable, TypeVar

from tracker.domain import (
    BUDGET_PERIODS,
    CATEGORIES,
    Budget,
    Goal,
    Transaction,
)

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_some(self) -> bool:
        pass

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Some(f(self._value))

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_some(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        return Nothing()

    def get_or_else(self, default: T) -> T:
        return default

    def is_some(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    @abstractmethod
    def get_error(self) -> E:
        pass


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return self

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def _error(code: str, message: str, **details: Any) -> Left:
    return Left({"error": code, "message": message, **details})


def find_by_id(records: Iterable[T], record_id: str) -> Maybe[T]:
    for record in records:
        if record.id == record_id:
            return Some(record)
    return Nothing()


def parse_amount(value: Any) -> Either[dict, float]:
    """Parse user input into a finite float.

    Accepts numbers and numeric strings; booleans, blanks, NaN and
    infinities are rejected.
    """
    if isinstance(value, bool) or value is None:
        return _error("invalid_amount", f"Not a number: {value!r}", value=value)
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return _error("invalid_amount", f"Not a number: {value!r}", value=value)
    if not math.isfinite(number):
        return _error("invalid_amount", f"Amount must be finite, got {value!r}", value=value)
    return Right(number)


def validate_transaction(t: Transaction) -> Either[dict, Transaction]:
    if not t.description.strip():
        return _error("empty_description", "Transaction description is required")

    amount = parse_amount(t.amount)
    if amount.is_left():
        return amount

    if t.category not in CATEGORIES:
        return _error(
            "category_not_found",
            f"Category {t.category} does not exist",
            category=t.category,
        )

    return Right(t)


def validate_budget(b: Budget) -> Either[dict, Budget]:
    if b.category not in CATEGORIES:
        return _error(
            "category_not_found",
            f"Category {b.category} does not exist",
            category=b.category,
        )

    if b.period not in BUDGET_PERIODS:
        return _error(
            "invalid_period",
            f"Budget period must be one of {', '.join(BUDGET_PERIODS)}",
            period=b.period,
        )

    return parse_amount(b.amount).bind(
        lambda limit: Right(b) if limit > 0 else _error(
            "invalid_budget_amount",
            f"Budget limit for {b.category} must be positive",
            amount=limit,
        )
    )


def validate_goal(g: Goal) -> Either[dict, Goal]:
    if not g.name.strip():
        return _error("empty_name", "Goal name is required")

    current = parse_amount(g.current)
    if current.is_left():
        return current

    return parse_amount(g.target).bind(
        lambda target: Right(g) if target > 0 else _error(
            "invalid_goal_target",
            f"Target for goal {g.name} must be positive",
            target=target,
        )
    )
