from datetime import datetime

import pytest

from tracker.domain import Budget, Goal, Transaction
from tracker.functional import (
    Left,
    Nothing,
    Right,
    Some,
    find_by_id,
    parse_amount,
    validate_budget,
    validate_goal,
    validate_transaction,
)

NOW = datetime(2025, 3, 10, 12, 0)


def make_tx(**overrides):
    fields = dict(id="t1", description="Groceries", amount=-100.0, category="food", date=NOW)
    fields.update(overrides)
    return Transaction(**fields)


def test_maybe_map():
    assert Some(5).map(lambda x: x * 2).get_or_else(0) == 10
    assert Nothing().map(lambda x: x * 2).get_or_else(0) == 0
    assert Nothing().map(lambda x: x * 2).is_none()


def test_either_map_and_bind():
    assert Right(5).map(lambda x: x * 2).get_or_else(0) == 10

    left = Left("error").map(lambda x: x * 2)
    assert left.is_left()
    assert left.get_or_else(0) == 0
    assert left.get_error() == "error"

    with pytest.raises(ValueError):
        Right(1).get_error()


def test_find_by_id():
    trans = (make_tx(id="a"), make_tx(id="b"))
    assert find_by_id(trans, "b").get_or_else(None).id == "b"
    assert find_by_id(trans, "missing").is_none()


@pytest.mark.parametrize("value, expected", [
    (12, 12.0),
    (-3.5, -3.5),
    ("42", 42.0),
    (" -7.25 ", -7.25),
    (0, 0.0),
])
def test_parse_amount_accepts_numbers(value, expected):
    assert parse_amount(value) == Right(expected)


@pytest.mark.parametrize("value", ["abc", "", None, "nan", float("inf"), "-inf", True, [1]])
def test_parse_amount_rejects_non_numbers(value):
    result = parse_amount(value)
    assert result.is_left()
    assert result.get_error()["error"] == "invalid_amount"


def test_validate_transaction():
    assert validate_transaction(make_tx()).is_right()

    blank = validate_transaction(make_tx(description="   "))
    assert blank.get_error()["error"] == "empty_description"

    unknown = validate_transaction(make_tx(category="crypto"))
    assert unknown.get_error()["error"] == "category_not_found"
    assert "crypto" in unknown.get_error()["message"]

    nan = validate_transaction(make_tx(amount=float("nan")))
    assert nan.get_error()["error"] == "invalid_amount"


def test_validate_budget():
    assert validate_budget(Budget("b1", "food", 500, "monthly")).is_right()
    assert validate_budget(Budget("b1", "food", 0, "monthly")).get_error()["error"] == "invalid_budget_amount"
    assert validate_budget(Budget("b1", "food", -5, "weekly")).get_error()["error"] == "invalid_budget_amount"
    assert validate_budget(Budget("b1", "food", 500, "yearly")).get_error()["error"] == "invalid_period"
    assert validate_budget(Budget("b1", "pets", 500, "weekly")).get_error()["error"] == "category_not_found"


def test_validate_goal():
    assert validate_goal(Goal("g1", "Trip", 1000)).is_right()
    assert validate_goal(Goal("g1", "", 1000)).get_error()["error"] == "empty_name"
    assert validate_goal(Goal("g1", "Trip", 0)).get_error()["error"] == "invalid_goal_target"
    assert validate_goal(Goal("g1", "Trip", 1000, float("nan"))).get_error()["error"] == "invalid_amount"
