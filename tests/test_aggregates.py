from datetime import datetime, timedelta

from tracker.aggregates import (
    balance,
    by_category,
    expense_transactions,
    income_transactions,
    sum_expense,
    sum_income,
    summarize,
    top_categories,
)
from tracker.domain import Transaction

T0 = datetime(2025, 3, 10, 9, 0)


def make_tx(id, amount, category, date=T0):
    return Transaction(id=id, description=id, amount=amount, category=category, date=date)


def scenario():
    return (
        make_tx("t1", 5000, "salary"),
        make_tx("t2", -1200, "food"),
        make_tx("t3", -300, "food", T0 + timedelta(days=1)),
    )


def test_scenario_totals():
    trans = scenario()
    assert sum_income(trans) == 5000
    assert sum_expense(trans) == 1500
    assert balance(trans) == 3500
    assert by_category(trans) == {"food": 1500}


def test_balance_is_income_minus_expense():
    trans = scenario() + (
        make_tx("t4", -45.5, "transport"),
        make_tx("t5", 250, "freelance"),
        make_tx("t6", -80, "bills"),
    )
    assert balance(trans) == sum_income(trans) - sum_expense(trans)


def test_by_category_keys_and_total():
    trans = scenario() + (
        make_tx("t4", -40, "transport"),
        make_tx("t5", 300, "freelance"),
    )
    totals = by_category(trans)
    assert set(totals) == {t.category for t in trans if t.amount < 0}
    assert sum(totals.values()) == sum_expense(trans)
    assert "salary" not in totals


def test_income_and_expense_split():
    trans = scenario()
    assert [t.id for t in income_transactions(trans)] == ["t1"]
    assert [t.id for t in expense_transactions(trans)] == ["t2", "t3"]


def test_empty_log():
    assert sum_income(()) == 0
    assert sum_expense(()) == 0
    assert balance(()) == 0
    assert by_category(()) == {}
    assert list(top_categories((), 3)) == []
    assert summarize(()) == (0, 0, 0, 0)


def test_top_categories_order_and_ties():
    trans = (
        make_tx("t1", -100, "transport"),
        make_tx("t2", -300, "bills"),
        make_tx("t3", -100, "food"),
        make_tx("t4", 900, "salary"),
    )
    assert list(top_categories(trans, 3)) == [
        ("bills", 300),
        ("transport", 100),
        ("food", 100),
    ]
    assert list(top_categories(trans, 1)) == [("bills", 300)]
    assert len(list(top_categories(trans, 10))) == 3


def test_top_categories_accepts_generator_input():
    def stream():
        yield from scenario()

    assert list(top_categories(stream(), 1)) == [("food", 1500)]


def test_summarize():
    summary = summarize(scenario())
    assert summary.balance == 3500
    assert summary.income == 5000
    assert summary.expense == 1500
    assert summary.count == 3
