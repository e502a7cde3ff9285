from datetime import date, datetime, timedelta

import pytest

from tracker.domain import Goal, InvalidConfiguration
from tracker.goals import contribute, days_until, evaluate_goal

NOW = datetime(2025, 3, 10, 12, 0)


def make_goal(target=10000, current=4000, deadline=None):
    return Goal(id="g1", name="Laptop", target=target, current=current, deadline=deadline)


def test_goal_progress():
    goal = make_goal(deadline=(NOW + timedelta(days=10)).date())
    progress = evaluate_goal(goal, NOW)
    assert progress.ratio == 0.4
    assert progress.remaining == 6000
    assert progress.days_left == 10
    assert progress.reached is False
    assert not progress.deadline_passed


def test_contribution_reaches_goal_once():
    goal = make_goal(deadline=(NOW + timedelta(days=10)).date())
    updated, reached_now = contribute(goal, 6000)
    assert updated.current == 10000
    assert reached_now is True
    assert evaluate_goal(updated, NOW).reached is True

    again, reached_again = contribute(updated, 500)
    assert again.current == 10500
    assert reached_again is False


def test_contribution_parses_numeric_strings():
    updated, _ = contribute(make_goal(), " 250.5 ")
    assert updated.current == 4250.5


@pytest.mark.parametrize("bad", ["abc", "", None, float("nan"), "inf", True])
def test_invalid_contribution_is_a_no_op(bad):
    goal = make_goal()
    updated, reached_now = contribute(goal, bad)
    assert updated is goal
    assert reached_now is False


def test_zero_contribution_leaves_current_unchanged():
    goal = make_goal()
    updated, reached_now = contribute(goal, 0)
    assert updated.current == goal.current
    assert reached_now is False


def test_overshoot_keeps_signed_remaining():
    progress = evaluate_goal(make_goal(current=12000), NOW)
    assert progress.reached is True
    assert progress.remaining == -2000
    assert progress.remaining_shown == 0
    assert progress.percent_shown == 100


def test_no_deadline():
    progress = evaluate_goal(make_goal(), NOW)
    assert progress.days_left is None
    assert not progress.deadline_passed


def test_passed_deadline():
    assert days_until(date(2025, 3, 1), NOW) == -9
    assert days_until(date(2025, 3, 10), NOW) == 0
    assert evaluate_goal(make_goal(deadline=date(2025, 3, 1)), NOW).deadline_passed


def test_non_positive_target_is_invalid_configuration():
    with pytest.raises(InvalidConfiguration):
        evaluate_goal(make_goal(target=0), NOW)
