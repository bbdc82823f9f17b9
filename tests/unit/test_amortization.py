"""Unit tests for snowball payoff projection"""

from datetime import date
from astha_engine.domain.amortization import payoff_month, project, round_half_up, snowball_order
from astha_engine.domain.models import Debt


def make_debt(debt_id: str, principal: float, apr: float, min_payment: float) -> Debt:
    return Debt(
        id=debt_id,
        kind="Personal Loan",
        lender="Test Bank",
        apr=apr,
        principal=principal,
        min_payment=min_payment,
        due_day=10,
    )


def test_project_empty_portfolio():
    """Test no debts produce no points"""
    assert project([], 5000, 36) == []


def test_project_single_debt_scenario():
    """Test 1000 at 0% with 200 minimum and 300 extra pays off in two months"""
    debt = make_debt("d1", 1000, 0, 200)

    points = project([debt], 300, 36, start=date(2025, 9, 15))

    assert [(p.month, p.total_balance) for p in points] == [(1, 500), (2, 0)]
    assert [p.month_label for p in points] == ["Sep 25", "Oct 25"]
    assert payoff_month(points) == 2


def test_project_respects_horizon():
    """Test output length never exceeds max_months"""
    debt = make_debt("d1", 100000, 0, 100)

    points = project([debt], 0, 36)

    assert len(points) == 36
    assert points[-1].total_balance == 100000 - 36 * 100
    assert payoff_month(points) is None
    assert project([debt], 0, 0) == []


def test_project_zero_apr_is_strictly_decreasing():
    debts = [make_debt("a", 3000, 0, 150), make_debt("b", 800, 0, 50), make_debt("c", 12000, 0, 400)]

    balances = [p.total_balance for p in project(debts, 250, 120)]

    assert all(later < earlier for earlier, later in zip(balances, balances[1:]))
    assert balances[-1] == 0


def test_project_accrues_interest_before_payment():
    """Test 12% APR adds 1% before the minimum is paid"""
    debt = make_debt("d1", 1000, 12, 100)

    points = project([debt], 0, 1)

    assert points[0].total_balance == 910  # 1000 * 1.01 - 100


def test_project_pays_minimum_after_budget_exhausted():
    """Test later debts still receive their minimum when the shared budget is spent"""
    first = make_debt("a", 1000, 0, 100)
    second = make_debt("b", 1500, 0, 100)

    points = project([second, first], 0, 1)

    # Budget 200 all goes to the smaller debt, the larger one still gets its 100
    assert points[0].total_balance == (1000 - 200) + (1500 - 100)


def test_project_order_frozen_at_start():
    """Test allocation order is not re-sorted when balances cross over"""
    fast_growing = make_debt("a", 1000, 600, 1)  # 50% per month
    flat = make_debt("b", 1001, 0, 100)

    points = project([flat, fast_growing], 0, 2)

    # Month 1: a 1500 - 101 = 1399, b 1001 - 100 = 901 (a is now the larger balance)
    # Month 2: a still first: round(2098.5) = 2099 - 101 = 1998, b 901 - 100 = 801
    # Re-sorting would have given 2898
    assert [p.total_balance for p in points] == [2300, 2799]


def test_project_does_not_mutate_input():
    debts = [make_debt("big", 5000, 20, 300), make_debt("small", 700, 10, 50)]
    snapshot = list(debts)

    project(debts, 1000, 36)

    assert debts == snapshot
    assert debts[0].principal == 5000


def test_project_is_repeatable():
    debts = [make_debt("a", 68500, 29, 4000), make_debt("b", 12500, 0, 2500)]
    start = date(2025, 1, 1)
    assert project(debts, 5000, 36, start) == project(debts, 5000, 36, start)


def test_project_total_balance_is_whole_units_with_settled_debt():
    """Test a zero float principal does not leak a float into the totals"""
    debts = [make_debt("settled", 0.0, 18, 0), make_debt("open", 500.0, 0, 100)]

    points = project(debts, 150, 36)

    assert [p.total_balance for p in points] == [250, 0]
    assert all(type(p.total_balance) is int for p in points)


def test_snowball_order_stable_for_equal_principal():
    debts = [make_debt("x", 500, 0, 10), make_debt("y", 100, 0, 10), make_debt("z", 500, 0, 10)]
    assert [d.id for d in snowball_order(debts)] == ["y", "x", "z"]


def test_round_half_up():
    assert round_half_up(2098.5) == 2099
    assert round_half_up(2.4) == 2
    assert round_half_up(0.5) == 1
