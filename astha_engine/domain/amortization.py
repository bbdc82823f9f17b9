"""Debt payoff projection using a fixed-order snowball allocation"""

import math
from datetime import date
from typing import List, Optional, Sequence
from astha_engine.domain.models import Debt, ProjectionPoint
from astha_engine.utils.date_utils import add_months, month_label

DEFAULT_HORIZON_MONTHS = 36


def round_half_up(value: float) -> int:
    """Round to the nearest whole unit, halves away from negative infinity"""
    return math.floor(value + 0.5)


def snowball_order(debts: Sequence[Debt]) -> List[Debt]:
    """Smallest principal first; equal principals keep their input order"""
    return sorted(debts, key=lambda d: d.principal)


def project(
    debts: Sequence[Debt],
    extra_monthly_budget: float,
    max_months: int = DEFAULT_HORIZON_MONTHS,
    start: date | None = None,
) -> List[ProjectionPoint]:
    """
    Simulate month-by-month payoff of a debt portfolio.

    Allocation rules:
    - Order is fixed once at the start (ascending principal) and never re-sorted,
      even when balances cross over later
    - Every month gets a fresh budget: sum of minimum payments + extra budget
    - Each debt accrues a month of interest, then receives at least its minimum,
      up to whatever budget is left, capped at its balance
    - The budget may go negative; minimums are still paid

    Stops after the first month whose total balance reaches zero, or after
    `max_months` points. Caller records are never modified.

    Example:
        principal 1000, apr 0, min 200, extra 300
        month 1: budget 500, pays 500 → 500
        month 2: budget 500, pays 500 → 0
    """
    if not debts or max_months <= 0:
        return []

    start = start or date.today()
    queue = snowball_order(debts)
    # Settled debts are skipped below, so they never pass through rounding
    balances = [d.principal if d.principal > 0 else 0 for d in queue]
    base_budget = sum(d.min_payment for d in queue) + extra_monthly_budget

    points: List[ProjectionPoint] = []
    for month_index in range(max_months):
        month_budget = base_budget
        for i, debt in enumerate(queue):
            if balances[i] <= 0:
                continue

            monthly_rate = debt.apr / 12 / 100
            balance = max(0, round_half_up(balances[i] * (1 + monthly_rate)))

            # Minimum is always paid, even once earlier debts used up the budget
            allotment = min(month_budget, balance) if month_budget > 0 else debt.min_payment
            payment = min(balance, max(debt.min_payment, allotment))

            balances[i] = balance - payment
            month_budget -= payment

        total_balance = sum(balances)
        points.append(
            ProjectionPoint(
                month=month_index + 1,
                month_label=month_label(add_months(start, month_index)),
                total_balance=total_balance,
            )
        )
        if total_balance <= 0:
            break

    return points


def payoff_month(points: Sequence[ProjectionPoint]) -> Optional[int]:
    """1-based month in which the portfolio is fully repaid, None if beyond the horizon"""
    for point in points:
        if point.total_balance <= 0:
            return point.month
    return None
