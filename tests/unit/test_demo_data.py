"""Unit tests for the seeded demo dataset"""

from datetime import date
from astha_engine.data.demo import COUNTRIES, USERS, generate_transactions, sample_bills, sample_debts
from astha_engine.domain.mandates import mandate_state
from astha_engine.domain.ranking import build_leaderboard


def test_generate_transactions_is_deterministic():
    first = generate_transactions(seed=7, months=2, today=date(2025, 9, 1))
    second = generate_transactions(seed=7, months=2, today=date(2025, 9, 1))
    assert first == second


def test_generate_transactions_covers_requested_periods():
    periods, transactions = generate_transactions(seed=7, months=3, today=date(2025, 9, 1))

    assert periods == ["2025-07", "2025-08", "2025-09"]
    for period in periods:
        month_txns = [t for t in transactions if t.timestamp.strftime("%Y-%m") == period]
        # baseline of one per country and channel plus at least 90 organic
        assert len(month_txns) >= len(COUNTRIES) * 2 + 90
        assert {t.country for t in month_txns} == set(COUNTRIES)
    assert all(t.amount > 0 for t in transactions)


def test_demo_leaderboard_conserves_totals():
    periods, transactions = generate_transactions(seed=20250905, months=1, today=date(2025, 9, 1))

    board = build_leaderboard(transactions, periods[0], "all", USERS)

    assert sum(r.total for r in board.rows) == board.period_total
    assert [r.rank for r in board.rows] == list(range(1, board.user_count + 1))


def test_sample_records():
    debts = sample_debts()
    bills = sample_bills()

    assert [d.id for d in debts] == ["d01", "d02", "d03", "d04", "d05"]
    assert len(bills) == 7
    assert mandate_state(debts[0]) == "active"
    assert mandate_state(debts[1]) == "off"
