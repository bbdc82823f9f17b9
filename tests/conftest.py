"""Pytest fixtures for testing"""

import pytest
from datetime import datetime
from fastapi.testclient import TestClient
from astha_engine.api.dependencies import SpendDataset
from astha_engine.api.main import create_app
from astha_engine.data.demo import sample_bills, sample_debts
from astha_engine.domain.models import Transaction, User
from astha_engine.domain.portfolio import FinanceBook


@pytest.fixture
def users() -> list[User]:
    return [
        User("u1", "Shonar Cheel", "Affluent"),
        User("u2", "Silver Lynx", "Mass"),
        User("u3", "Megh Bagh", "Affluent"),
        User("u4", "Crimson Orca", "HNI"),
    ]


@pytest.fixture
def september_transactions() -> list[Transaction]:
    """
    September 2025 activity plus one August transaction.

    All channels: u1 1200 (POS 700, top GB), u2 500, u3 500 (u2 seen first).
    Period total 2200.
    """
    return [
        Transaction("u1", "SA", "POS", 600, datetime(2025, 9, 2, 10, 30)),
        Transaction("u2", "US", "E-COM", 300, datetime(2025, 9, 3, 12, 0)),
        Transaction("u1", "GB", "E-COM", 500, datetime(2025, 9, 4, 9, 15)),
        Transaction("u3", "IN", "POS", 300, datetime(2025, 9, 5, 18, 45)),
        Transaction("u2", "GB", "POS", 200, datetime(2025, 9, 6, 8, 0)),
        Transaction("u1", "GB", "POS", 100, datetime(2025, 9, 7, 20, 10)),
        Transaction("u3", "IN", "E-COM", 200, datetime(2025, 9, 8, 11, 5)),
        Transaction("u4", "US", "POS", 999, datetime(2025, 8, 30, 16, 0)),
    ]


@pytest.fixture
def book() -> FinanceBook:
    """Demo debts and bills"""
    return FinanceBook(debts=sample_debts(), bills=sample_bills())


@pytest.fixture
def client(users: list[User], september_transactions: list[Transaction], book: FinanceBook) -> TestClient:
    """Create FastAPI test client with a fixed dataset and the demo book"""
    dataset = SpendDataset(
        periods=["2025-08", "2025-09"],
        transactions=september_transactions,
        users=users,
    )
    app = create_app(dataset=dataset, book=book)
    return TestClient(app)
