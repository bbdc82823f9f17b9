"""Dependency injection for FastAPI endpoints"""

from dataclasses import dataclass
from typing import List
from fastapi import Request
from astha_engine.domain.models import Transaction, User
from astha_engine.domain.portfolio import BookStore


@dataclass
class SpendDataset:
    """Transactions behind the leaderboard and the periods they cover"""

    periods: List[str]
    transactions: List[Transaction]
    users: List[User]


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_dataset(request: Request) -> SpendDataset:
    """Provide the spend dataset loaded at startup"""
    return request.app.state.dataset


def get_book_store(request: Request) -> BookStore:
    """Provide the debts/bills store owned by this application"""
    return request.app.state.book_store
