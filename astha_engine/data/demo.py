"""Seeded demo dataset: cardholders, cross-border transactions, debts and bills"""

import random
from datetime import date, datetime
from typing import List, Tuple
from astha_engine.domain.models import (
    CHANNEL_ECOM,
    CHANNEL_POS,
    Bill,
    Debt,
    Mandate,
    MandateStatus,
    Transaction,
    User,
)
from astha_engine.utils.date_utils import recent_periods

USERS: List[User] = [
    User("u1", "Shonar Cheel", "Affluent"),
    User("u2", "Silver Lynx", "Mass"),
    User("u3", "Megh Bagh", "Affluent"),
    User("u4", "Crimson Orca", "HNI"),
    User("u5", "Padma Shaluk", "Mass"),
    User("u6", "Azure Tiger", "Affluent"),
    User("u7", "Nilkanto", "Affluent"),
    User("u8", "Amber Raven", "Mass"),
    User("u9", "Borsha Shalik", "HNI"),
    User("u10", "Mahmudul Karim", "Mass"),
]

COUNTRIES = ("US", "SA", "GB", "IN", "SG", "TH", "MY")
CHANNELS = (CHANNEL_POS, CHANNEL_ECOM)

# Typical monthly spend per destination for BD cardholders (USD)
BASE_BIAS = {
    "SA": 280,
    "US": 220,
    "GB": 170,
    "SG": 150,
    "TH": 130,
    "MY": 120,
    "IN": 80,
}


def generate_month_transactions(period: str, rng: random.Random) -> List[Transaction]:
    """
    One month of activity.

    Baseline: one transaction per country x channel so every bar has data.
    Organic: 90-159 random transactions scaled by the country's bias.
    """
    year, month = (int(part) for part in period.split("-"))
    transactions = []

    for country in COUNTRIES:
        for channel in CHANNELS:
            amount = BASE_BIAS[country] * (0.15 + rng.random() * 0.25)
            transactions.append(
                Transaction(
                    user_id=rng.choice(USERS).id,
                    country=country,
                    channel=channel,
                    amount=round(amount),
                    timestamp=datetime(year, month, 5 + rng.randrange(20)),
                )
            )

    for _ in range(90 + rng.randrange(70)):
        user = rng.choice(USERS)
        country = rng.choice(COUNTRIES)
        amount = BASE_BIAS[country] * (0.35 + rng.random() * 0.9)
        transactions.append(
            Transaction(
                user_id=user.id,
                country=country,
                channel=rng.choice(CHANNELS),
                amount=round(amount),
                timestamp=datetime(year, month, 1 + rng.randrange(28)),
            )
        )

    return transactions


def generate_transactions(seed: int = 20250905, months: int = 12, today: date | None = None) -> Tuple[List[str], List[Transaction]]:
    """Periods (oldest first) and their transactions; same seed, same data"""
    rng = random.Random(seed)
    periods = recent_periods(months, today)
    transactions = [txn for period in periods for txn in generate_month_transactions(period, rng)]
    return periods, transactions


def sample_debts() -> Tuple[Debt, ...]:
    return (
        Debt(
            id="d01",
            kind="Credit Card",
            lender="BRAC Bank Tara Platinum",
            apr=29.0,
            principal=68500,
            min_payment=4000,
            due_day=7,
            created_at=date(2024, 11, 2),
            mandate=Mandate(
                enabled=True,
                mandate_id="EM-CC-99811",
                provider="Visa",
                monthly_limit=10000,
                status=MandateStatus.ACTIVE,
                last_used=date(2025, 8, 7),
            ),
        ),
        Debt("d02", "Personal Loan", "BRAC Bank PL", 15.5, 210000, 8900, 12, created_at=date(2023, 6, 10)),
        Debt("d03", "BNPL", "Daraz BNPL", 0, 12500, 2500, 18, created_at=date(2025, 1, 3)),
        Debt("d04", "Microloan", "BKash Microloan", 22.0, 32000, 3000, 23, created_at=date(2024, 7, 20)),
        Debt("d05", "EMI", "City AMEX", 27.0, 41200, 2800, 3, created_at=date(2024, 5, 22)),
    )


def sample_bills() -> Tuple[Bill, ...]:
    return (
        Bill(
            id="b01",
            name="House Rent",
            amount=35000,
            due_day=1,
            remind_days_before=3,
            category="rent",
            last_paid=date(2025, 8, 1),
            mandate=Mandate(
                enabled=True,
                mandate_id="EM-Rent-11001",
                provider="NPSB",
                monthly_limit=35000,
                status=MandateStatus.ACTIVE,
                last_used=date(2025, 8, 1),
            ),
        ),
        Bill("b02", "Electricity", 2800, 6, remind_days_before=4, category="electricity", last_paid=date(2025, 8, 6)),
        Bill("b03", "Gas", 1200, 10, autopay=True, remind_days_before=2, category="gas", last_paid=date(2025, 8, 10)),
        Bill("b04", "Water", 600, 11, autopay=True, remind_days_before=2, category="water", last_paid=date(2025, 8, 11)),
        Bill("b05", "Mobile (Grameenphone)", 1499, 14, autopay=True, category="mobile", last_paid=date(2025, 8, 14)),
        Bill("b06", "Internet (Link3)", 1800, 15, autopay=True, category="internet", last_paid=date(2025, 8, 15)),
        Bill("b07", "Netflix", 1099, 20, autopay=True, category="entertainment", last_paid=date(2025, 8, 20)),
    )
