"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple


CHANNEL_POS = "POS"
CHANNEL_ECOM = "E-COM"
CHANNEL_ALL = "all"


@dataclass(frozen=True)
class Transaction:
    """Cross-border card transaction"""

    user_id: str
    country: str  # ISO alpha-2
    channel: str  # "POS" or "E-COM"
    amount: float
    timestamp: datetime


@dataclass(frozen=True)
class User:
    """Cardholder shown on the leaderboard under an alias"""

    id: str
    alias: str
    segment: str  # "Mass", "Affluent" or "HNI"


@dataclass
class UserAggregate:
    """Running totals for one user within a period"""

    user_id: str
    total: float = 0
    pos_total: float = 0
    country_hits: Dict[str, int] = field(default_factory=dict)

    @property
    def top_country(self) -> Optional[str]:
        """Most frequent country; ties go to the country seen first"""
        if not self.country_hits:
            return None
        # max() returns the first of several equal maxima in insertion order
        return max(self.country_hits, key=self.country_hits.get)


@dataclass
class CountryAggregate:
    """Spend per destination country split by channel"""

    code: str
    pos_total: float = 0
    ecom_total: float = 0
    total: float = 0


@dataclass
class AggregationResult:
    """Output of a single aggregation pass"""

    per_user: Dict[str, UserAggregate]
    per_country: Dict[str, CountryAggregate]
    period_total: float


@dataclass(frozen=True)
class Tier:
    """Single rung of the reward ladder"""

    name: str
    threshold: float


@dataclass(frozen=True)
class TierProgress:
    """Where a spend total sits on the ladder"""

    current: str
    next: Optional[Tier]
    remaining: float


@dataclass(frozen=True)
class AggregateRow:
    """Ranked leaderboard row"""

    rank: int
    user_id: str
    alias: str
    total: float
    top_country: Optional[str]
    pos_fraction: float
    badges: Tuple[str, ...]
    tier: str


@dataclass(frozen=True)
class Leaderboard:
    """Everything the leaderboard screen shows for one period and channel"""

    rows: List[AggregateRow]
    countries: List[CountryAggregate]
    period_total: float
    user_count: int


class MandateStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    REVOKED = "revoked"


@dataclass(frozen=True)
class Mandate:
    """Standing authorization to debit up to a monthly limit"""

    enabled: bool
    mandate_id: str
    provider: str  # NPSB, BKash, Nagad, Rocket, Visa, Mastercard, AMEX
    monthly_limit: float  # BDT
    status: MandateStatus
    last_used: Optional[date] = None


@dataclass(frozen=True)
class Debt:
    """Outstanding debt account"""

    id: str
    kind: str  # Credit Card, Personal Loan, BNPL, Microloan, EMI
    lender: str
    apr: float  # annual %, e.g. 15.5
    principal: float
    min_payment: float
    due_day: int
    status: str = "current"  # current | overdue | paid
    created_at: Optional[date] = None
    mandate: Optional[Mandate] = None


@dataclass(frozen=True)
class Bill:
    """Recurring bill with reminder settings"""

    id: str
    name: str
    amount: float
    due_day: int
    cycle: str = "Monthly"  # Monthly | Quarterly | Yearly
    autopay: bool = False
    remind_days_before: int = 1
    category: str = "other"  # rent, electricity, gas, water, mobile, internet, entertainment
    status: str = "scheduled"  # scheduled | overdue | paid
    last_paid: Optional[date] = None
    mandate: Optional[Mandate] = None


@dataclass(frozen=True)
class ProjectionPoint:
    """Aggregate outstanding balance at the end of a simulated month"""

    month: int  # 1-based
    month_label: str
    total_balance: int


@dataclass(frozen=True)
class UpcomingDue:
    """Next payment due for a debt (minimum) or bill (amount)"""

    type: str  # "debt" or "bill"
    record_id: str
    label: str
    due_day: int
    amount: float
    days_until: int
