"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field
from astha_engine.domain.mandates import mandate_state
from astha_engine.domain.models import Bill, Debt, Mandate


class LeaderboardRow(BaseModel):
    """Single ranked user"""

    rank: int
    user_id: str
    alias: str
    total: float
    top_country: Optional[str] = None
    pos_fraction: float
    badges: List[str]
    tier: str


class CountryTotals(BaseModel):
    """Spend for one destination country"""

    code: str
    pos_total: float
    ecom_total: float
    total: float


class LeaderboardResponse(BaseModel):
    """Response for GET /v1/leaderboard"""

    period: str
    channel: str
    rows: List[LeaderboardRow]
    countries: List[CountryTotals]
    period_total: float
    user_count: int


class PeriodsResponse(BaseModel):
    """Response for GET /v1/leaderboard/periods"""

    periods: List[str]
    latest: Optional[str] = None


class TierSchema(BaseModel):
    name: str
    threshold: float


class TierProgressResponse(BaseModel):
    """Response for GET /v1/tiers/progress"""

    total: float
    current: str
    next: Optional[TierSchema] = None
    remaining: float


class MandateSchema(BaseModel):
    """E-mandate attached to a debt or bill"""

    enabled: bool
    mandate_id: str
    provider: str
    monthly_limit: float
    status: Literal["active", "paused", "revoked"]
    last_used: Optional[date] = None

    @classmethod
    def from_domain(cls, mandate: Optional[Mandate]) -> Optional["MandateSchema"]:
        if mandate is None:
            return None
        return cls(
            enabled=mandate.enabled,
            mandate_id=mandate.mandate_id,
            provider=mandate.provider,
            monthly_limit=mandate.monthly_limit,
            status=mandate.status.value,
            last_used=mandate.last_used,
        )


class DebtSchema(BaseModel):
    id: str
    kind: str
    lender: str
    apr: float
    principal: float
    min_payment: float
    due_day: int
    status: str
    created_at: Optional[date] = None
    mandate_state: str
    mandate: Optional[MandateSchema] = None

    @classmethod
    def from_domain(cls, debt: Debt) -> "DebtSchema":
        return cls(
            id=debt.id,
            kind=debt.kind,
            lender=debt.lender,
            apr=debt.apr,
            principal=debt.principal,
            min_payment=debt.min_payment,
            due_day=debt.due_day,
            status=debt.status,
            created_at=debt.created_at,
            mandate_state=mandate_state(debt),
            mandate=MandateSchema.from_domain(debt.mandate),
        )


class BillSchema(BaseModel):
    id: str
    name: str
    amount: float
    due_day: int
    cycle: str
    autopay: bool
    remind_days_before: int
    category: str
    status: str
    last_paid: Optional[date] = None
    mandate_state: str
    mandate: Optional[MandateSchema] = None

    @classmethod
    def from_domain(cls, bill: Bill) -> "BillSchema":
        return cls(
            id=bill.id,
            name=bill.name,
            amount=bill.amount,
            due_day=bill.due_day,
            cycle=bill.cycle,
            autopay=bill.autopay,
            remind_days_before=bill.remind_days_before,
            category=bill.category,
            status=bill.status,
            last_paid=bill.last_paid,
            mandate_state=mandate_state(bill),
            mandate=MandateSchema.from_domain(bill.mandate),
        )


class UpcomingDueSchema(BaseModel):
    type: Literal["debt", "bill"]
    record_id: str
    label: str
    due_day: int
    amount: float
    days_until: int


class FinanceSummaryResponse(BaseModel):
    """Response for GET /v1/finance/summary"""

    total_debt: float
    total_min_payment: float
    total_bills: float
    debt_count: int
    bill_breakdown: Dict[str, float]
    upcoming: List[UpcomingDueSchema]


class ProjectionPointSchema(BaseModel):
    month: int
    month_label: str
    total_balance: float


class ProjectionResponse(BaseModel):
    """Response for GET /v1/debts/projection"""

    extra_monthly_budget: float
    max_months: int
    payoff_month: Optional[int] = None
    points: List[ProjectionPointSchema]


class MandateEditRequest(BaseModel):
    """Request body for PATCH /v1/{kind}/{record_id}/mandate"""

    provider: Optional[str] = Field(None, min_length=1)
    monthly_limit: Optional[float] = Field(None, description="BDT; negative values are clamped to 0")
    mandate_id: Optional[str] = Field(None, min_length=1)
    status: Optional[Literal["active", "paused", "revoked"]] = None
    enabled: Optional[bool] = None


class MandateResponse(BaseModel):
    """Mandate state of a single record after an operation"""

    kind: str
    record_id: str
    mandate_state: str
    mandate: Optional[MandateSchema] = None
