"""Debt manager endpoints: summary, debts, bills and payoff projection"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query

from astha_engine.api.dependencies import get_book_store, get_request_id
from astha_engine.api.v1.schemas import (
    BillSchema,
    DebtSchema,
    FinanceSummaryResponse,
    ProjectionPointSchema,
    ProjectionResponse,
    UpcomingDueSchema,
)
from astha_engine.config import settings
from astha_engine.domain.amortization import payoff_month
from astha_engine.domain.portfolio import KIND_BILLS, BookStore
from astha_engine.infrastructure.observability.logging import log_projection
from astha_engine.infrastructure.observability.metrics import record_projection

router = APIRouter()


@router.get("/finance/summary", response_model=FinanceSummaryResponse)
def get_summary(store: BookStore = Depends(get_book_store)):
    """KPIs, bill breakdown and the next payments due"""
    book = store.book
    return FinanceSummaryResponse(
        total_debt=book.total_debt,
        total_min_payment=book.total_min_payment,
        total_bills=book.total_bills,
        debt_count=len(book.debts),
        bill_breakdown=book.bill_breakdown(),
        upcoming=[
            UpcomingDueSchema(
                type=due.type,
                record_id=due.record_id,
                label=due.label,
                due_day=due.due_day,
                amount=due.amount,
                days_until=due.days_until,
            )
            for due in book.upcoming(limit=settings.upcoming_dues_limit)
        ],
    )


@router.get("/debts", response_model=List[DebtSchema])
def list_debts(
    sort: str = Query("amount", pattern="^(amount|apr|due)$"),
    store: BookStore = Depends(get_book_store),
):
    return [DebtSchema.from_domain(d) for d in store.book.sorted_debts(sort)]


@router.get("/debts/projection", response_model=ProjectionResponse)
def get_projection(
    extra: float = Query(settings.projection_extra_budget, ge=0, description="Extra BDT on top of minimums"),
    months: int = Query(settings.projection_horizon_months, ge=1, le=600),
    store: BookStore = Depends(get_book_store),
    request_id: str = Depends(get_request_id),
):
    """
    Snowball payoff projection of the current debts.

    Returns one point per month until the balance reaches zero or the horizon ends.
    """
    book = store.book
    points = book.projection(extra, months)
    paid_off = payoff_month(points)

    record_projection(len(points), paid_off)
    log_projection(request_id, len(book.debts), len(points), paid_off)

    return ProjectionResponse(
        extra_monthly_budget=extra,
        max_months=months,
        payoff_month=paid_off,
        points=[
            ProjectionPointSchema(month=p.month, month_label=p.month_label, total_balance=p.total_balance)
            for p in points
        ],
    )


@router.get("/bills", response_model=List[BillSchema])
def list_bills(store: BookStore = Depends(get_book_store)):
    return [BillSchema.from_domain(b) for b in store.book.bills]


@router.post("/bills/{bill_id}/paid", response_model=BillSchema)
def mark_bill_paid(bill_id: str, store: BookStore = Depends(get_book_store)):
    """Mark a bill as paid today"""
    if store.book.find(KIND_BILLS, bill_id) is None:
        raise HTTPException(status_code=404, detail="Bill not found")

    book = store.apply(lambda b: b.mark_bill_paid(bill_id))
    return BillSchema.from_domain(book.find(KIND_BILLS, bill_id))
