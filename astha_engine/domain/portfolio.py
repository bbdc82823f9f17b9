"""Debts and bills state container with debt-manager KPIs"""

import logging
import threading
from dataclasses import dataclass, replace
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple
from astha_engine.domain import mandates
from astha_engine.domain.amortization import DEFAULT_HORIZON_MONTHS, project
from astha_engine.domain.exceptions import UnknownRecordKindError
from astha_engine.domain.models import Bill, Debt, ProjectionPoint, UpcomingDue
from astha_engine.utils.date_utils import days_until

logger = logging.getLogger(__name__)

KIND_DEBTS = "debts"
KIND_BILLS = "bills"

DEBT_SORT_KEYS: Dict[str, Callable[[Debt], float]] = {
    "amount": lambda d: -d.principal,
    "apr": lambda d: -d.apr,
    "due": lambda d: d.due_day,
}

BILL_GROUPS: Dict[str, Tuple[str, ...]] = {
    "Rent": ("rent",),
    "Utilities": ("electricity", "gas", "water"),
    "Connectivity": ("mobile", "internet"),
    "Entertainment": ("entertainment",),
}


@dataclass(frozen=True)
class FinanceBook:
    """
    Immutable snapshot of a customer's debts and bills.

    Every update returns a new FinanceBook; when nothing changed the same
    snapshot is returned.
    """

    debts: Tuple[Debt, ...] = ()
    bills: Tuple[Bill, ...] = ()

    def records(self, kind: str) -> Tuple:
        if kind == KIND_DEBTS:
            return self.debts
        if kind == KIND_BILLS:
            return self.bills
        raise UnknownRecordKindError(f"Unknown record kind: {kind}")

    def find(self, kind: str, record_id: str):
        for record in self.records(kind):
            if record.id == record_id:
                return record
        return None

    def _with_records(self, kind: str, records) -> "FinanceBook":
        if records is self.records(kind):
            return self
        if kind == KIND_DEBTS:
            return replace(self, debts=tuple(records))
        return replace(self, bills=tuple(records))

    # Mandates

    def toggle_mandate(self, kind: str, record_id: str, **options) -> "FinanceBook":
        return self._with_records(kind, mandates.toggle_mandate(self.records(kind), record_id, **options))

    def edit_mandate(self, kind: str, record_id: str, **fields) -> "FinanceBook":
        return self._with_records(kind, mandates.edit_mandate(self.records(kind), record_id, **fields))

    def revoke_mandate(self, kind: str, record_id: str) -> "FinanceBook":
        return self._with_records(kind, mandates.revoke_mandate(self.records(kind), record_id))

    # Bills

    def mark_bill_paid(self, bill_id: str, paid_on: date | None = None) -> "FinanceBook":
        paid_on = paid_on or date.today()
        bills = tuple(
            replace(b, status="paid", last_paid=paid_on) if b.id == bill_id else b
            for b in self.bills
        )
        if bills == self.bills:
            return self
        return replace(self, bills=bills)

    def bill_breakdown(self) -> Dict[str, float]:
        """Monthly bill amounts summed per display group"""
        return {
            group: sum(b.amount for b in self.bills if b.category in categories)
            for group, categories in BILL_GROUPS.items()
        }

    # KPIs

    @property
    def total_debt(self) -> float:
        return sum(d.principal for d in self.debts)

    @property
    def total_min_payment(self) -> float:
        return sum(d.min_payment for d in self.debts)

    @property
    def total_bills(self) -> float:
        return sum(b.amount for b in self.bills)

    def sorted_debts(self, sort: str = "amount") -> List[Debt]:
        """Debts by principal (desc), APR (desc) or due day (asc); unknown keys fall back to amount"""
        key = DEBT_SORT_KEYS.get(sort, DEBT_SORT_KEYS["amount"])
        return sorted(self.debts, key=key)

    def upcoming(self, limit: int = 6, today: date | None = None) -> List[UpcomingDue]:
        """Debt minimums by due day, then bills by due day, truncated to `limit`"""
        today = today or date.today()
        debt_dues = [
            UpcomingDue(
                type="debt",
                record_id=d.id,
                label=f"{d.lender} ({d.kind})",
                due_day=d.due_day,
                amount=d.min_payment,
                days_until=days_until(d.due_day, today),
            )
            for d in sorted(self.debts, key=lambda d: d.due_day)
        ]
        bill_dues = [
            UpcomingDue(
                type="bill",
                record_id=b.id,
                label=b.name,
                due_day=b.due_day,
                amount=b.amount,
                days_until=days_until(b.due_day, today),
            )
            for b in sorted(self.bills, key=lambda b: b.due_day)
        ]
        return (debt_dues + bill_dues)[:limit]

    def projection(
        self,
        extra_monthly_budget: float,
        max_months: int = DEFAULT_HORIZON_MONTHS,
        start: date | None = None,
    ) -> List[ProjectionPoint]:
        return project(self.debts, extra_monthly_budget, max_months, start)


class BookStore:
    """
    Holds the current FinanceBook for a single owner.

    Updates are applied one at a time under a lock, each replacing the whole
    snapshot, so readers always see a complete book.
    """

    def __init__(self, book: Optional[FinanceBook] = None):
        self._book = book or FinanceBook()
        self._lock = threading.Lock()

    @property
    def book(self) -> FinanceBook:
        return self._book

    def apply(self, update: Callable[[FinanceBook], FinanceBook]) -> FinanceBook:
        with self._lock:
            updated = update(self._book)
            if updated is self._book:
                logger.debug("Book update was a no-op")
            self._book = updated
            return updated
