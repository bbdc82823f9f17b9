"""CSV export of debts, bills and active e-mandates"""

from datetime import date
from enum import Enum
from typing import Any, Iterable, List, Sequence
from astha_engine.domain.exceptions import UnknownExportError
from astha_engine.domain.models import Bill, Debt, Mandate

DEBT_COLUMNS = [
    "id",
    "kind",
    "lender",
    "apr(%)",
    "principal(bdt)",
    "minPayment(bdt)",
    "dueDay",
    "status",
    "mandateEnabled",
    "mandateId",
    "provider",
    "monthlyLimit",
    "mandateStatus",
]

BILL_COLUMNS = [
    "id",
    "name",
    "cycle",
    "amount(bdt)",
    "dueDay",
    "autopay",
    "remindDaysBefore",
    "status",
    "mandateEnabled",
    "mandateId",
    "provider",
    "monthlyLimit",
    "mandateStatus",
]

MANDATE_COLUMNS = ["type", "name", "mandateId", "provider", "monthlyLimit", "status", "lastUsed"]

EXPORTS = ("debts", "bills", "mandates")


def format_cell(value: Any) -> str:
    """
    Render one cell.

    None becomes an empty string, booleans 'true'/'false', whole floats drop
    the '.0'. Values containing a comma are quoted with inner quotes doubled.
    """
    if value is None:
        text = ""
    elif isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, float) and value.is_integer():
        text = str(int(value))
    elif isinstance(value, Enum):
        text = str(value.value)
    elif isinstance(value, date):
        text = value.isoformat()
    else:
        text = str(value)

    if "," in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def to_csv(header: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Header line plus one line per row, newline separated, no trailing newline"""
    lines = [",".join(header)]
    lines.extend(",".join(format_cell(cell) for cell in row) for row in rows)
    return "\n".join(lines)


def _mandate_cells(mandate: Mandate | None) -> List[Any]:
    if mandate is None:
        return [False, None, None, None, None]
    return [mandate.enabled, mandate.mandate_id, mandate.provider, mandate.monthly_limit, mandate.status]


def export_debts(debts: Iterable[Debt]) -> str:
    rows = [
        [d.id, d.kind, d.lender, d.apr, d.principal, d.min_payment, d.due_day, d.status]
        + _mandate_cells(d.mandate)
        for d in debts
    ]
    return to_csv(DEBT_COLUMNS, rows)


def export_bills(bills: Iterable[Bill]) -> str:
    rows = [
        [b.id, b.name, b.cycle, b.amount, b.due_day, b.autopay, b.remind_days_before, b.status]
        + _mandate_cells(b.mandate)
        for b in bills
    ]
    return to_csv(BILL_COLUMNS, rows)


def export_mandates(debts: Iterable[Debt], bills: Iterable[Bill]) -> str:
    """Enabled mandates only, debts first"""
    rows = []
    for d in debts:
        if d.mandate is not None and d.mandate.enabled:
            rows.append(["debt", f"{d.lender} ({d.kind})"] + _mandate_row(d.mandate))
    for b in bills:
        if b.mandate is not None and b.mandate.enabled:
            rows.append(["bill", b.name] + _mandate_row(b.mandate))
    return to_csv(MANDATE_COLUMNS, rows)


def _mandate_row(mandate: Mandate) -> List[Any]:
    return [mandate.mandate_id, mandate.provider, mandate.monthly_limit, mandate.status, mandate.last_used]


def export_csv(name: str, debts: Iterable[Debt], bills: Iterable[Bill]) -> str:
    """Dispatch by export name ('debts', 'bills' or 'mandates')"""
    if name == "debts":
        return export_debts(debts)
    if name == "bills":
        return export_bills(bills)
    if name == "mandates":
        return export_mandates(debts, bills)
    raise UnknownExportError(f"Unknown export: {name}")
