"""E-mandate lifecycle for debts and bills

A mandate is owned by exactly one debt or bill. Every operation takes the whole
record collection and returns a new tuple with the target record replaced;
when the id is unknown (or the operation does not apply) the input collection
object itself is returned.

States: off (no mandate) -> active <-> paused, any -> revoked. Toggling a
revoked mandate reactivates it.
"""

import uuid
from dataclasses import replace
from typing import Callable, Optional, Sequence, Tuple, TypeVar, Union
from astha_engine.domain.models import Bill, Debt, Mandate, MandateStatus

Record = TypeVar("Record", Debt, Bill)
IdFactory = Callable[[str], str]

STATE_OFF = "off"
DEFAULT_PROVIDER = "NPSB"


def random_mandate_id(prefix: str) -> str:
    """Mandate reference such as 'EM-D-3f9a1c2'"""
    return f"{prefix}-{uuid.uuid4().hex[:7]}"


def mandate_state(record: Union[Debt, Bill]) -> str:
    """'off' when no mandate is attached, otherwise the mandate status value"""
    if record.mandate is None:
        return STATE_OFF
    return record.mandate.status.value


def default_mandate(
    record: Union[Debt, Bill],
    status: MandateStatus = MandateStatus.ACTIVE,
    id_factory: Optional[IdFactory] = None,
    provider: str = DEFAULT_PROVIDER,
) -> Mandate:
    """
    Fresh mandate for a record that has none.

    Debts get a limit of twice the minimum payment (at least 10,000 BDT),
    bills 1.25x the bill amount (at least 5,000 BDT).
    """
    id_factory = id_factory or random_mandate_id
    if isinstance(record, Debt):
        prefix, limit = "EM-D", max(record.min_payment * 2, 10000)
    else:
        prefix, limit = "EM-B", max(record.amount * 1.25, 5000)

    return Mandate(
        enabled=status == MandateStatus.ACTIVE,
        mandate_id=id_factory(prefix),
        provider=provider,
        monthly_limit=limit,
        status=status,
    )


def _index_of(records: Sequence[Record], record_id: str) -> Optional[int]:
    for i, record in enumerate(records):
        if record.id == record_id:
            return i
    return None


def _with_record(records: Sequence[Record], index: int, record: Record) -> Tuple[Record, ...]:
    updated = list(records)
    updated[index] = record
    return tuple(updated)


def toggle_mandate(
    records: Sequence[Record],
    record_id: str,
    id_factory: Optional[IdFactory] = None,
    provider: str = DEFAULT_PROVIDER,
) -> Sequence[Record]:
    """
    Flip a record's mandate on or off.

    - Enabled mandate: paused and disabled
    - No mandate: a default one is created, active
    - Disabled mandate (paused or revoked): reused and reactivated
    """
    index = _index_of(records, record_id)
    if index is None:
        return records

    record = records[index]
    current = record.mandate
    if current is not None and current.enabled:
        mandate = replace(current, enabled=False, status=MandateStatus.PAUSED)
    elif current is not None:
        mandate = replace(current, enabled=True, status=MandateStatus.ACTIVE)
    else:
        mandate = default_mandate(record, id_factory=id_factory, provider=provider)

    return _with_record(records, index, replace(record, mandate=mandate))


def edit_mandate(
    records: Sequence[Record],
    record_id: str,
    provider: Optional[str] = None,
    monthly_limit: Optional[float] = None,
    mandate_id: Optional[str] = None,
    status: Optional[Union[MandateStatus, str]] = None,
    enabled: Optional[bool] = None,
    id_factory: Optional[IdFactory] = None,
) -> Sequence[Record]:
    """
    Replace mandate fields from the editor.

    A record without a mandate starts from a paused default. An explicit status
    decides `enabled` (active only); otherwise an explicit `enabled` decides the
    status (active or paused). The monthly limit is clamped at zero.
    """
    index = _index_of(records, record_id)
    if index is None:
        return records

    record = records[index]
    mandate = record.mandate or default_mandate(record, MandateStatus.PAUSED, id_factory)

    changes = {}
    if provider is not None:
        changes["provider"] = provider
    if monthly_limit is not None:
        changes["monthly_limit"] = max(0, monthly_limit)
    if mandate_id is not None:
        changes["mandate_id"] = mandate_id
    if status is not None:
        status = MandateStatus(status)
        changes["status"] = status
        changes["enabled"] = status == MandateStatus.ACTIVE
    elif enabled is not None:
        changes["enabled"] = enabled
        changes["status"] = MandateStatus.ACTIVE if enabled else MandateStatus.PAUSED

    return _with_record(records, index, replace(record, mandate=replace(mandate, **changes)))


def revoke_mandate(records: Sequence[Record], record_id: str) -> Sequence[Record]:
    """Revoke and disable a record's mandate; no-op when absent or already revoked"""
    index = _index_of(records, record_id)
    if index is None:
        return records

    record = records[index]
    current = record.mandate
    if current is None or current.status == MandateStatus.REVOKED:
        return records

    mandate = replace(current, enabled=False, status=MandateStatus.REVOKED)
    return _with_record(records, index, replace(record, mandate=mandate))
