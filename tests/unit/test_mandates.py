"""Unit tests for the e-mandate state machine"""

import pytest
from datetime import date
from astha_engine.domain.mandates import (
    STATE_OFF,
    edit_mandate,
    mandate_state,
    random_mandate_id,
    revoke_mandate,
    toggle_mandate,
)
from astha_engine.domain.models import Bill, Debt, Mandate, MandateStatus


def fixed_id(prefix: str) -> str:
    return f"{prefix}-test1"


@pytest.fixture
def debts() -> tuple:
    return (
        Debt("d01", "Credit Card", "Card Bank", 29.0, 68500, 4000, 7,
             mandate=Mandate(True, "EM-CC-1", "Visa", 10000, MandateStatus.ACTIVE, date(2025, 8, 7))),
        Debt("d02", "Personal Loan", "Loan Bank", 15.5, 210000, 8900, 12),
        Debt("d03", "BNPL", "Shop BNPL", 0, 12500, 2500, 18),
    )


@pytest.fixture
def bills() -> tuple:
    return (
        Bill("b01", "Electricity", 2800, 6, category="electricity"),
        Bill("b02", "House Rent", 35000, 1, category="rent"),
    )


def assert_consistent(records):
    for record in records:
        if record.mandate is not None:
            assert record.mandate.enabled == (record.mandate.status == MandateStatus.ACTIVE)


def test_toggle_creates_default_debt_mandate(debts):
    """Test toggling a debt without a mandate activates a new default one"""
    updated = toggle_mandate(debts, "d02", id_factory=fixed_id)
    mandate = updated[1].mandate

    assert mandate.enabled is True
    assert mandate.status == MandateStatus.ACTIVE
    assert mandate.mandate_id == "EM-D-test1"
    assert mandate.provider == "NPSB"
    assert mandate.monthly_limit == 17800  # 2 x 8900
    assert mandate.last_used is None


def test_toggle_default_debt_limit_floor(debts):
    updated = toggle_mandate(debts, "d03", id_factory=fixed_id)
    assert updated[2].mandate.monthly_limit == 10000  # 2 x 2500 is below the floor


def test_toggle_creates_default_bill_mandate(bills):
    updated = toggle_mandate(bills, "b02", id_factory=fixed_id)
    assert updated[1].mandate.mandate_id == "EM-B-test1"
    assert updated[1].mandate.monthly_limit == 43750  # 1.25 x 35000

    updated = toggle_mandate(bills, "b01", id_factory=fixed_id)
    assert updated[0].mandate.monthly_limit == 5000


def test_toggle_pauses_then_reactivates(debts):
    """Test active -> paused -> active keeps the same mandate"""
    paused = toggle_mandate(debts, "d01")
    assert paused[0].mandate.status == MandateStatus.PAUSED
    assert paused[0].mandate.enabled is False
    assert paused[0].mandate.mandate_id == "EM-CC-1"

    active = toggle_mandate(paused, "d01")
    assert active[0].mandate.status == MandateStatus.ACTIVE
    assert active[0].mandate.enabled is True
    assert active[0].mandate.provider == "Visa"
    assert active[0].mandate.last_used == date(2025, 8, 7)


def test_toggle_reactivates_revoked_mandate(debts):
    """Regression: toggling a revoked mandate brings it back to active"""
    revoked = revoke_mandate(debts, "d01")
    reactivated = toggle_mandate(revoked, "d01")

    assert reactivated[0].mandate.status == MandateStatus.ACTIVE
    assert reactivated[0].mandate.enabled is True
    assert reactivated[0].mandate.mandate_id == "EM-CC-1"


def test_toggle_does_not_touch_other_records_or_input(debts):
    updated = toggle_mandate(debts, "d02", id_factory=fixed_id)

    assert debts[1].mandate is None  # input untouched
    assert updated[0] is debts[0]
    assert updated[2] is debts[2]
    assert isinstance(updated, tuple)


def test_edit_status_derives_enabled(debts):
    """Test explicit status decides enabled"""
    updated = edit_mandate(debts, "d01", status="paused")
    assert updated[0].mandate.enabled is False

    updated = edit_mandate(updated, "d01", status=MandateStatus.ACTIVE)
    assert updated[0].mandate.enabled is True

    updated = edit_mandate(updated, "d01", status="revoked", enabled=True)
    assert updated[0].mandate.status == MandateStatus.REVOKED
    assert updated[0].mandate.enabled is False  # status wins over enabled


def test_edit_enabled_derives_status(debts):
    """Test toggling enabled in the editor decides the status"""
    updated = edit_mandate(debts, "d01", enabled=False)
    assert updated[0].mandate.status == MandateStatus.PAUSED

    updated = edit_mandate(updated, "d01", enabled=True)
    assert updated[0].mandate.status == MandateStatus.ACTIVE


def test_edit_replaces_fields_and_clamps_limit(debts):
    updated = edit_mandate(debts, "d01", provider="BKash", mandate_id="EM-NEW-1", monthly_limit=-250)
    mandate = updated[0].mandate

    assert mandate.provider == "BKash"
    assert mandate.mandate_id == "EM-NEW-1"
    assert mandate.monthly_limit == 0
    assert mandate.status == MandateStatus.ACTIVE  # untouched


def test_edit_without_mandate_starts_from_paused_default(bills):
    updated = edit_mandate(bills, "b01", provider="Nagad", id_factory=fixed_id)
    mandate = updated[0].mandate

    assert mandate.provider == "Nagad"
    assert mandate.status == MandateStatus.PAUSED
    assert mandate.enabled is False
    assert mandate.mandate_id == "EM-B-test1"


def test_edit_rejects_unknown_status(debts):
    with pytest.raises(ValueError):
        edit_mandate(debts, "d01", status="frozen")


def test_revoke_sets_revoked_and_is_idempotent(debts):
    revoked = revoke_mandate(debts, "d01")
    assert revoked[0].mandate.status == MandateStatus.REVOKED
    assert revoked[0].mandate.enabled is False

    assert revoke_mandate(revoked, "d01") is revoked


def test_revoke_without_mandate_is_noop(debts):
    assert revoke_mandate(debts, "d02") is debts


def test_unknown_id_returns_input_unchanged(debts, bills):
    """Test all operations are no-ops for ids that do not exist"""
    assert toggle_mandate(debts, "missing") is debts
    assert edit_mandate(debts, "missing", status="paused") is debts
    assert revoke_mandate(debts, "missing") is debts
    assert toggle_mandate(bills, "d01") is bills


def test_invariant_holds_across_operation_sequence(debts):
    """Test enabled == (status == active) after every transition"""
    records = debts
    operations = [
        lambda r: toggle_mandate(r, "d02", id_factory=fixed_id),
        lambda r: toggle_mandate(r, "d01"),
        lambda r: edit_mandate(r, "d02", enabled=False),
        lambda r: revoke_mandate(r, "d02"),
        lambda r: toggle_mandate(r, "d02"),
        lambda r: edit_mandate(r, "d03", status="active", id_factory=fixed_id),
        lambda r: edit_mandate(r, "d01", monthly_limit=5000),
        lambda r: revoke_mandate(r, "d03"),
    ]
    for operation in operations:
        records = operation(records)
        assert_consistent(records)


def test_mandate_state(debts):
    assert mandate_state(debts[1]) == STATE_OFF
    assert mandate_state(debts[0]) == "active"
    assert mandate_state(revoke_mandate(debts, "d01")[0]) == "revoked"


def test_random_mandate_id_prefix():
    generated = random_mandate_id("EM-D")
    assert generated.startswith("EM-D-")
    assert generated != random_mandate_id("EM-D")
