"""E-mandate controls for debts and bills: toggle, edit, revoke"""

import logging
from typing import Callable
from fastapi import APIRouter, Depends, HTTPException

from astha_engine.api.dependencies import get_book_store, get_request_id
from astha_engine.api.v1.schemas import MandateEditRequest, MandateResponse, MandateSchema
from astha_engine.config import settings
from astha_engine.domain.exceptions import UnknownRecordKindError
from astha_engine.domain.mandates import mandate_state
from astha_engine.domain.portfolio import BookStore, FinanceBook
from astha_engine.infrastructure.observability.logging import log_mandate_transition
from astha_engine.infrastructure.observability.metrics import mandate_transition_counter

router = APIRouter()


def _apply(
    store: BookStore,
    kind: str,
    record_id: str,
    operation: str,
    update: Callable[[FinanceBook], FinanceBook],
    request_id: str,
) -> MandateResponse:
    """Run a mandate update against an existing record and report its new state"""
    try:
        if store.book.find(kind, record_id) is None:
            raise HTTPException(status_code=404, detail="Record not found")
        book = store.apply(update)
    except UnknownRecordKindError as e:
        logging.warning(f"Unknown record kind: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    record = book.find(kind, record_id)
    state = mandate_state(record)

    mandate_transition_counter.labels(operation=operation, state=state).inc()
    log_mandate_transition(request_id, kind, record_id, operation, state)

    return MandateResponse(
        kind=kind,
        record_id=record_id,
        mandate_state=state,
        mandate=MandateSchema.from_domain(record.mandate),
    )


@router.post("/{kind}/{record_id}/mandate/toggle", response_model=MandateResponse)
def toggle_mandate(
    kind: str,
    record_id: str,
    store: BookStore = Depends(get_book_store),
    request_id: str = Depends(get_request_id),
):
    """
    Enable or pause the e-mandate of a debt or bill.

    A record without a mandate gets a new one with the default provider and limit.
    """
    return _apply(
        store,
        kind,
        record_id,
        "toggle",
        lambda book: book.toggle_mandate(kind, record_id, provider=settings.default_mandate_provider),
        request_id,
    )


@router.patch("/{kind}/{record_id}/mandate", response_model=MandateResponse)
def edit_mandate(
    kind: str,
    record_id: str,
    body: MandateEditRequest,
    store: BookStore = Depends(get_book_store),
    request_id: str = Depends(get_request_id),
):
    """Replace mandate fields; status and enabled are kept consistent"""
    fields = body.model_dump(exclude_none=True)
    return _apply(
        store,
        kind,
        record_id,
        "edit",
        lambda book: book.edit_mandate(kind, record_id, **fields),
        request_id,
    )


@router.post("/{kind}/{record_id}/mandate/revoke", response_model=MandateResponse)
def revoke_mandate(
    kind: str,
    record_id: str,
    store: BookStore = Depends(get_book_store),
    request_id: str = Depends(get_request_id),
):
    return _apply(
        store,
        kind,
        record_id,
        "revoke",
        lambda book: book.revoke_mandate(kind, record_id),
        request_id,
    )
