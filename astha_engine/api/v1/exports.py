"""GET /v1/export/{name}.csv - CSV downloads of debts, bills and e-mandates"""

from fastapi import APIRouter, Depends, HTTPException
from starlette.responses import Response

from astha_engine.api.dependencies import get_book_store
from astha_engine.domain.exceptions import UnknownExportError
from astha_engine.domain.export import export_csv
from astha_engine.domain.portfolio import BookStore
from astha_engine.infrastructure.observability.metrics import export_counter

router = APIRouter()

FILENAMES = {"debts": "debts.csv", "bills": "bills.csv", "mandates": "emandates.csv"}


@router.get("/export/{name}.csv")
def download_export(name: str, store: BookStore = Depends(get_book_store)):
    book = store.book
    try:
        content = export_csv(name, book.debts, book.bills)
    except UnknownExportError as e:
        raise HTTPException(status_code=404, detail=str(e))

    export_counter.labels(export=name).inc()
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{FILENAMES[name]}"'},
    )
