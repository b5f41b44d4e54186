"""Invoice and report endpoints."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from workhours.database import get_database
from workhours.models.report import (
    Invoice,
    InvoicePreviewRequest,
    Period,
    PeriodType,
    Summary,
)
from workhours.routers.auth import get_current_user_id
from workhours.services.report_service import ReportService
from workhours.utils.export import csv_filename, invoice_to_csv
from workhours.utils.periods import resolve_period


router = APIRouter(tags=["invoices"])


async def _invoice(db, user_id: str, period: Period, hourly_rate: Optional[float]) -> Invoice:
    service = ReportService(db)
    try:
        return await service.invoice_preview(user_id, period, hourly_rate=hourly_rate)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/invoice-preview", response_model=Invoice)
async def invoice_preview(
    request: InvoicePreviewRequest,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Preview the invoice for a date range.

    - One line per entry; hourly_rate, when given, overrides every line rate
    - user_id in the body, if present, must be the authenticated user (403)
    """
    if request.user_id is not None and request.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

    period = resolve_period(PeriodType.CUSTOM, from_=request.from_, to=request.to)
    return await _invoice(db, user_id, period, request.hourly_rate)


@router.get("/invoices/preview", response_model=Invoice)
async def get_invoice_preview(
    from_: Optional[date] = Query(None, alias="from"),
    to: Optional[date] = Query(None),
    hourly_rate: Optional[float] = Query(None, ge=0),
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Preview the invoice for a date range (query string variant)."""
    period = resolve_period(PeriodType.CUSTOM, from_=from_, to=to)
    return await _invoice(db, user_id, period, hourly_rate)


@router.get("/invoices/export.csv")
async def export_invoice_csv(
    from_: Optional[date] = Query(None, alias="from"),
    to: Optional[date] = Query(None),
    hourly_rate: Optional[float] = Query(None, ge=0),
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Download the invoice for a date range as semicolon-separated CSV."""
    period = resolve_period(PeriodType.CUSTOM, from_=from_, to=to)
    invoice = await _invoice(db, user_id, period, hourly_rate)

    return Response(
        content=invoice_to_csv(invoice),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{csv_filename(invoice)}"'},
    )


@router.get("/reports/summary", response_model=Summary)
async def summary(
    period: PeriodType = Query(PeriodType.MONTH),
    reference: Optional[date] = Query(None),
    from_: Optional[date] = Query(None, alias="from"),
    to: Optional[date] = Query(None),
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Summarize hours and amounts for a period.

    - period: week, month, year (around reference, default today) or custom
    - custom periods use from / to, either may be omitted
    """
    service = ReportService(db)
    try:
        return await service.summary(
            user_id,
            resolve_period(period, reference=reference, from_=from_, to=to),
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
