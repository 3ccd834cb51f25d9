"""
Worked Hours API Endpoints
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from common.models import SettingsSnapshot
from common.storage import RecordStore
from modules.tax.service import MAX_YEAR, MIN_YEAR
from modules.timesheets.report import ReportRenderer
from modules.timesheets.service import build_monthly_report, summarize_worked_hours

from ..deps import get_clock, get_renderer, get_settings, get_store, success

router = APIRouter()


def _period(year: Optional[int], month: Optional[int], clock):
    today = clock()
    return (
        year if year is not None else today.year,
        month if month is not None else today.month,
    )


def _report(store: RecordStore, client_id: int, year: int, month: int):
    client = store.get_client(client_id)
    if client is None:
        raise HTTPException(status_code=404, detail="Cliente non trovato")
    return build_monthly_report(client, store.list_worked_hours(client_id), year, month)


@router.get("/summary")
async def get_worked_hours_summary(
    year: Optional[int] = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    month: Optional[int] = Query(None, ge=1, le=12),
    store: RecordStore = Depends(get_store),
    clock=Depends(get_clock),
):
    """Hours and amounts per client for a month"""
    year, month = _period(year, month, clock)
    return success(summarize_worked_hours(store.list_clients(), store.list_worked_hours(), year, month))


@router.get("/report")
async def get_monthly_report(
    clientId: int,
    year: Optional[int] = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    month: Optional[int] = Query(None, ge=1, le=12),
    store: RecordStore = Depends(get_store),
    clock=Depends(get_clock),
):
    """Monthly report grouped by day"""
    year, month = _period(year, month, clock)
    return success(_report(store, clientId, year, month))


@router.get("/report.pdf")
async def get_monthly_report_pdf(
    clientId: int,
    year: Optional[int] = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    month: Optional[int] = Query(None, ge=1, le=12),
    store: RecordStore = Depends(get_store),
    clock=Depends(get_clock),
    settings: SettingsSnapshot = Depends(get_settings),
    renderer: ReportRenderer = Depends(get_renderer),
):
    """Monthly report as PDF"""
    year, month = _period(year, month, clock)
    report = _report(store, clientId, year, month)
    pdf = renderer.render(report, settings.currency_symbol, settings.currency)
    filename = f"ore-lavorate-{year}-{month:02d}-{clientId}.pdf"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
