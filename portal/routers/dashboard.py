"""
Dashboard API Endpoints
"""

from datetime import date
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Query

from common.models import SettingsSnapshot
from common.storage import RecordStore
from modules.controlling.charts import build_category_pie, build_income_expense_series
from modules.controlling.service import ControllingService
from modules.invoicing.service import mark_overdue
from modules.tax.service import MAX_YEAR, MIN_YEAR, TaxService

from ..deps import get_clock, get_settings, get_store, success

router = APIRouter()


def _current_invoices(store: RecordStore, clock: Callable[[], date]):
    # Overdue flags are derived from today's date, never stored by the engine
    invoices, _ = mark_overdue(store.list_invoices(), clock())
    return invoices


@router.get("/summary")
async def get_dashboard_summary(
    year: Optional[int] = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    store: RecordStore = Depends(get_store),
    clock=Depends(get_clock),
):
    """Yearly invoice and expense summary"""
    service = ControllingService(clock=clock)
    summary = service.get_dashboard_summary(
        _current_invoices(store, clock), store.list_expenses(), store.list_categories(), year,
    )
    return success(summary)


@router.get("/monthly-estimate")
async def get_monthly_estimate(
    store: RecordStore = Depends(get_store),
    clock=Depends(get_clock),
):
    """Current month projection from paid invoices and expenses"""
    service = ControllingService(clock=clock)
    return success(service.get_monthly_estimate(store.list_invoices(), store.list_expenses()))


@router.get("/income-expense-chart")
async def get_income_expense_chart(
    months: int = 6,
    year: Optional[int] = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    store: RecordStore = Depends(get_store),
    clock=Depends(get_clock),
):
    """Income vs expenses per month"""
    series = build_income_expense_series(
        store.list_invoices(), store.list_expenses(), months=months, year=year, today=clock(),
    )
    return success(series)


@router.get("/expense-by-category")
async def get_expense_by_category(
    year: Optional[int] = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    store: RecordStore = Depends(get_store),
):
    """Expense breakdown for the pie chart"""
    return success(build_category_pie(store.list_expenses(), store.list_categories(), year))


@router.get("/monthly-overview")
async def get_monthly_overview(
    year: Optional[int] = None,
    month: Optional[int] = None,
    targetSalary: Optional[float] = None,
    taxablePercentage: Optional[float] = None,
    incomeTaxRate: Optional[float] = None,
    healthInsuranceRate: Optional[float] = None,
    store: RecordStore = Depends(get_store),
    clock=Depends(get_clock),
    settings: SettingsSnapshot = Depends(get_settings),
):
    """Required revenue for the target salary vs actual figures (regime forfettario)"""
    today = clock()
    service = TaxService(clock=clock)
    overview = service.get_monthly_overview(
        store.list_invoices(),
        store.list_expenses(),
        year if year is not None else today.year,
        month if month is not None else today.month,
        targetSalary if targetSalary is not None else settings.target_salary,
        taxablePercentage if taxablePercentage is not None else settings.taxable_percentage,
        incomeTaxRate if incomeTaxRate is not None else settings.income_tax_rate,
        healthInsuranceRate if healthInsuranceRate is not None else settings.health_insurance_rate,
    )
    return success(overview)


@router.get("/annual-limit")
async def get_annual_limit(
    year: Optional[int] = Query(None, ge=MIN_YEAR, le=MAX_YEAR),
    store: RecordStore = Depends(get_store),
    clock=Depends(get_clock),
):
    """Invoiced revenue for the year vs the flat-tax ceiling"""
    service = TaxService(clock=clock)
    return success(service.get_annual_revenue_limit(store.list_invoices(), year))
