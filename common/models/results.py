"""Output records.

Created fresh on every call and never mutated. Amounts are floats so the
records serialize straight to JSON numbers.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ResultModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class CategoryBreakdown(ResultModel):
    category_id: int
    category_name: str
    category_color: str
    total_amount: float
    expense_count: int
    percentage: float


class ExpenseSummary(ResultModel):
    total_count: int = 0
    total_amount: float = 0.0
    by_category: List[CategoryBreakdown] = []


class InvoiceSummary(ResultModel):
    total_invoices: int = 0
    total_amount: float = 0.0
    total_paid: float = 0.0
    total_pending: float = 0.0
    total_overdue: float = 0.0
    paid_count: int = 0
    pending_count: int = 0
    overdue_count: int = 0


class DashboardSummary(ResultModel):
    year: int
    total_expenses: int
    total_amount: float
    by_category: List[CategoryBreakdown]
    total_invoices: int
    total_invoiced: float
    total_paid: float
    total_pending: float
    total_overdue: float
    total_tax: float
    net: float


class MonthlyEstimate(ResultModel):
    month: str
    total_income: float
    total_expenses: float
    total_tax: float
    net_income: float
    invoice_count: int
    expense_count: int


class ChartPoint(ResultModel):
    label: str
    income: float
    expense: float


class AnnualLimitStatus(ResultModel):
    year: int
    total_invoiced: float
    limit: float
    remaining: float
    percentage_used: float
    status: str


class MonthlyOverview(ResultModel):
    year: int
    month: int
    target_salary: float
    taxable_income: float
    income_tax: float
    health_insurance: float
    total_tax_burden: float
    required_revenue: float
    actual_invoiced: float
    actual_expenses: float
    gap: float
    on_track: bool


class ReportClient(ResultModel):
    id: int
    name: str
    hourly_rate: float


class ReportPeriod(ResultModel):
    year: int
    month: int
    label: str
    start_date: str
    end_date: str


class ReportEntry(ResultModel):
    id: int
    worked_date: str
    hours: float
    amount: float
    note: Optional[str] = None


class GroupedEntry(ResultModel):
    worked_date: str
    hours: float
    amount: float
    notes: List[str]
    records: List[ReportEntry]


class ReportTotals(ResultModel):
    hours: float
    amount: float


class MonthlyReport(ResultModel):
    client: ReportClient
    period: ReportPeriod
    entries: List[ReportEntry]
    grouped_entries: List[GroupedEntry]
    totals: ReportTotals


class ClientHours(ResultModel):
    client_id: int
    client_name: str
    hours: float
    amount: float


class OverallHours(ResultModel):
    total_hours: float
    total_amount: float


class WorkedHoursSummary(ResultModel):
    summary: List[ClientHours]
    overall: OverallHours
