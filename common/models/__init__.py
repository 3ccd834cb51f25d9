"""Shared data models across modules."""

from .base import (
    CategoryRecord,
    Client,
    ExpenseRecord,
    InvoiceRecord,
    InvoiceStatus,
    SettingsSnapshot,
    WorkedHourEntry,
)
from .results import (
    AnnualLimitStatus,
    CategoryBreakdown,
    ChartPoint,
    DashboardSummary,
    ExpenseSummary,
    GroupedEntry,
    InvoiceSummary,
    MonthlyEstimate,
    MonthlyOverview,
    MonthlyReport,
    ReportEntry,
    WorkedHoursSummary,
)

__all__ = [
    'CategoryRecord', 'Client', 'ExpenseRecord', 'InvoiceRecord', 'InvoiceStatus',
    'SettingsSnapshot', 'WorkedHourEntry',
    'AnnualLimitStatus', 'CategoryBreakdown', 'ChartPoint', 'DashboardSummary',
    'ExpenseSummary', 'GroupedEntry', 'InvoiceSummary', 'MonthlyEstimate',
    'MonthlyOverview', 'MonthlyReport', 'ReportEntry', 'WorkedHoursSummary',
]
