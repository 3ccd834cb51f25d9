"""Controlling service.

Expense and invoice aggregation for the dashboard. All functions take
already-fetched rows and return fresh result records.
"""
import logging
from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from common.errors import InvalidArgument
from common.models import (
    CategoryBreakdown,
    CategoryRecord,
    DashboardSummary,
    ExpenseRecord,
    ExpenseSummary,
    InvoiceRecord,
    InvoiceStatus,
    InvoiceSummary,
    MonthlyEstimate,
)
from common.money import ZERO, calculate_net_income, percentage, round2, to_decimal
from common.periods import in_range, month_bounds, month_label, year_bounds

logger = logging.getLogger(__name__)

Clock = Callable[[], date]


def filter_expenses(
    rows: Iterable[ExpenseRecord],
    category_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[ExpenseRecord]:
    """Expenses matching an optional category and inclusive date range."""
    if start_date is not None and end_date is not None and end_date < start_date:
        raise InvalidArgument('end_date must not be before start_date', 'end_date')
    return [
        e for e in rows
        if (category_id is None or e.category_id == category_id)
        and in_range(e.expense_date, start_date, end_date)
    ]


def breakdown_by_category(
    expenses: Sequence[ExpenseRecord],
    categories: Iterable[CategoryRecord],
    grand_total: Decimal,
) -> List[CategoryBreakdown]:
    """Per-category totals, largest first. Categories without expenses are left out."""
    known = {c.id: c for c in categories}
    totals: Dict[int, Decimal] = OrderedDict()
    counts: Dict[int, int] = {}
    orphans = 0

    for expense in expenses:
        if expense.category_id not in known:
            orphans += 1
            continue
        totals[expense.category_id] = totals.get(expense.category_id, ZERO) + to_decimal(expense.amount)
        counts[expense.category_id] = counts.get(expense.category_id, 0) + 1

    if orphans:
        logger.warning(f"{orphans} expense(s) reference unknown categories, left out of breakdown")

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [
        CategoryBreakdown(
            category_id=category_id,
            category_name=known[category_id].name,
            category_color=known[category_id].color,
            total_amount=float(round2(total)),
            expense_count=counts[category_id],
            percentage=float(percentage(total, grand_total)),
        )
        for category_id, total in ranked
    ]


def summarize_expenses(
    rows: Iterable[ExpenseRecord],
    categories: Iterable[CategoryRecord],
    category_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> ExpenseSummary:
    """Totals and category breakdown for the matching expenses."""
    matching = filter_expenses(rows, category_id, start_date, end_date)
    grand_total = sum((to_decimal(e.amount) for e in matching), ZERO)

    return ExpenseSummary(
        total_count=len(matching),
        total_amount=float(round2(grand_total)),
        by_category=breakdown_by_category(matching, categories, grand_total),
    )


def summarize_invoices(
    rows: Iterable[InvoiceRecord],
    status: Optional[InvoiceStatus] = None,
) -> InvoiceSummary:
    """Counts and sums of ``total_amount`` split by payment state.

    Paid, sent (pending) and overdue invoices land in their own bucket;
    drafts only count towards ``total_amount``.
    """
    if status is not None and not isinstance(status, InvoiceStatus):
        status = InvoiceStatus(status)
    invoices = [i for i in rows if status is None or i.status is status]

    buckets = {
        InvoiceStatus.PAID: [],
        InvoiceStatus.SENT: [],
        InvoiceStatus.OVERDUE: [],
    }
    for invoice in invoices:
        if invoice.status in buckets:
            buckets[invoice.status].append(to_decimal(invoice.total_amount))

    def total(values):
        return float(round2(sum(values, ZERO)))

    return InvoiceSummary(
        total_invoices=len(invoices),
        total_amount=total(to_decimal(i.total_amount) for i in invoices),
        total_paid=total(buckets[InvoiceStatus.PAID]),
        total_pending=total(buckets[InvoiceStatus.SENT]),
        total_overdue=total(buckets[InvoiceStatus.OVERDUE]),
        paid_count=len(buckets[InvoiceStatus.PAID]),
        pending_count=len(buckets[InvoiceStatus.SENT]),
        overdue_count=len(buckets[InvoiceStatus.OVERDUE]),
    )


def invoices_issued_between(rows: Iterable[InvoiceRecord], start: date, end: date) -> List[InvoiceRecord]:
    return [i for i in rows if in_range(i.issue_date, start, end)]


class ControllingService:
    """Dashboard aggregations that depend on the current date."""

    def __init__(self, clock: Clock = date.today):
        self.clock = clock

    def get_dashboard_summary(
        self,
        invoices: Iterable[InvoiceRecord],
        expenses: Iterable[ExpenseRecord],
        categories: Iterable[CategoryRecord],
        year: Optional[int] = None,
    ) -> DashboardSummary:
        """Invoice and expense summary for one calendar year (default: this year)."""
        if year is None:
            year = self.clock().year
        period = year_bounds(year)

        year_invoices = invoices_issued_between(invoices, period.start_date, period.end_date)
        invoice_summary = summarize_invoices(year_invoices)
        expense_summary = summarize_expenses(
            expenses, categories, start_date=period.start_date, end_date=period.end_date,
        )
        total_tax = sum(
            (to_decimal(i.tax_amount) for i in year_invoices if i.is_paid), ZERO,
        )
        net = round2(to_decimal(invoice_summary.total_amount) - to_decimal(expense_summary.total_amount))

        logger.debug(
            f"Dashboard {year}: {invoice_summary.total_invoices} invoices, "
            f"{expense_summary.total_count} expenses"
        )
        return DashboardSummary(
            year=year,
            total_expenses=expense_summary.total_count,
            total_amount=expense_summary.total_amount,
            by_category=expense_summary.by_category,
            total_invoices=invoice_summary.total_invoices,
            total_invoiced=invoice_summary.total_amount,
            total_paid=invoice_summary.total_paid,
            total_pending=invoice_summary.total_pending,
            total_overdue=invoice_summary.total_overdue,
            total_tax=float(round2(total_tax)),
            net=float(net),
        )

    def get_monthly_estimate(
        self,
        invoices: Iterable[InvoiceRecord],
        expenses: Iterable[ExpenseRecord],
    ) -> MonthlyEstimate:
        """How the current month is going: paid income minus expenses and tax."""
        today = self.clock()
        period = month_bounds(today.year, today.month)

        paid = [
            i for i in invoices
            if i.is_paid and period.contains(i.paid_date)
        ]
        month_expenses = filter_expenses(expenses, start_date=period.start_date, end_date=period.end_date)

        income = sum((to_decimal(i.amount) for i in paid), ZERO)
        tax = sum((to_decimal(i.tax_amount) for i in paid), ZERO)
        spent = sum((to_decimal(e.amount) for e in month_expenses), ZERO)

        return MonthlyEstimate(
            month=month_label(today.year, today.month),
            total_income=float(round2(income)),
            total_expenses=float(round2(spent)),
            total_tax=float(round2(tax)),
            net_income=float(calculate_net_income(income, spent, tax)),
            invoice_count=len(paid),
            expense_count=len(month_expenses),
        )
