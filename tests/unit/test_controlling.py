#!/usr/bin/env python3
"""
Unit Tests for Controlling - Expense & Invoice Summaries, Dashboard

Sample data (tests/fixtures/finance.py), "today" is 2024-03-18:
    2024 expenses: 49.90 (Software), 1200.00 (Hardware), 150.00 (Formazione)
    2024 invoices: 4880 paid, 3050 sent (due Feb), 1220 sent
"""

import logging
import sys
from datetime import date
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from common.errors import InvalidArgument
from common.models import InvoiceStatus
from modules.controlling.service import (
    ControllingService,
    filter_expenses,
    summarize_expenses,
    summarize_invoices,
)
from tests.fixtures.finance import make_expense, make_invoice


class TestSummarizeExpenses:
    """Tests for expense totals and category breakdown."""

    def test_year_totals(self, expenses, categories):
        summary = summarize_expenses(
            expenses, categories, start_date=date(2024, 1, 1), end_date=date(2024, 12, 31),
        )
        assert summary.total_count == 3
        assert summary.total_amount == 1399.90

    def test_breakdown_sorted_by_total(self, expenses, categories):
        summary = summarize_expenses(
            expenses, categories, start_date=date(2024, 1, 1), end_date=date(2024, 12, 31),
        )
        names = [c.category_name for c in summary.by_category]
        assert names == ["Hardware", "Formazione", "Software"]
        assert [c.percentage for c in summary.by_category] == [85.7, 10.7, 3.6]
        assert summary.by_category[0].category_color == "#10b981"

    def test_percentages_close_to_100(self, expenses, categories):
        summary = summarize_expenses(expenses, categories)
        total = sum(c.percentage for c in summary.by_category)
        assert 99.9 < total <= 100.1

    def test_empty_input(self, categories):
        summary = summarize_expenses([], categories)
        assert summary.total_count == 0
        assert summary.total_amount == 0
        assert summary.by_category == []

    def test_categories_without_expenses_omitted(self, categories):
        summary = summarize_expenses([make_expense(amount="10", category_id=2)], categories)
        assert [c.category_id for c in summary.by_category] == [2]
        assert summary.by_category[0].percentage == 100.0

    def test_category_filter(self, expenses, categories):
        summary = summarize_expenses(expenses, categories, category_id=1)
        assert summary.total_count == 2
        assert summary.total_amount == 129.90

    def test_date_range_is_inclusive(self, expenses, categories):
        summary = summarize_expenses(
            expenses, categories, start_date=date(2024, 3, 2), end_date=date(2024, 3, 15),
        )
        assert summary.total_count == 2

    def test_reversed_range_rejected(self, expenses):
        with pytest.raises(InvalidArgument) as exc:
            filter_expenses(expenses, start_date=date(2024, 3, 2), end_date=date(2024, 3, 1))
        assert exc.value.parameter == "end_date"

    def test_unknown_category_counts_in_total_only(self, categories, caplog):
        rows = [make_expense(1, "10", 1), make_expense(2, "30", 99)]
        with caplog.at_level(logging.WARNING):
            summary = summarize_expenses(rows, categories)
        assert summary.total_amount == 40.0
        assert [c.category_id for c in summary.by_category] == [1]
        assert summary.by_category[0].percentage == 25.0
        assert "unknown categories" in caplog.text

    def test_sum_before_rounding(self, categories):
        rows = [make_expense(i, "0.005", 1) for i in range(3)]
        assert summarize_expenses(rows, categories).total_amount == 0.02


class TestSummarizeInvoices:
    """Tests for the payment-state buckets."""

    def test_buckets(self, invoices):
        summary = summarize_invoices(invoices)
        assert summary.total_invoices == 4
        assert summary.total_amount == 12150.0
        assert summary.total_paid == 7880.0
        assert summary.paid_count == 2
        assert summary.total_pending == 4270.0
        assert summary.pending_count == 2
        assert summary.total_overdue == 0
        assert summary.overdue_count == 0

    def test_drafts_only_in_total(self):
        summary = summarize_invoices([make_invoice(status=InvoiceStatus.DRAFT)])
        assert summary.total_invoices == 1
        assert summary.total_amount == 1220.0
        assert summary.total_paid == summary.total_pending == summary.total_overdue == 0

    def test_status_filter_accepts_string(self, invoices):
        summary = summarize_invoices(invoices, status="paid")
        assert summary.total_invoices == 2
        assert summary.total_amount == summary.total_paid

    def test_empty(self):
        summary = summarize_invoices([])
        assert summary.total_invoices == 0
        assert summary.total_amount == 0


class TestDashboardSummary:
    """Tests for ControllingService.get_dashboard_summary."""

    def test_year_summary(self, clock, invoices, expenses, categories):
        summary = ControllingService(clock).get_dashboard_summary(invoices, expenses, categories, 2024)
        assert summary.year == 2024
        assert summary.total_expenses == 3
        assert summary.total_amount == 1399.90
        assert summary.total_invoices == 3
        assert summary.total_invoiced == 9150.0
        assert summary.total_paid == 4880.0
        assert summary.total_pending == 4270.0
        assert summary.total_tax == 880.0
        assert summary.net == 7750.10

    def test_defaults_to_clock_year(self, clock, invoices, expenses, categories):
        summary = ControllingService(clock).get_dashboard_summary(invoices, expenses, categories)
        assert summary.year == 2024

    def test_previous_year(self, clock, invoices, expenses, categories):
        summary = ControllingService(clock).get_dashboard_summary(invoices, expenses, categories, 2023)
        assert summary.total_invoices == 1
        assert summary.total_invoiced == 3000.0
        assert summary.total_amount == 80.0
        assert summary.net == 2920.0

    def test_empty_year(self, clock, invoices, expenses, categories):
        summary = ControllingService(clock).get_dashboard_summary(invoices, expenses, categories, 2030)
        assert summary.total_invoices == 0
        assert summary.total_expenses == 0
        assert summary.by_category == []
        assert summary.net == 0

    def test_idempotent(self, clock, invoices, expenses, categories):
        service = ControllingService(clock)
        first = service.get_dashboard_summary(invoices, expenses, categories, 2024)
        second = service.get_dashboard_summary(invoices, expenses, categories, 2024)
        assert first == second


class TestMonthlyEstimate:
    """Tests for the current-month projection."""

    def test_current_month(self, clock, invoices, expenses):
        estimate = ControllingService(clock).get_monthly_estimate(invoices, expenses)
        assert estimate.month == "2024-03"
        assert estimate.total_income == 4000.0
        assert estimate.total_tax == 880.0
        assert estimate.total_expenses == 1249.90
        assert estimate.net_income == 1870.10
        assert estimate.invoice_count == 1
        assert estimate.expense_count == 2

    def test_unpaid_invoices_ignored(self, clock):
        estimate = ControllingService(clock).get_monthly_estimate([make_invoice()], [])
        assert estimate.total_income == 0
        assert estimate.invoice_count == 0

    def test_month_with_nothing(self, invoices, expenses):
        estimate = ControllingService(lambda: date(2025, 6, 1)).get_monthly_estimate(invoices, expenses)
        assert estimate.month == "2025-06"
        assert estimate.net_income == 0
