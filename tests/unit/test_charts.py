#!/usr/bin/env python3
"""
Unit Tests for Dashboard Chart Series
"""

import sys
from datetime import date
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from common.errors import InvalidArgument
from modules.controlling.charts import build_category_pie, build_income_expense_series


class TestIncomeExpenseSeries:
    """Tests for the monthly income vs expense series."""

    def test_six_month_window(self, invoices, expenses, today):
        series = build_income_expense_series(invoices, expenses, months=6, today=today)
        assert [p.label for p in series] == [
            "2023-10", "2023-11", "2023-12", "2024-01", "2024-02", "2024-03",
        ]
        assert [p.income for p in series] == [0, 3000.0, 0, 0, 0, 4000.0]
        assert [p.expense for p in series] == [0, 0, 80.0, 150.0, 0, 1249.90]

    def test_empty_months_are_zero_filled(self, today):
        series = build_income_expense_series([], [], months=3, today=today)
        assert len(series) == 3
        assert all(p.income == 0 and p.expense == 0 for p in series)

    def test_year_gives_twelve_months(self, invoices, expenses, today):
        series = build_income_expense_series(invoices, expenses, year=2024, today=today)
        assert len(series) == 12
        assert series[0].label == "2024-01"
        assert series[-1].label == "2024-12"
        assert series[2].income == 4000.0

    def test_income_is_pre_tax_by_paid_month(self, invoices, expenses, today):
        # Invoice 1: 4000 + 880 VAT, issued and paid in March
        series = build_income_expense_series(invoices, expenses, months=1, today=today)
        assert series[0].income == 4000.0

    @pytest.mark.parametrize("months", [0, 25, -3])
    def test_months_out_of_range(self, months, today):
        with pytest.raises(InvalidArgument) as exc:
            build_income_expense_series([], [], months=months, today=today)
        assert exc.value.parameter == "months"

    def test_max_window(self, today):
        assert len(build_income_expense_series([], [], months=24, today=today)) == 24

    def test_window_follows_given_today(self):
        series = build_income_expense_series([], [], months=2, today=date(2025, 1, 5))
        assert [p.label for p in series] == ["2024-12", "2025-01"]

    def test_today_is_required(self):
        with pytest.raises(TypeError):
            build_income_expense_series([], [], months=2)


class TestCategoryPie:

    def test_all_time(self, expenses, categories):
        pie = build_category_pie(expenses, categories)
        assert pie[0].category_name == "Hardware"
        assert sum(c.expense_count for c in pie) == 4

    def test_for_year(self, expenses, categories):
        pie = build_category_pie(expenses, categories, 2023)
        assert len(pie) == 1
        assert pie[0].category_name == "Software"
        assert pie[0].percentage == 100.0
