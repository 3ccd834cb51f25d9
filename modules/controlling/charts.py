"""Chart series for the dashboard."""
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from common.errors import InvalidArgument
from common.models import CategoryBreakdown, CategoryRecord, ChartPoint, ExpenseRecord, InvoiceRecord
from common.money import ZERO, round2, to_decimal
from common.periods import YearMonth, month_label, months_back, year_bounds

from .service import summarize_expenses

MAX_CHART_MONTHS = 24


def _monthly_totals(pairs) -> Dict[str, Decimal]:
    totals: Dict[str, Decimal] = {}
    for day, amount in pairs:
        key = month_label(day.year, day.month)
        totals[key] = totals.get(key, ZERO) + to_decimal(amount)
    return totals


def build_income_expense_series(
    invoices: Iterable[InvoiceRecord],
    expenses: Iterable[ExpenseRecord],
    months: int = 6,
    year: Optional[int] = None,
    *,
    today: date,
) -> List[ChartPoint]:
    """Income vs expenses per month, oldest first, with empty months as zeros.

    Without ``year`` the window is the ``months`` months ending at the
    month of ``today``; with ``year`` it is January to December of that year.
    Income is the pre-tax ``amount`` of invoices, by the month they were paid.
    """
    if not 1 <= months <= MAX_CHART_MONTHS:
        raise InvalidArgument(f'Months must be between 1 and {MAX_CHART_MONTHS}', 'months')

    if year is not None:
        window = [YearMonth(year, m) for m in range(1, 13)]
    else:
        window = months_back(months, today)

    income = _monthly_totals((i.paid_date, i.amount) for i in invoices if i.is_paid)
    spent = _monthly_totals((e.expense_date, e.amount) for e in expenses)

    return [
        ChartPoint(
            label=ym.label,
            income=float(round2(income.get(ym.label, ZERO))),
            expense=float(round2(spent.get(ym.label, ZERO))),
        )
        for ym in window
    ]


def build_category_pie(
    expenses: Iterable[ExpenseRecord],
    categories: Iterable[CategoryRecord],
    year: Optional[int] = None,
) -> List[CategoryBreakdown]:
    """Expense share per category, optionally for one calendar year."""
    if year is None:
        return summarize_expenses(expenses, categories).by_category
    period = year_bounds(year)
    return summarize_expenses(
        expenses, categories, start_date=period.start_date, end_date=period.end_date,
    ).by_category
