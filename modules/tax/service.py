"""Tax service.

Regime forfettario projections: the annual revenue ceiling and the
monthly "how much do I have to invoice" overview.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from common.errors import InvalidArgument
from common.models import (
    AnnualLimitStatus,
    ExpenseRecord,
    InvoiceRecord,
    MonthlyOverview,
    SettingsSnapshot,
)
from common.money import HUNDRED, ZERO, round1, round2, to_decimal
from common.periods import month_bounds, year_bounds

from modules.controlling.service import filter_expenses, invoices_issued_between, summarize_invoices

logger = logging.getLogger(__name__)

# Ceiling above which the flat-tax regime no longer applies
ANNUAL_REVENUE_LIMIT = Decimal('85000')
WARNING_THRESHOLD = Decimal('80')

MIN_YEAR = 2000
MAX_YEAR = 2100

STATUS_SAFE = 'safe'
STATUS_WARNING = 'warning'
STATUS_EXCEEDED = 'exceeded'


def limit_status(percentage_used: Decimal) -> str:
    """Band for the unrounded share of the ceiling; exactly 100% is still a warning."""
    if percentage_used > HUNDRED:
        return STATUS_EXCEEDED
    if percentage_used >= WARNING_THRESHOLD:
        return STATUS_WARNING
    return STATUS_SAFE


def _check_rate(value, name: str) -> Decimal:
    rate = to_decimal(value)
    if not ZERO <= rate <= HUNDRED:
        raise InvalidArgument(f'{name} must be between 0 and 100', name)
    return rate


def validate_overview_params(year, month, target_salary, taxable_percentage, income_tax_rate, health_insurance_rate):
    """Raise ``InvalidArgument`` naming the first offending parameter."""
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidArgument(f'year must be between {MIN_YEAR} and {MAX_YEAR}', 'year')
    if not 1 <= month <= 12:
        raise InvalidArgument('month must be between 1 and 12', 'month')
    if to_decimal(target_salary) < 0:
        raise InvalidArgument('target_salary must not be negative', 'target_salary')
    taxable = _check_rate(taxable_percentage, 'taxable_percentage')
    if taxable == 0:
        raise InvalidArgument('taxable_percentage must be greater than 0', 'taxable_percentage')
    _check_rate(income_tax_rate, 'income_tax_rate')
    _check_rate(health_insurance_rate, 'health_insurance_rate')


class TaxService:
    """Service for tax-related projections."""

    def __init__(self, clock: Callable[[], date] = date.today):
        self.clock = clock

    def get_annual_revenue_limit(
        self,
        invoices: Iterable[InvoiceRecord],
        year: Optional[int] = None,
    ) -> AnnualLimitStatus:
        """Revenue invoiced in ``year`` against the 85,000 ceiling.

        Every invoice issued in the year counts, whatever its status.
        """
        if year is None:
            year = self.clock().year
        period = year_bounds(year)

        issued = invoices_issued_between(invoices, period.start_date, period.end_date)
        total = sum((to_decimal(i.amount) for i in issued), ZERO)
        used = total / ANNUAL_REVENUE_LIMIT * HUNDRED

        return AnnualLimitStatus(
            year=year,
            total_invoiced=float(round2(total)),
            limit=float(ANNUAL_REVENUE_LIMIT),
            remaining=float(round2(max(ZERO, ANNUAL_REVENUE_LIMIT - total))),
            percentage_used=float(round1(used)),
            status=limit_status(used),
        )

    def get_monthly_overview(
        self,
        invoices: Iterable[InvoiceRecord],
        expenses: Iterable[ExpenseRecord],
        year: int,
        month: int,
        target_salary,
        taxable_percentage,
        income_tax_rate,
        health_insurance_rate,
    ) -> MonthlyOverview:
        """Revenue needed this month to take home ``target_salary``.

        The target is grossed up by the taxable share; income tax and
        health insurance are both levied on the taxable portion of that
        figure and added on top:

            taxable_income   = target_salary / (taxable_percentage / 100)
            income_tax       = taxable_income * tp% * income_tax_rate%
            health_insurance = taxable_income * tp% * health_insurance_rate%
            required_revenue = taxable_income + income_tax + health_insurance
        """
        validate_overview_params(
            year, month, target_salary, taxable_percentage, income_tax_rate, health_insurance_rate,
        )
        taxable_share = to_decimal(taxable_percentage) / HUNDRED

        taxable_income = to_decimal(target_salary) / taxable_share
        taxed_base = taxable_income * taxable_share
        income_tax = round2(taxed_base * to_decimal(income_tax_rate) / HUNDRED)
        health_insurance = round2(taxed_base * to_decimal(health_insurance_rate) / HUNDRED)
        required_revenue = round2(taxable_income + income_tax + health_insurance)

        period = month_bounds(year, month)
        invoiced = to_decimal(
            summarize_invoices(invoices_issued_between(invoices, period.start_date, period.end_date)).total_amount
        )
        month_expenses = filter_expenses(expenses, start_date=period.start_date, end_date=period.end_date)
        spent = round2(sum((to_decimal(e.amount) for e in month_expenses), ZERO))

        logger.debug(f"Overview {year}-{month:02d}: required {required_revenue}, invoiced {invoiced}")
        return MonthlyOverview(
            year=year,
            month=month,
            target_salary=float(round2(target_salary)),
            taxable_income=float(round2(taxable_income)),
            income_tax=float(income_tax),
            health_insurance=float(health_insurance),
            total_tax_burden=float(income_tax + health_insurance),
            required_revenue=float(required_revenue),
            actual_invoiced=float(invoiced),
            actual_expenses=float(spent),
            gap=float(round2(required_revenue - invoiced)),
            on_track=invoiced >= required_revenue,
        )

    def overview_from_settings(
        self,
        invoices: Iterable[InvoiceRecord],
        expenses: Iterable[ExpenseRecord],
        settings: SettingsSnapshot,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> MonthlyOverview:
        """Monthly overview with tax parameters taken from settings."""
        today = self.clock()
        return self.get_monthly_overview(
            invoices,
            expenses,
            year if year is not None else today.year,
            month if month is not None else today.month,
            settings.target_salary,
            settings.taxable_percentage,
            settings.income_tax_rate,
            settings.health_insurance_rate,
        )
