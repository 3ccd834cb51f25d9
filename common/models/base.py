"""Input records.

Immutable rows handed to the engine by the data-access layer. ``from_dict``
accepts the raw mapping shape (ISO date strings, numeric strings).
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..errors import InvalidArgument
from ..money import calculate_tax, calculate_total, round2, to_decimal
from ..periods import parse_iso_date, parse_optional_date


class InvoiceStatus(Enum):
    DRAFT = 'draft'
    SENT = 'sent'            # Inviata, in attesa di pagamento
    PAID = 'paid'
    OVERDUE = 'overdue'      # Scaduta


def _status(value: Any) -> InvoiceStatus:
    if isinstance(value, InvoiceStatus):
        return value
    try:
        return InvoiceStatus(value)
    except ValueError:
        raise InvalidArgument(f'Unknown invoice status: {value!r}', 'status')


@dataclass(frozen=True)
class CategoryRecord:
    """Expense category."""
    id: int
    name: str
    color: str = '#6b7280'
    type: str = 'expense'

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> 'CategoryRecord':
        return cls(
            id=row['id'],
            name=row['name'],
            color=row.get('color') or '#6b7280',
            type=row.get('type') or 'expense',
        )


@dataclass(frozen=True)
class ExpenseRecord:
    """Business expense."""
    id: int
    amount: Decimal
    category_id: int
    expense_date: date
    description: Optional[str] = None
    notes: Optional[str] = None

    def __post_init__(self):
        if to_decimal(self.amount) < 0:
            raise InvalidArgument(f'Expense {self.id}: amount must not be negative', 'amount')

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> 'ExpenseRecord':
        return cls(
            id=row['id'],
            amount=to_decimal(row['amount']),
            category_id=row['category_id'],
            expense_date=parse_iso_date(row['expense_date'], 'expense_date'),
            description=row.get('description'),
            notes=row.get('notes'),
        )


@dataclass(frozen=True)
class InvoiceRecord:
    """Issued invoice. ``amount`` is the pre-tax base."""
    id: int
    amount: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    status: InvoiceStatus
    issue_date: date
    due_date: date
    paid_date: Optional[date] = None
    invoice_number: Optional[str] = None
    client_name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.status, InvoiceStatus):
            raise InvalidArgument(f'Invoice {self.id}: unknown status {self.status!r}', 'status')
        for name in ('issue_date', 'due_date'):
            if not isinstance(getattr(self, name), date):
                raise InvalidArgument(f'Invoice {self.id}: {name} must be a date', name)
        if to_decimal(self.amount) < 0:
            raise InvalidArgument(f'Invoice {self.id}: amount must not be negative', 'amount')
        if round2(self.total_amount) != round2(to_decimal(self.amount) + to_decimal(self.tax_amount)):
            raise InvalidArgument(
                f'Invoice {self.id}: total_amount must equal amount + tax_amount',
                'total_amount',
            )
        if (self.status is InvoiceStatus.PAID) != (self.paid_date is not None):
            raise InvalidArgument(
                f'Invoice {self.id}: paid_date must be set exactly when status is paid',
                'paid_date',
            )

    @property
    def is_paid(self) -> bool:
        return self.status is InvoiceStatus.PAID

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> 'InvoiceRecord':
        amount = to_decimal(row['amount'])
        tax_rate = to_decimal(row.get('tax_rate', 0))
        # Rows written by older tools may lack the derived columns
        tax_amount = row.get('tax_amount')
        tax_amount = calculate_tax(amount, tax_rate) if tax_amount is None else to_decimal(tax_amount)
        total_amount = row.get('total_amount')
        total_amount = calculate_total(amount, tax_amount) if total_amount is None else to_decimal(total_amount)
        return cls(
            id=row['id'],
            amount=amount,
            tax_rate=tax_rate,
            tax_amount=tax_amount,
            total_amount=total_amount,
            status=_status(row.get('status', 'draft')),
            issue_date=parse_iso_date(row['issue_date'], 'issue_date'),
            due_date=parse_iso_date(row['due_date'], 'due_date'),
            paid_date=parse_optional_date(row.get('paid_date'), 'paid_date'),
            invoice_number=row.get('invoice_number'),
            client_name=row.get('client_name'),
            description=row.get('description'),
        )


@dataclass(frozen=True)
class Client:
    """Cliente con tariffa oraria."""
    id: int
    name: str
    hourly_rate: Decimal
    notes: Optional[str] = None

    def __post_init__(self):
        if to_decimal(self.hourly_rate) <= 0:
            raise InvalidArgument(f'Client {self.id}: hourly_rate must be positive', 'hourly_rate')

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> 'Client':
        return cls(
            id=row['id'],
            name=row['name'],
            hourly_rate=to_decimal(row['hourly_rate']),
            notes=row.get('notes'),
        )


@dataclass(frozen=True)
class WorkedHourEntry:
    """Hours logged for a client on one day.

    ``amount_cached`` is ``round2(hours * hourly_rate)`` as stored at logging time.
    """
    id: int
    client_id: int
    worked_date: date
    hours: Decimal
    amount_cached: Optional[Decimal] = None
    note: Optional[str] = None

    def __post_init__(self):
        if to_decimal(self.hours) <= 0:
            raise InvalidArgument(f'Worked-hours entry {self.id}: hours must be positive', 'hours')

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> 'WorkedHourEntry':
        cached = row.get('amount_cached')
        return cls(
            id=row['id'],
            client_id=row['client_id'],
            worked_date=parse_iso_date(row['worked_date'], 'worked_date'),
            hours=to_decimal(row['hours']),
            amount_cached=None if cached is None else to_decimal(cached),
            note=row.get('note'),
        )


class SettingsSnapshot(BaseModel):
    """Read-only settings passed by value into calculators."""
    model_config = ConfigDict(frozen=True)

    default_vat_rate: float = Field(default=22, ge=0, le=100)
    currency: str = 'EUR'
    currency_symbol: str = '€'
    target_salary: float = Field(default=3000, ge=0, description='Stipendio mensile desiderato')
    taxable_percentage: float = Field(default=76, gt=0, le=100, description='Coefficiente di redditività')
    income_tax_rate: float = Field(default=15, ge=0, le=100, description='Imposta sostitutiva')
    health_insurance_rate: float = Field(default=27, ge=0, le=100, description='Contributi INPS')
