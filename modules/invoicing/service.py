#!/usr/bin/env python3
"""
INVOICING SERVICE
=================
Invoice derivation: tax and total from the pre-tax amount, partial
updates and status transitions. Records are immutable, every operation
returns a new one.

Usage:
  from modules.invoicing.service import build_invoice

  invoice = build_invoice(
      invoice_id=1,
      invoice_number="INV-2024-001",
      amount=1000,
      tax_rate=22,
      issue_date="2024-03-01",
      due_date="2024-03-31",
  )
  invoice.total_amount  # Decimal('1220.00')
"""

import dataclasses
import logging
from datetime import date
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel

from common.errors import InvalidArgument
from common.models import InvoiceRecord, InvoiceStatus, SettingsSnapshot
from common.money import calculate_tax, calculate_total, to_decimal
from common.periods import parse_iso_date, parse_optional_date

logger = logging.getLogger(__name__)

# Statuses that turn overdue once the due date has passed
OPEN_STATUSES = (InvoiceStatus.DRAFT, InvoiceStatus.SENT)

# Only paid_date and the free-text fields may be set back to None
REQUIRED_FIELDS = ('amount', 'tax_rate', 'status', 'issue_date', 'due_date')


class InvoiceUpdate(BaseModel):
    """Partial update. Only fields that were explicitly set are applied."""
    invoice_number: Optional[str] = None
    client_name: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[float] = None
    tax_rate: Optional[float] = None
    status: Optional[InvoiceStatus] = None
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    paid_date: Optional[date] = None


def build_invoice(
    invoice_id: int,
    amount,
    issue_date,
    due_date,
    tax_rate=None,
    invoice_number: Optional[str] = None,
    client_name: Optional[str] = None,
    description: Optional[str] = None,
    status: InvoiceStatus = InvoiceStatus.DRAFT,
    paid_date=None,
    settings: Optional[SettingsSnapshot] = None,
) -> InvoiceRecord:
    """
    Create an invoice record with derived tax and total.

    Args:
        amount: Pre-tax amount
        tax_rate: VAT percentage; defaults to the settings' default_vat_rate
        status: Initial status (default: draft)

    Returns:
        InvoiceRecord with tax_amount = round2(amount * tax_rate / 100)
    """
    if tax_rate is None:
        tax_rate = (settings or SettingsSnapshot()).default_vat_rate
    amount = to_decimal(amount)
    if amount <= 0:
        raise InvalidArgument('Amount must be greater than 0', 'amount')
    tax_rate = to_decimal(tax_rate)
    tax_amount = calculate_tax(amount, tax_rate)

    return InvoiceRecord(
        id=invoice_id,
        amount=amount,
        tax_rate=tax_rate,
        tax_amount=tax_amount,
        total_amount=calculate_total(amount, tax_amount),
        status=InvoiceStatus(status),
        issue_date=parse_iso_date(issue_date, 'issue_date'),
        due_date=parse_iso_date(due_date, 'due_date'),
        paid_date=parse_optional_date(paid_date, 'paid_date'),
        invoice_number=invoice_number,
        client_name=client_name,
        description=description,
    )


def apply_update(invoice: InvoiceRecord, update: InvoiceUpdate) -> InvoiceRecord:
    """New record with the set fields applied; tax and total follow amount and rate."""
    changes = update.model_dump(exclude_unset=True)
    if not changes:
        return invoice

    for field in REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            raise InvalidArgument(f'{field} cannot be cleared', field)

    if 'amount' in changes:
        changes['amount'] = to_decimal(changes['amount'])
        if changes['amount'] <= 0:
            raise InvalidArgument('Amount must be greater than 0', 'amount')
    if 'tax_rate' in changes:
        changes['tax_rate'] = to_decimal(changes['tax_rate'])

    if 'amount' in changes or 'tax_rate' in changes:
        amount = changes.get('amount', invoice.amount)
        tax_amount = calculate_tax(amount, changes.get('tax_rate', invoice.tax_rate))
        changes['tax_amount'] = tax_amount
        changes['total_amount'] = calculate_total(amount, tax_amount)

    return dataclasses.replace(invoice, **changes)


def mark_paid(invoice: InvoiceRecord, paid_date) -> InvoiceRecord:
    return dataclasses.replace(
        invoice,
        status=InvoiceStatus.PAID,
        paid_date=parse_iso_date(paid_date, 'paid_date'),
    )


def mark_overdue(invoices: Iterable[InvoiceRecord], today: date) -> Tuple[List[InvoiceRecord], int]:
    """Flag unpaid draft/sent invoices past their due date.

    Returns:
        (invoices, number of invoices that changed status)
    """
    result = []
    changed = 0
    for invoice in invoices:
        if invoice.status in OPEN_STATUSES and invoice.paid_date is None and invoice.due_date < today:
            invoice = dataclasses.replace(invoice, status=InvoiceStatus.OVERDUE)
            changed += 1
        result.append(invoice)
    if changed:
        logger.info(f"Marked {changed} invoice(s) overdue")
    return result, changed
