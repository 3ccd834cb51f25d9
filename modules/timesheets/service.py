#!/usr/bin/env python3
"""
TIMESHEET SERVICE
=================
Worked-hours logging and the monthly per-client report.

The report groups entries by day and does all the rounding; the PDF
renderer only lays out what it gets.
"""

import logging
from collections import OrderedDict
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from common.models import (
    Client,
    GroupedEntry,
    MonthlyReport,
    ReportEntry,
    WorkedHourEntry,
    WorkedHoursSummary,
)
from common.models.results import ClientHours, OverallHours, ReportClient, ReportPeriod, ReportTotals
from common.money import ZERO, round2, to_decimal
from common.periods import format_iso, italian_month_label, month_bounds, parse_iso_date

logger = logging.getLogger(__name__)


def entry_amount(entry: WorkedHourEntry, hourly_rate) -> Decimal:
    """Stored amount when present, otherwise hours x rate rounded the same way."""
    if entry.amount_cached is not None:
        return to_decimal(entry.amount_cached)
    return round2(to_decimal(entry.hours) * to_decimal(hourly_rate))


def log_worked_hours(
    client: Client,
    worked_date,
    hours,
    note: Optional[str] = None,
    entry_id: int = 0,
) -> WorkedHourEntry:
    """New entry with its amount cached at the client's current rate."""
    hours = to_decimal(hours)
    return WorkedHourEntry(
        id=entry_id,
        client_id=client.id,
        worked_date=parse_iso_date(worked_date, 'worked_date'),
        hours=hours,
        amount_cached=round2(hours * to_decimal(client.hourly_rate)),
        note=note or None,
    )


def group_entries_by_day(entries: List[ReportEntry]) -> List[GroupedEntry]:
    """One group per worked_date, in date order; notes keep arrival order."""
    groups: Dict[str, dict] = OrderedDict()

    for entry in entries:
        group = groups.setdefault(entry.worked_date, {
            'hours': ZERO,
            'amount': ZERO,
            'notes': [],
            'records': [],
        })
        group['hours'] += to_decimal(entry.hours)
        group['amount'] += to_decimal(entry.amount)
        if entry.note and entry.note.strip():
            group['notes'].append(entry.note.strip())
        group['records'].append(entry)

    return [
        GroupedEntry(
            worked_date=day,
            hours=float(round2(group['hours'])),
            amount=float(round2(group['amount'])),
            notes=group['notes'],
            records=group['records'],
        )
        for day, group in sorted(groups.items())
    ]


def build_monthly_report(
    client: Client,
    entries: Iterable[WorkedHourEntry],
    year: int,
    month: int,
) -> MonthlyReport:
    """Monthly worked-hours report for one client."""
    period = month_bounds(year, month)

    # sorted() is stable: same-day entries keep their arrival order
    selected = sorted(
        (e for e in entries if e.client_id == client.id and period.contains(e.worked_date)),
        key=lambda e: e.worked_date,
    )
    report_entries = [
        ReportEntry(
            id=e.id,
            worked_date=format_iso(e.worked_date),
            hours=float(to_decimal(e.hours)),
            amount=float(entry_amount(e, client.hourly_rate)),
            note=e.note,
        )
        for e in selected
    ]
    grouped = group_entries_by_day(report_entries)

    total_hours = sum((to_decimal(g.hours) for g in grouped), ZERO)
    total_amount = sum((to_decimal(g.amount) for g in grouped), ZERO)

    logger.info(
        f"Report {client.name} {year}-{month:02d}: "
        f"{len(report_entries)} entries on {len(grouped)} days"
    )
    return MonthlyReport(
        client=ReportClient(id=client.id, name=client.name, hourly_rate=float(client.hourly_rate)),
        period=ReportPeriod(
            year=year,
            month=month,
            label=italian_month_label(year, month),
            start_date=format_iso(period.start_date),
            end_date=format_iso(period.end_date),
        ),
        entries=report_entries,
        grouped_entries=grouped,
        totals=ReportTotals(hours=float(round2(total_hours)), amount=float(round2(total_amount))),
    )


def summarize_worked_hours(
    clients: Iterable[Client],
    entries: Iterable[WorkedHourEntry],
    year: int,
    month: int,
) -> WorkedHoursSummary:
    """Hours and amounts per client for a month, plus the overall totals."""
    period = month_bounds(year, month)
    by_id = {c.id: c for c in clients}
    hours: Dict[int, Decimal] = {}
    amounts: Dict[int, Decimal] = {}

    for entry in entries:
        client = by_id.get(entry.client_id)
        if client is None or not period.contains(entry.worked_date):
            continue
        hours[client.id] = hours.get(client.id, ZERO) + to_decimal(entry.hours)
        amounts[client.id] = amounts.get(client.id, ZERO) + entry_amount(entry, client.hourly_rate)

    summary = [
        ClientHours(
            client_id=client_id,
            client_name=by_id[client_id].name,
            hours=float(round2(hours[client_id])),
            amount=float(round2(amounts[client_id])),
        )
        for client_id in sorted(hours, key=lambda cid: by_id[cid].name)
    ]
    return WorkedHoursSummary(
        summary=summary,
        overall=OverallHours(
            total_hours=float(round2(sum(hours.values(), ZERO))),
            total_amount=float(round2(sum(amounts.values(), ZERO))),
        ),
    )
