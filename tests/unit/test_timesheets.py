#!/usr/bin/env python3
"""
Unit Tests for Timesheets - Worked Hours Logging & Monthly Report
"""

import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from common.errors import InvalidArgument, InvalidPeriod
from common.models import Client
from modules.timesheets.service import (
    build_monthly_report,
    entry_amount,
    log_worked_hours,
    summarize_worked_hours,
)
from tests.fixtures.finance import make_entry


@pytest.fixture
def acme(clients):
    return clients[0]


class TestLogWorkedHours:
    """Tests for creating entries."""

    def test_amount_cached_at_rate(self, acme):
        entry = log_worked_hours(acme, "2024-03-04", "2.5", note="Analisi", entry_id=7)
        assert entry.id == 7
        assert entry.client_id == acme.id
        assert entry.worked_date == date(2024, 3, 4)
        assert entry.hours == Decimal("2.5")
        assert entry.amount_cached == Decimal("125.00")

    def test_amount_rounded(self):
        client = Client(id=3, name="Gamma", hourly_rate=Decimal("33.33"))
        entry = log_worked_hours(client, date(2024, 3, 4), "0.25")
        assert entry.amount_cached == Decimal("8.33")

    def test_empty_note_dropped(self, acme):
        assert log_worked_hours(acme, "2024-03-04", 1, note="").note is None

    @pytest.mark.parametrize("hours", [0, -1])
    def test_hours_must_be_positive(self, acme, hours):
        with pytest.raises(InvalidArgument) as exc:
            log_worked_hours(acme, "2024-03-04", hours)
        assert exc.value.parameter == "hours"

    def test_bad_date(self, acme):
        with pytest.raises(InvalidArgument) as exc:
            log_worked_hours(acme, "04/03/2024", 1)
        assert exc.value.parameter == "worked_date"


class TestEntryAmount:

    def test_cached_wins(self):
        entry = make_entry(1, date(2024, 3, 4), "1", amount_cached="40.00")
        assert entry_amount(entry, 50) == Decimal("40.00")

    def test_recomputed_without_cache(self):
        entry = make_entry(1, date(2024, 3, 4), "1.5")
        assert entry_amount(entry, "62.5") == Decimal("93.75")


class TestMonthlyReport:
    """Tests for the grouped monthly report."""

    def test_grouping_by_day(self, acme):
        entries = [
            make_entry(1, date(2024, 3, 4), "2", "100.00", "Analisi"),
            make_entry(2, date(2024, 3, 4), "1.5", "75.00", "Call"),
            make_entry(3, date(2024, 3, 5), "3", "150.00"),
        ]
        report = build_monthly_report(acme, entries, 2024, 3)

        assert len(report.grouped_entries) == 2
        first, second = report.grouped_entries
        assert (first.worked_date, first.hours, first.amount) == ("2024-03-04", 3.5, 175.0)
        assert first.notes == ["Analisi", "Call"]
        assert [r.id for r in first.records] == [1, 2]
        assert (second.worked_date, second.hours, second.amount) == ("2024-03-05", 3.0, 150.0)
        assert second.notes == []
        assert report.totals.hours == 6.5
        assert report.totals.amount == 325.0

    def test_period_and_client(self, acme, worked_hours):
        report = build_monthly_report(acme, worked_hours, 2024, 3)
        assert report.client.name == "Acme Srl"
        assert report.client.hourly_rate == 50.0
        assert report.period.label == "marzo 2024"
        assert report.period.start_date == "2024-03-01"
        assert report.period.end_date == "2024-03-31"

    def test_other_months_and_clients_excluded(self, acme, worked_hours):
        report = build_monthly_report(acme, worked_hours, 2024, 3)
        assert [e.id for e in report.entries] == [1, 2, 3]

    def test_notes_trimmed_and_blank_skipped(self, acme):
        entries = [
            make_entry(1, date(2024, 3, 4), "1", note="  Call  "),
            make_entry(2, date(2024, 3, 4), "1", note="   "),
        ]
        report = build_monthly_report(acme, entries, 2024, 3)
        assert report.grouped_entries[0].notes == ["Call"]

    def test_groups_sorted_by_date(self, acme):
        entries = [
            make_entry(1, date(2024, 3, 20), "1"),
            make_entry(2, date(2024, 3, 2), "1"),
            make_entry(3, date(2024, 3, 20), "2"),
        ]
        report = build_monthly_report(acme, entries, 2024, 3)
        assert [g.worked_date for g in report.grouped_entries] == ["2024-03-02", "2024-03-20"]
        assert [r.id for r in report.grouped_entries[1].records] == [1, 3]

    def test_cached_and_recomputed_agree(self, acme):
        cached = [make_entry(1, date(2024, 3, 4), "1.25", "62.50")]
        raw = [make_entry(1, date(2024, 3, 4), "1.25")]
        assert build_monthly_report(acme, cached, 2024, 3).totals == build_monthly_report(acme, raw, 2024, 3).totals

    def test_leap_day_included(self, acme):
        report = build_monthly_report(acme, [make_entry(1, date(2024, 2, 29), "1")], 2024, 2)
        assert report.period.end_date == "2024-02-29"
        assert report.totals.hours == 1.0

    def test_empty_month(self, acme, worked_hours):
        report = build_monthly_report(acme, worked_hours, 2024, 7)
        assert report.entries == []
        assert report.grouped_entries == []
        assert report.totals.hours == 0
        assert report.totals.amount == 0

    def test_invalid_month(self, acme):
        with pytest.raises(InvalidPeriod):
            build_monthly_report(acme, [], 2024, 13)

    def test_invalid_year(self, acme):
        with pytest.raises(InvalidPeriod) as exc:
            build_monthly_report(acme, [], 10000, 3)
        assert exc.value.parameter == "year"


class TestWorkedHoursSummary:

    def test_per_client(self, clients, worked_hours):
        summary = summarize_worked_hours(clients, worked_hours, 2024, 3)
        assert [(c.client_name, c.hours, c.amount) for c in summary.summary] == [
            ("Acme Srl", 6.5, 325.0),
            ("Beta Spa", 4.0, 250.0),
        ]
        assert summary.overall.total_hours == 10.5
        assert summary.overall.total_amount == 575.0

    def test_unknown_client_entries_ignored(self, clients):
        entries = [make_entry(1, date(2024, 3, 4), "1", client_id=42)]
        summary = summarize_worked_hours(clients, entries, 2024, 3)
        assert summary.summary == []
        assert summary.overall.total_hours == 0
