"""Worked-hours report rendering.

Renderers lay out an already grouped and rounded ``MonthlyReport``; they
never aggregate or round anything themselves.
"""
import logging
import re
import subprocess
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from common.errors import RenderError
from common.models import MonthlyReport
from common.money import currency_symbol as symbol_for, format_amount

logger = logging.getLogger(__name__)

MODULE_DIR = Path(__file__).parent
TEMPLATES_DIR = MODULE_DIR / 'templates'
TEMPLATE_NAME = 'worked-hours-report.typ'


class ReportRenderer(ABC):
    """Turns a monthly report into a binary document."""

    @abstractmethod
    def render(self, report: MonthlyReport, currency_symbol: str, currency: str) -> bytes:
        """Render report, return document bytes."""
        pass


def _typst_string(value: str) -> str:
    escaped = value.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


def _hours(value: float) -> str:
    return f'{value:g}'.replace('.', ',')


class TypstReportRenderer(ReportRenderer):
    """Fills the Typst template and compiles it to PDF with the ``typst`` CLI."""

    def __init__(
        self,
        templates_dir: Path = None,
        fonts_dir: Optional[Path] = None,
        typst_binary: str = 'typst',
        normalize_currency_symbol: bool = False,
    ):
        self.templates_dir = Path(templates_dir or TEMPLATES_DIR)
        self.fonts_dir = Path(fonts_dir) if fonts_dir else None
        self.typst_binary = typst_binary
        self.normalize_currency_symbol = normalize_currency_symbol

    def resolve_symbol(self, currency_symbol: str, currency: str) -> str:
        """Configured symbol, or the canonical one for the currency code when normalizing."""
        if self.normalize_currency_symbol:
            return symbol_for(currency)
        return currency_symbol or symbol_for(currency)

    def build_source(self, report: MonthlyReport, currency_symbol: str, currency: str) -> str:
        """Typst source for the report."""
        template_path = self.templates_dir / TEMPLATE_NAME
        if not template_path.exists():
            raise FileNotFoundError(f"Template not found: {template_path}")

        symbol = self.resolve_symbol(currency_symbol, currency)
        rows = ",\n  ".join(
            "({}, {}, {}, {})".format(
                _typst_string(group.worked_date),
                _typst_string(_hours(group.hours)),
                _typst_string(format_amount(group.amount, symbol)),
                _typst_string('; '.join(group.notes) or '-'),
            )
            for group in report.grouped_entries
        )

        replacements = {
            'client_name': _typst_string(report.client.name),
            'hourly_rate': _typst_string(format_amount(report.client.hourly_rate, symbol)),
            'period': _typst_string(report.period.label),
            'period_range': _typst_string(f'{report.period.start_date} - {report.period.end_date}'),
            'total_hours': _typst_string(_hours(report.totals.hours)),
            'total_amount': _typst_string(format_amount(report.totals.amount, symbol)),
        }

        content = template_path.read_text(encoding='utf-8')
        for key, value in replacements.items():
            pattern = rf'#let {key} = "[^"]*"'
            content = re.sub(pattern, lambda _m, k=key, v=value: f'#let {k} = {v}', content)

        # Trailing comma keeps a single row a valid Typst array
        entries = f'#let entries = (\n  {rows},\n)' if rows else '#let entries = ()'
        content = re.sub(r'#let entries = \([\s\S]*?\n\)', lambda _m: entries, content)
        return content

    def render(self, report: MonthlyReport, currency_symbol: str, currency: str) -> bytes:
        source = self.build_source(report, currency_symbol, currency)

        with tempfile.TemporaryDirectory() as workdir:
            typ_file = Path(workdir) / 'report.typ'
            pdf_file = Path(workdir) / 'report.pdf'
            typ_file.write_text(source, encoding='utf-8')

            command = [self.typst_binary, 'compile']
            if self.fonts_dir:
                command += ['--font-path', str(self.fonts_dir)]
            command += [str(typ_file), str(pdf_file)]

            try:
                result = subprocess.run(command, capture_output=True, text=True)
            except FileNotFoundError:
                raise RenderError(f"Typst not installed ({self.typst_binary})")

            if result.returncode != 0:
                raise RenderError(f"Typst compilation failed: {result.stderr}")

            logger.info(f"Rendered report for {report.client.name} ({report.period.label})")
            return pdf_file.read_bytes()
