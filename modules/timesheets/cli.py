"""Timesheet CLI."""
import argparse
from datetime import date
from pathlib import Path

from common.cli import dump, fail, open_store, setup_logging
from common.config import get_config
from common.errors import FinanceError, InvalidArgument

from .report import TypstReportRenderer
from .service import build_monthly_report, summarize_worked_hours


def run(args):
    store = open_store(args.data)
    today = date.today()
    year = args.year or today.year
    month = args.month or today.month

    if args.command == 'summary':
        print(dump(summarize_worked_hours(store.list_clients(), store.list_worked_hours(), year, month)))
        return

    client = store.get_client(args.client)
    if client is None:
        raise InvalidArgument(f'Client {args.client} not found', 'client')

    report = build_monthly_report(client, store.list_worked_hours(client.id), year, month)
    if args.pdf is None:
        print(dump(report))
        return

    config = get_config()
    renderer = TypstReportRenderer(
        templates_dir=config.report.templates_dir,
        fonts_dir=config.report.fonts_dir,
        typst_binary=config.report.typst_binary,
        normalize_currency_symbol=config.report.normalize_currency_symbol,
    )
    args.pdf.write_bytes(renderer.render(report, config.settings.currency_symbol, config.settings.currency))
    print(f'✅ {args.pdf} ({report.totals.hours}h, {report.totals.amount})')


def main(argv=None):
    parser = argparse.ArgumentParser(description='Worked Hours')
    parser.add_argument('command', choices=['summary', 'report'])
    parser.add_argument('--client', type=int, help='Client ID (for report)')
    parser.add_argument('--year', type=int, help='Year (default: current)')
    parser.add_argument('--month', type=int, help='Month (default: current)')
    parser.add_argument('--pdf', type=Path, help='Write the report as PDF to this path')
    parser.add_argument('--data', help='YAML data file (default: from config)')
    parser.add_argument('--verbose', '-v', action='store_true')
    args = parser.parse_args(argv)

    if args.command == 'report' and args.client is None:
        parser.error('report requires --client')

    setup_logging(args.verbose)
    try:
        run(args)
    except FinanceError as e:
        fail(e)


if __name__ == '__main__':
    main()
