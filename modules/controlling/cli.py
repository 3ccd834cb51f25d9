"""Controlling CLI."""
import argparse

from common.cli import dump, fail, open_store, setup_logging
from common.errors import FinanceError
from modules.invoicing.service import mark_overdue

from .charts import build_category_pie, build_income_expense_series
from .service import ControllingService


def run(args):
    store = open_store(args.data)
    service = ControllingService()

    if args.command == 'summary':
        invoices, _ = mark_overdue(store.list_invoices(), service.clock())
        return service.get_dashboard_summary(
            invoices, store.list_expenses(), store.list_categories(), args.year,
        )
    if args.command == 'estimate':
        return service.get_monthly_estimate(store.list_invoices(), store.list_expenses())
    if args.command == 'chart':
        return build_income_expense_series(
            store.list_invoices(), store.list_expenses(),
            months=args.months, year=args.year, today=service.clock(),
        )
    return build_category_pie(store.list_expenses(), store.list_categories(), args.year)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Financial Controlling')
    parser.add_argument('command', choices=['summary', 'estimate', 'chart', 'categories'])
    parser.add_argument('--year', type=int, help='Year')
    parser.add_argument('--months', type=int, default=6, help='Chart window in months')
    parser.add_argument('--data', help='YAML data file (default: from config)')
    parser.add_argument('--verbose', '-v', action='store_true')
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    try:
        result = run(args)
    except FinanceError as e:
        fail(e)
    print(dump(result))


if __name__ == '__main__':
    main()
