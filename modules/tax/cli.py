"""Tax CLI."""
import argparse

from common.cli import dump, fail, open_store, setup_logging
from common.config import get_config
from common.errors import FinanceError

from .service import TaxService


def run(args):
    store = open_store(args.data)
    service = TaxService()

    if args.command == 'limit':
        return service.get_annual_revenue_limit(store.list_invoices(), args.year)

    overrides = {
        'target_salary': args.target_salary,
        'taxable_percentage': args.taxable_percentage,
        'income_tax_rate': args.income_tax_rate,
        'health_insurance_rate': args.health_insurance_rate,
    }
    settings = get_config().settings.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )
    return service.overview_from_settings(
        store.list_invoices(), store.list_expenses(), settings, args.year, args.month,
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description='Regime forfettario projections')
    parser.add_argument('command', choices=['limit', 'overview'])
    parser.add_argument('--year', type=int, help='Year (default: current)')
    parser.add_argument('--month', type=int, help='Month, for overview (default: current)')
    parser.add_argument('--target-salary', type=float, help='Overrides settings.target_salary')
    parser.add_argument('--taxable-percentage', type=float)
    parser.add_argument('--income-tax-rate', type=float)
    parser.add_argument('--health-insurance-rate', type=float)
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
