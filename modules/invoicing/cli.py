"""Invoice CLI."""
import argparse
from datetime import date

from common.cli import dump, fail, open_store, setup_logging
from common.config import get_config
from common.errors import FinanceError
from common.models import InvoiceStatus

from .service import build_invoice, mark_overdue


def run(args):
    if args.command == 'new':
        return build_invoice(
            invoice_id=0,
            amount=args.amount,
            tax_rate=args.tax_rate,
            issue_date=args.issue_date or date.today(),
            due_date=args.due_date,
            invoice_number=args.number,
            client_name=args.client,
            settings=get_config().settings,
        )

    invoices, _ = mark_overdue(open_store(args.data).list_invoices(), date.today())
    if args.command == 'overdue':
        return [i for i in invoices if i.status is InvoiceStatus.OVERDUE]
    if args.status:
        return [i for i in invoices if i.status.value == args.status]
    return invoices


def main(argv=None):
    parser = argparse.ArgumentParser(description='Invoice Management')
    parser.add_argument('command', choices=['new', 'list', 'overdue'])
    parser.add_argument('--amount', type=float, help='Pre-tax amount (for new)')
    parser.add_argument('--tax-rate', type=float, help='VAT rate (default: settings.default_vat_rate)')
    parser.add_argument('--issue-date', help='YYYY-MM-DD (default: today)')
    parser.add_argument('--due-date', help='YYYY-MM-DD')
    parser.add_argument('--number', help='Invoice number')
    parser.add_argument('--client', help='Client name')
    parser.add_argument('--status', choices=[s.value for s in InvoiceStatus], help='Filter for list')
    parser.add_argument('--data', help='YAML data file (default: from config)')
    parser.add_argument('--verbose', '-v', action='store_true')
    args = parser.parse_args(argv)

    if args.command == 'new' and (args.amount is None or args.due_date is None):
        parser.error('new requires --amount and --due-date')

    setup_logging(args.verbose)
    try:
        result = run(args)
    except FinanceError as e:
        fail(e)
    print(dump(result))


if __name__ == '__main__':
    main()
