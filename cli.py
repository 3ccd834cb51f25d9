#!/usr/bin/env python3
"""Unified CLI for the Forfettario Backoffice.

Usage:
    python cli.py controlling --help
    python cli.py tax --help
    python cli.py timesheets --help
    python cli.py invoicing --help
"""
import sys
import argparse


def main():
    parser = argparse.ArgumentParser(
        description='Forfettario Backoffice',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modules:
  controlling   Dashboard summary, monthly estimate, charts
  tax           Annual revenue limit, monthly overview
  timesheets    Worked-hours summary and monthly report
  invoicing     Invoice derivation and status

Examples:
  python cli.py controlling summary --year 2024
  python cli.py tax overview --year 2024 --month 3 --target-salary 3000
  python cli.py timesheets report --client 1 --year 2024 --month 3 --pdf marzo.pdf
  python cli.py invoicing new --amount 1000 --issue-date 2024-03-01 --due-date 2024-03-31
"""
    )

    parser.add_argument(
        'module',
        choices=['controlling', 'tax', 'timesheets', 'invoicing'],
        help='Module to run'
    )

    # Parse just the module, pass rest to submodule
    args, remaining = parser.parse_known_args()

    # Dispatch to module CLI
    if args.module == 'controlling':
        from modules.controlling.cli import main as ctrl_main
        sys.argv = ['controlling'] + remaining
        ctrl_main()

    elif args.module == 'tax':
        from modules.tax.cli import main as tax_main
        sys.argv = ['tax'] + remaining
        tax_main()

    elif args.module == 'timesheets':
        from modules.timesheets.cli import main as ts_main
        sys.argv = ['timesheets'] + remaining
        ts_main()

    elif args.module == 'invoicing':
        from modules.invoicing.cli import main as inv_main
        sys.argv = ['invoicing'] + remaining
        inv_main()


if __name__ == '__main__':
    main()
