"""
Splitshare - Bill splitting between friends

python3 main.py                          # Interactive CLI mode
python3 main.py bill.json                # Show the split of a saved bill
python3 main.py bill.json --export       # Show the split and export the analysis
python3 main.py --report a.json b.json   # Spending report over several bills
python3 main.py --help                   # Show help
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from bill_form import parse_bill, parse_bills, read_bill_file
from cli_interface import SplitshareCLI, export_bill, print_report, print_split
from config import CURRENCY_DEFAULT, LOG_LEVEL
from exceptions import FormValidationError, SplitError

__version__ = "1.0"

logger = logging.getLogger(__name__)


def quick_process(bill_path: str, currency: str = None, export: bool = False) -> int:
    """Quick processing mode - just show results"""
    print(f"🚀 Splitting: {bill_path}")

    try:
        form = read_bill_file(bill_path)
        if currency and isinstance(form, dict) and not form.get('currency'):
            form['currency'] = currency
        bill = parse_bill(form)
    except FormValidationError as e:
        print(f"⚠ {e}")
        return 1

    print_split(bill)

    if export:
        path = export_bill(bill)
        print(f"\n✅ Bill exported to {path}")
    return 0


def report_process(bill_paths: List[str], currency: str = CURRENCY_DEFAULT, person: str = None) -> int:
    """Spending report over several bill files"""
    forms = []
    for bill_path in bill_paths:
        if not Path(bill_path).is_file():
            print(f"❌ File not found: {bill_path}")
            return 1
        try:
            forms.append(read_bill_file(bill_path))
        except FormValidationError as e:
            print(f"❌ {bill_path}: {e}")
            return 1

    try:
        bills = parse_bills(forms)
    except FormValidationError as e:
        print(f"⚠ {e}")
        return 1

    print_report(bills, person, currency)
    return 0


def main(argv=None) -> int:
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='Splitshare - Bill splitting between friends',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                     # Interactive mode
  python main.py dinner.json         # Split a saved bill
  python main.py dinner.json --export
  python main.py --report dinner.json cabin.json --person me
        """
    )

    parser.add_argument(
        'bill',
        nargs='?',
        help='Bill JSON file to split'
    )
    parser.add_argument(
        '--currency',
        default=CURRENCY_DEFAULT,
        help=f'Currency for new bills (default: {CURRENCY_DEFAULT})'
    )
    parser.add_argument(
        '--export',
        action='store_true',
        help='Export the split analysis of the bill file to JSON'
    )
    parser.add_argument(
        '--report',
        nargs='+',
        metavar='BILL',
        help='Print spending by category and month over the given bill files'
    )
    parser.add_argument(
        '--person',
        help='Limit the report to the share of one person id'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug logging'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'Splitshare {__version__}'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.report:
            return report_process(args.report, args.currency.upper(), args.person)

        if args.bill:
            if not Path(args.bill).is_file():
                print(f"❌ File not found: {args.bill}")
                return 1
            return quick_process(args.bill, args.currency.upper(), args.export)

        cli = SplitshareCLI(currency=args.currency.upper())
        cli.run()
        return 0
    except KeyboardInterrupt:
        print("\n\n👋 Goodbye!")
        return 0
    except SplitError as e:
        logger.exception("Split failed")
        print(f"\n❌ An error occurred: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
