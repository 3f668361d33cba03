#!/usr/bin/env -S uv run --script

import sys
import glob
import argparse
from gstcalc.invoice_controller import compute, financials_as_json, report, config
from gstcalc.modules.formatting import format_currency


def process_file(path, args):
    """Unified handler for a single invoice file."""
    result = compute(str(path))
    if not result:
        print(f"Failed to compute {path} (see log)")
        return False
    if args.json:
        print(financials_as_json(result['financials']))
    else:
        print(result['text'])
    return True


def print_report(paths):
    summary = report(paths)
    print(f"Invoices:               {summary.invoice_count}")
    print(f"Total Paid Revenue:     {format_currency(summary.total_revenue)} ({summary.paid_count} paid)")
    print(f"Outstanding Receivables: {format_currency(summary.outstanding)} ({summary.outstanding_count} open)")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Compute GST breakdowns for invoice YAML files.")
    parser.add_argument("filenames", nargs="*", help="Invoice YAML files (default: every file in data/invoices)")
    parser.add_argument("--json", action="store_true", help="Print computed financials as JSON")
    parser.add_argument("--report", action="store_true", help="Print paid revenue and outstanding receivables")

    args = parser.parse_args()

    paths = args.filenames or sorted(glob.glob(str(config.invoices_dir / "*.yaml")))
    if not paths:
        print("No invoice files found.")
        sys.exit(1)

    if args.report:
        print_report(paths)
        sys.exit(0)

    failures = 0
    for path in paths:
        if not process_file(path, args):
            failures += 1
    sys.exit(1 if failures else 0)
