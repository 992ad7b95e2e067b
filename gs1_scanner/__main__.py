"""
CLI interface for the GS1 scan matcher.

Usage:
    python -m gs1_scanner "<barcode text>" [options]

Options:
    --master FILE         CSV/TSV catalog to match against
    --today DATE          Reference day for expiry classification
    --soon-days N         Days ahead still reported as "soon"
    --json                Output as JSON
    --human               Use human-readable field names in JSON output
    --log-level LEVEL     Logging level (default from GS1_SCANNER_LOG_LEVEL)
"""

import argparse
import sys
from typing import Optional

from .catalog_loader import load_master_file
from .core.extractor import parse_scan
from .formatters.json_formatter import format_scan_json
from .matching.matcher import match_product
from .matching.store import CatalogStore
from .scanner import ScanRecord
from .settings import configure_logging, load_settings, scan_options_from_settings
from .validators.dates import coerce_today

EXIT_OK = 0
EXIT_INVALID_SCAN = 1
EXIT_BAD_INPUT = 2


def format_record(record: ScanRecord, skipped_chars: int = 0) -> str:
    """Format a scan record for display."""
    lines = [
        "=" * 60,
        "GS1 Scan Result",
        "=" * 60,
        f"Raw Input: {record.raw_input!r}",
        f"Match Type: {record.match_type}",
    ]

    if record.error_message:
        lines.append(f"Error: {record.error_message}")

    lines.extend([
        "",
        "Fields:",
        "-" * 40,
        f"  GTIN-14: {record.gtin14}",
        f"  GTIN-13: {record.gtin13}",
        f"  Expiry: {record.expiry_display or '-'} ({record.expiry_status})",
        f"  Batch/Lot: {record.batch}",
        f"  Serial: {record.serial}",
        f"  Quantity: {record.quantity}",
        f"  Product: {record.product_name or 'Unknown product'}",
    ])

    if skipped_chars:
        lines.extend(["", f"Warning: decoder skipped {skipped_chars} character(s)"])

    return '\n'.join(lines)


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='gs1_scanner',
        description='Decode a GS1 barcode payload and match it to a product catalog'
    )

    parser.add_argument(
        'barcode',
        help='Barcode data to parse'
    )

    parser.add_argument(
        '--master',
        default=None,
        help='CSV/TSV master catalog with GTIN and name columns'
    )

    parser.add_argument(
        '--today',
        default=None,
        help='Reference date for expiry status (default: local today)'
    )

    parser.add_argument(
        '--soon-days',
        type=int,
        default=None,
        help='Days ahead still classified as expiring soon'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Output result as JSON'
    )

    parser.add_argument(
        '--human',
        action='store_true',
        help='Use human-readable field names in JSON output'
    )

    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level (DEBUG, INFO, WARNING, ...)'
    )

    args = parser.parse_args(argv)

    try:
        settings = load_settings({
            "soon_threshold_days": args.soon_days,
            "log_level": args.log_level,
        })
        configure_logging(settings["log_level"])
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT
    options = scan_options_from_settings(settings)

    store = CatalogStore()
    if args.master:
        try:
            store.load(load_master_file(args.master, min_digits=settings["min_gtin_digits"]))
        except (OSError, ValueError) as exc:
            print(f"Cannot read master file {args.master}: {exc}", file=sys.stderr)
            return EXIT_BAD_INPUT

    try:
        today = coerce_today(args.today)
    except (ValueError, OverflowError) as exc:
        print(f"Invalid --today value {args.today!r}: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    scan = parse_scan(args.barcode, today=today, options=options)

    match = match_product(scan, store.snapshot())
    record = ScanRecord.from_results(scan, match)

    if args.json:
        print(format_scan_json(record, human_readable=args.human))
    else:
        print(format_record(record, skipped_chars=scan.skipped_chars))

    return EXIT_OK if scan.valid else EXIT_INVALID_SCAN


if __name__ == '__main__':
    sys.exit(main())
