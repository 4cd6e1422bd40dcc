#!/usr/bin/env python3
"""
Earnings Trade Schedule

Converts backtest scanner results (one row per symbol + strategy) into
recommended entry and exit dates around each symbol's next earnings report,
filters the rows, optionally keeps only the best strategy per symbol, and
writes the schedule.

Usage:
    # Every strategy for every symbol, printed as a table
    python main.py scan.csv

    # Best post-earnings strategy per symbol, May earnings only, as CSV
    python main.py scan.csv --post --start 2024-05-01 --end 2024-05-31 -o schedule.csv

    # Selected strategies plus the raw resolved set for other tools
    python main.py scan.csv -s call_3d_preearnings call_7d_preearnings --save-raw raw.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from config import SCHEDULE_CONFIG
from earnings.calendar import parse_date
from earnings.scanner import read_scanner_csv
from reliability.exceptions import BaseScheduleException, InputOutputError
from trading.catalog import STRATEGY_IDS, StrategyCatalog
from trading.filters import build_criteria, resolve_selection_mode
from trading.pipeline import build_schedule
from trading.report import REPORT_FORMATS, infer_format, render_report, save_raw, write_report
from utils.logging_setup import disable_noisy_loggers, setup_logging

logger = logging.getLogger("earnings_schedule")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="earnings-schedule",
        description="Turn backtest scanner rows into earnings trade entry/exit dates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Selection mode:
    Without --all/--best the mode follows the class flag:
    --post selects the best strategy per symbol, --pre or no class flag
    keeps every strategy.

Examples:
    earnings-schedule scan.csv --pre
    earnings-schedule scan.csv --post --start 2024-05-01 -o schedule.csv
    earnings-schedule scan.csv -s long_call_post_earnings --all --format json
        """
    )

    parser.add_argument("input", type=Path, help="Scanner CSV export")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--all", action="store_true", help="Emit every qualifying strategy")
    mode.add_argument("--best", action="store_true", help="Emit only the best strategy per symbol")

    klass = parser.add_mutually_exclusive_group()
    klass.add_argument("--pre", action="store_true", help="Pre-earnings strategies only")
    klass.add_argument("--post", action="store_true", help="Post-earnings strategies only")

    parser.add_argument(
        "-s", "--strategy",
        dest="strategies",
        action="extend",
        nargs="+",
        choices=STRATEGY_IDS,
        metavar="ID",
        help="Strategy ids to include (repeatable; overrides --pre/--post)"
    )
    parser.add_argument("--start", help="First earnings date to include (YYYY-MM-DD)")
    parser.add_argument("--end", help="Last earnings date to include (YYYY-MM-DD)")

    parser.add_argument("-o", "--output", type=Path, help="Report path (default: stdout)")
    parser.add_argument(
        "-f", "--format",
        choices=REPORT_FORMATS,
        help="Report format (default: from --output suffix, else table)"
    )
    parser.add_argument("--save-raw", type=Path, help="Also save resolved trades before aggregation (.json or .parquet)")

    parser.add_argument("--catalog", type=Path, help="YAML file overriding strategy offsets")
    parser.add_argument(
        "--roll-weekends",
        action="store_true",
        default=SCHEDULE_CONFIG["roll_weekends"],
        help="Move weekend entry/exit dates to the nearest trading day"
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Warnings and errors only")
    parser.add_argument("--log-file", help="Also log to this file under the logs directory")

    return parser


def run(args: argparse.Namespace) -> int:
    mode = resolve_selection_mode(args.all, args.best, args.pre, args.post)

    start = parse_date(args.start, "--start") if args.start else None
    end = parse_date(args.end, "--end") if args.end else None

    catalog = StrategyCatalog.from_yaml(args.catalog) if args.catalog else StrategyCatalog.default()
    criteria = build_criteria(catalog, args.strategies, args.pre, args.post, start, end)
    format_type = infer_format(args.output, args.format)

    logger.info(f"📊 Building {mode.value} schedule from {args.input}")

    records = read_scanner_csv(args.input)
    result = build_schedule(records, catalog, criteria, mode, roll_weekends=args.roll_weekends)

    # Render everything before writing anything
    report = render_report(result.trades, format_type)

    if args.save_raw:
        save_raw(result.resolved, args.save_raw)
    try:
        write_report(report, args.output)
    except InputOutputError:
        # A failed run leaves no raw dump behind
        if args.save_raw:
            args.save_raw.unlink(missing_ok=True)
        raise

    if not result.trades:
        logger.warning("No trades matched the filters")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = "DEBUG" if args.verbose else "WARNING" if args.quiet else "INFO"
    setup_logging(level=level, enable_file_logging=bool(args.log_file), log_filename=args.log_file)
    disable_noisy_loggers()

    try:
        return run(args)
    except BaseScheduleException as e:
        logger.debug(f"Schedule failed: {e.to_dict()}")
        print(f"error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
