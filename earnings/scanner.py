#!/usr/bin/env python3
"""
Backtest Scanner Reader

Reads the backtest scanner export: one row per symbol + strategy combination
with the historical performance of that strategy around earnings, the next
earnings date and the outcome of the previous report.

Expected columns (header optional, order fixed):
    symbol,wins,losses,win_rate,avg_trade_return,total_return,
    backtest_length,next_earnings,prev_earnings_result,strategy

Performance figures are kept as ``Decimal`` so ranking never ties or flips on
binary rounding. ``win_rate`` is trusted as exported; a value that drifts from
wins / (wins + losses) by more than ``WIN_RATE_TOLERANCE`` is logged, not
rewritten.

Usage:
    from earnings.scanner import read_scanner_csv

    records = read_scanner_csv(Path("scan.csv"))
"""

import csv
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, List, Optional

from config import INPUT_COLUMNS, WIN_RATE_TOLERANCE
from earnings.calendar import parse_date
from reliability.exceptions import InputOutputError, SchemaError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InputRecord:
    """One row of scanner output."""
    symbol: str
    wins: int
    losses: int
    win_rate: Decimal
    avg_trade_return: Decimal
    total_return: Decimal
    backtest_length: int
    next_earnings: date
    prev_earnings_result: Optional[str]
    strategy: str
    line_number: Optional[int] = None

    @property
    def computed_win_rate(self) -> Optional[Decimal]:
        """wins / (wins + losses), or None when no trades were observed."""
        trades = self.wins + self.losses
        if trades == 0:
            return None
        return Decimal(self.wins) / Decimal(trades)


def _parse_count(value: str, column: str, line_number: int) -> int:
    text = value.strip()
    # isdigit() also accepts superscripts and other digits int() rejects
    if not (text.isascii() and text.isdigit()):
        raise SchemaError(f"{column} must be a non-negative integer, got {value!r}", line_number)
    return int(text)


def _parse_decimal(value: str, column: str, line_number: int) -> Decimal:
    try:
        number = Decimal(value.strip())
    except InvalidOperation:
        raise SchemaError(f"{column} must be a decimal number, got {value!r}", line_number) from None
    if not number.is_finite():
        raise SchemaError(f"{column} must be finite, got {value!r}", line_number)
    return number


def _is_header(fields: List[str]) -> bool:
    return bool(fields) and fields[0].strip().lower() == INPUT_COLUMNS[0]


def parse_record(fields: List[str], line_number: int) -> InputRecord:
    """Convert one CSV row into an InputRecord, raising SchemaError on bad shape."""
    if len(fields) != len(INPUT_COLUMNS):
        raise SchemaError(
            f"expected {len(INPUT_COLUMNS)} columns ({','.join(INPUT_COLUMNS)}), got {len(fields)}",
            line_number,
        )

    row = dict(zip(INPUT_COLUMNS, fields))

    symbol = row["symbol"].strip().upper()
    if not symbol:
        raise SchemaError("symbol must not be empty", line_number)

    win_rate = _parse_decimal(row["win_rate"], "win_rate", line_number)
    if not Decimal(0) <= win_rate <= Decimal(1):
        raise SchemaError(f"win_rate must be a fraction in [0, 1], got {row['win_rate']!r}", line_number)

    strategy = row["strategy"].strip()
    if not strategy:
        raise SchemaError("strategy must not be empty", line_number)

    prev_result = row["prev_earnings_result"].strip() or None

    return InputRecord(
        symbol=symbol,
        wins=_parse_count(row["wins"], "wins", line_number),
        losses=_parse_count(row["losses"], "losses", line_number),
        win_rate=win_rate,
        avg_trade_return=_parse_decimal(row["avg_trade_return"], "avg_trade_return", line_number),
        total_return=_parse_decimal(row["total_return"], "total_return", line_number),
        backtest_length=_parse_count(row["backtest_length"], "backtest_length", line_number),
        next_earnings=parse_date(row["next_earnings"], "next_earnings", line_number),
        prev_earnings_result=prev_result,
        strategy=strategy,
        line_number=line_number,
    )


def _check_win_rate(record: InputRecord) -> None:
    computed = record.computed_win_rate
    if computed is None:
        return
    if abs(computed - record.win_rate) > WIN_RATE_TOLERANCE:
        logger.warning(
            f"line {record.line_number}: {record.symbol} {record.strategy} win_rate "
            f"{record.win_rate} differs from wins/(wins+losses) {computed:.4f}; keeping exported value"
        )


def read_scanner_rows(lines: Iterable[str]) -> List[InputRecord]:
    """
    Parse scanner rows from any iterable of text lines.

    A first row whose first field is ``symbol`` is treated as a header and must
    match the expected column list exactly. Blank lines are skipped.
    """
    reader = csv.reader(lines)
    records = []
    first_row = True

    while True:
        try:
            fields = next(reader)
        except StopIteration:
            break
        except csv.Error as e:
            raise SchemaError(f"malformed CSV: {e}", reader.line_num) from e

        line_number = reader.line_num
        if not fields or all(not f.strip() for f in fields):
            continue

        if first_row:
            first_row = False
            if _is_header(fields):
                header = tuple(f.strip().lower() for f in fields)
                if header != INPUT_COLUMNS:
                    raise SchemaError(
                        f"header {','.join(header)} does not match expected {','.join(INPUT_COLUMNS)}",
                        line_number,
                    )
                continue

        record = parse_record(fields, line_number)
        _check_win_rate(record)
        records.append(record)

    return records


def read_scanner_csv(path: Path) -> List[InputRecord]:
    """Read and parse a scanner export file."""
    try:
        # utf-8-sig drops the byte order mark spreadsheet exports prepend
        with open(path, 'r', newline='', encoding='utf-8-sig') as f:
            records = read_scanner_rows(f)
    except OSError as e:
        raise InputOutputError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise InputOutputError(path, f"not valid UTF-8 text (byte {e.object[e.start:e.end]!r})") from e

    logger.info(f"Read {len(records)} scanner rows from {path}")
    return records
