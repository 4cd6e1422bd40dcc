#!/usr/bin/env python3
"""
Trade Schedule Report

Renders the aggregated trade schedule as a text table, CSV or JSON, and
writes the raw (pre-aggregation) trade set for downstream tooling as JSON
records or Parquet.

Rendering and writing are separate steps so nothing touches disk until the
whole run has succeeded.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

import pandas as pd

from config import SCHEDULE_CONFIG
from reliability.exceptions import InputOutputError, UsageError
from trading.resolver import ScheduledTrade

logger = logging.getLogger(__name__)

REPORT_FORMATS = ("table", "csv", "json")

REPORT_COLUMNS = [
    "symbol", "strategy", "strategy_class", "entry_date", "exit_date", "next_earnings",
    "prev_earnings_result", "wins", "losses", "win_rate", "avg_trade_return",
    "total_return", "backtest_length", "best",
]

TABLE_COLUMNS = {
    "best": "",
    "symbol": "Symbol",
    "strategy": "Strategy",
    "entry_date": "Entry",
    "exit_date": "Exit",
    "next_earnings": "Earnings",
    "win_rate": "Win Rate",
    "avg_trade_return": "Avg Return",
    "total_return": "Total Return",
    "backtest_length": "Trades",
}


def infer_format(output: Optional[Path], explicit: Optional[str] = None) -> str:
    """Explicit --format wins; otherwise the --output suffix decides."""
    if explicit:
        if explicit not in REPORT_FORMATS:
            raise UsageError(f"unsupported format {explicit!r}; choose from {', '.join(REPORT_FORMATS)}")
        return explicit
    if output is not None:
        return SCHEDULE_CONFIG["suffix_formats"].get(output.suffix.lower(), SCHEDULE_CONFIG["default_format"])
    return SCHEDULE_CONFIG["default_format"]


def trades_to_frame(trades: Sequence[ScheduledTrade]) -> pd.DataFrame:
    """Flat DataFrame of trades; dates ISO, decimals as exact strings."""
    return pd.DataFrame([t.to_dict() for t in trades], columns=REPORT_COLUMNS)


def _render_table(trades: Sequence[ScheduledTrade]) -> str:
    if not trades:
        return "No trades matched.\n"

    df = trades_to_frame(trades)[list(TABLE_COLUMNS)].copy()
    df["best"] = df["best"].map(lambda flag: "*" if flag else "")
    df = df.rename(columns=TABLE_COLUMNS)
    return df.to_string(index=False) + "\n"


def render_report(trades: Sequence[ScheduledTrade], format_type: str = "table") -> str:
    """Render the final ordered trades in the requested format."""
    if format_type == "table":
        return _render_table(trades)
    if format_type == "csv":
        return trades_to_frame(trades).to_csv(index=False)
    if format_type == "json":
        records = [t.to_dict() for t in trades]
        return json.dumps(records, indent=SCHEDULE_CONFIG["raw_json_indent"]) + "\n"
    raise UsageError(f"unsupported format {format_type!r}")


def write_report(text: str, output: Optional[Path] = None, stream: Optional[TextIO] = None) -> None:
    """Write a rendered report to ``output``, or to ``stream`` (stdout) when no path is given."""
    if output is None:
        (stream or sys.stdout).write(text)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
    except OSError as e:
        raise InputOutputError(output, e.strerror or str(e)) from e

    logger.info(f"Report written to {output}")


def save_raw(trades: Sequence[ScheduledTrade], path: Path) -> None:
    """
    Persist the fully resolved, pre-aggregation trade set.

    ``.parquet`` paths are written with pyarrow; anything else gets a JSON
    array of key/value records.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() == ".parquet":
            trades_to_frame(trades).to_parquet(path, engine="pyarrow", index=False)
        else:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump([t.to_dict() for t in trades], f, indent=SCHEDULE_CONFIG["raw_json_indent"])
                f.write("\n")
    except OSError as e:
        raise InputOutputError(path, e.strerror or str(e)) from e

    logger.info(f"Saved {len(trades)} raw trades to {path}")
