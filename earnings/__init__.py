"""
Earnings Scanner Module

Reads backtest scanner exports and provides the trading-day helpers used to
anchor schedules on earnings dates.
"""

from .scanner import (
    InputRecord,
    parse_record,
    read_scanner_csv,
    read_scanner_rows
)
from .calendar import (
    parse_date,
    closest_trading_day,
    next_trading_day,
    prev_trading_day,
    roll_to_trading_day
)

__all__ = [
    'InputRecord',
    'parse_record',
    'read_scanner_csv',
    'read_scanner_rows',
    'parse_date',
    'closest_trading_day',
    'next_trading_day',
    'prev_trading_day',
    'roll_to_trading_day'
]
