#!/usr/bin/env python3
"""
Schedule Resolver

Turns one scanner row into a concrete trade schedule: the catalog supplies
the strategy class and day offsets, the row supplies the earnings anchor.
Resolution is a pure function of the row, the catalog and the weekend-roll
setting.
"""

import logging
from dataclasses import asdict, dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, Optional

from earnings.calendar import roll_to_trading_day
from earnings.scanner import InputRecord
from reliability.exceptions import CatalogInvariantViolation, MissingEarningsResult
from trading.catalog import StrategyCatalog, StrategyClass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduledTrade:
    """Resolved entry/exit dates plus the performance stats used for ranking."""
    symbol: str
    strategy: str
    strategy_class: StrategyClass
    entry_date: date
    exit_date: date
    next_earnings: date
    prev_earnings_result: Optional[str]
    wins: int
    losses: int
    win_rate: Decimal
    avg_trade_return: Decimal
    total_return: Decimal
    backtest_length: int
    best: bool = False

    @property
    def holding_days(self) -> int:
        return (self.exit_date - self.entry_date).days

    def to_dict(self) -> Dict[str, Any]:
        """Flat key/value view; dates as ISO strings, decimals as strings."""
        result = asdict(self)
        result["strategy_class"] = self.strategy_class.value
        for key, value in result.items():
            if isinstance(value, date):
                result[key] = value.isoformat()
            elif isinstance(value, Decimal):
                result[key] = str(value)
        return result


class ScheduleResolver:
    """Resolves scanner rows against a strategy catalog."""

    def __init__(self, catalog: StrategyCatalog, roll_weekends: bool = False):
        self.catalog = catalog
        self.roll_weekends = roll_weekends

    def resolve(self, record: InputRecord) -> ScheduledTrade:
        """
        Compute entry and exit dates for a scanner row.

        Raises:
            UnknownStrategy: strategy id not in the catalog
            MissingEarningsResult: post-earnings row without prev_earnings_result
            CatalogInvariantViolation: the definition places entry after exit
        """
        definition = self.catalog.lookup(record.strategy, line_number=record.line_number)

        if definition.requires_earnings_result and record.prev_earnings_result is None:
            raise MissingEarningsResult(record.symbol, record.strategy, line_number=record.line_number)

        anchor = record.next_earnings
        entry_date = anchor + timedelta(days=definition.entry_offset_days)
        exit_date = anchor + timedelta(days=definition.exit_offset_days)

        if self.roll_weekends:
            # Pre-earnings legs must stay ahead of the event, post-earnings legs after it
            forward = definition.strategy_class is StrategyClass.POST_EARNINGS
            entry_date = roll_to_trading_day(entry_date, forward)
            exit_date = roll_to_trading_day(exit_date, forward)

        if entry_date > exit_date:
            raise CatalogInvariantViolation(record.strategy, entry_date, exit_date)

        logger.debug(
            f"{record.symbol} {record.strategy}: earnings {anchor} -> entry {entry_date}, exit {exit_date}"
        )

        return ScheduledTrade(
            symbol=record.symbol,
            strategy=record.strategy,
            strategy_class=definition.strategy_class,
            entry_date=entry_date,
            exit_date=exit_date,
            next_earnings=anchor,
            prev_earnings_result=record.prev_earnings_result,
            wins=record.wins,
            losses=record.losses,
            win_rate=record.win_rate,
            avg_trade_return=record.avg_trade_return,
            total_return=record.total_return,
            backtest_length=record.backtest_length,
        )


def resolve(record: InputRecord, catalog: StrategyCatalog, roll_weekends: bool = False) -> ScheduledTrade:
    """Functional shortcut for ``ScheduleResolver(catalog).resolve(record)``."""
    return ScheduleResolver(catalog, roll_weekends=roll_weekends).resolve(record)
