#!/usr/bin/env python3
"""
Trade Schedule Pipeline

Single-pass wiring of the schedule stages:

    scanner rows -> strategy/class filter -> date-range filter
                 -> resolver -> aggregator

The date range bounds the earnings anchor, which is known before resolution,
so out-of-range rows are dropped without being resolved. Any error aborts
the run; an empty result is not an error.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from earnings.scanner import InputRecord
from trading.aggregator import SelectionMode, aggregate
from trading.catalog import StrategyCatalog
from trading.filters import FilterCriteria
from trading.resolver import ScheduledTrade, ScheduleResolver

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Outcome of one schedule run."""
    mode: SelectionMode
    trades: List[ScheduledTrade] = field(default_factory=list)
    resolved: List[ScheduledTrade] = field(default_factory=list)
    rows_read: int = 0
    rows_after_strategy_filter: int = 0
    rows_after_date_filter: int = 0

    @property
    def symbols(self) -> int:
        return len({t.symbol for t in self.trades})

    def summary(self) -> str:
        return (
            f"{self.rows_read} rows read, {self.rows_after_strategy_filter} after strategy filter, "
            f"{self.rows_after_date_filter} in date range, {len(self.resolved)} resolved, "
            f"{len(self.trades)} trades for {self.symbols} symbols ({self.mode.value})"
        )


def build_schedule(records: Sequence[InputRecord],
                   catalog: StrategyCatalog,
                   criteria: FilterCriteria,
                   mode: SelectionMode,
                   roll_weekends: bool = False) -> PipelineResult:
    """Filter, resolve and aggregate scanner rows into the final trade list."""
    resolver = ScheduleResolver(catalog, roll_weekends=roll_weekends)
    result = PipelineResult(mode=mode, rows_read=len(records))

    in_strategy = []
    for record in records:
        # lookup raises UnknownStrategy for every row, filtered or not
        definition = catalog.lookup(record.strategy, line_number=record.line_number)
        if criteria.matches_strategy(record.strategy, definition.strategy_class):
            in_strategy.append(record)
        else:
            logger.debug(f"line {record.line_number}: {record.symbol} {record.strategy} excluded by strategy filter")
    result.rows_after_strategy_filter = len(in_strategy)

    in_range = []
    for record in in_strategy:
        if criteria.matches_date(record.next_earnings):
            in_range.append(record)
        else:
            logger.debug(f"line {record.line_number}: {record.symbol} earnings {record.next_earnings} out of range")
    result.rows_after_date_filter = len(in_range)

    result.resolved = [resolver.resolve(record) for record in in_range]
    result.trades = aggregate(result.resolved, mode)

    logger.info(result.summary())
    return result
